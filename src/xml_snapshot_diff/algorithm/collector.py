"""Difference collection: turns the visit state of a tree into trace entries.

Must run once per tree after matching, first tree first, so that nodes
present only in the first tree and nodes present only in the second tree
are both reported:

- ``MATCHED_DEEP``: skipped, the subtree is proven equal (or excluded).
- ``MATCHED_SHALLOW`` with a recorded difference: one entry with both
  sides' values.  The children are not examined: the matcher already
  localized the mismatch at this node.
- ``MATCHED_SHALLOW`` without a difference: the children are examined.
- ``UNVISITED``: one presence entry.  Values always read "first file vs
  second file": ``("YES", "NO")`` for the first tree, ``("NO", "YES")`` when
  ``reversed_sides`` marks the walk over the second tree.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from xml_snapshot_diff.tree.nodes import NodeState, XmlNode

if TYPE_CHECKING:
    from xml_snapshot_diff.context import TreeView
    from xml_snapshot_diff.result import DifferenceTrace

__all__ = ["collect_differences"]

PRESENT = "YES"
ABSENT = "NO"


def collect_differences(
    view: TreeView, trace: DifferenceTrace, reversed_sides: bool = False
) -> None:
    """Append the differences recorded in ``view`` to ``trace``.

    Args:
        view:           The matched tree to walk.
        trace:          Trace receiving the entries (mutated in place).
        reversed_sides: False for the first tree of the comparison, True for
                        the second one.
    """
    _collect((view.root,), view, trace, reversed_sides, prefix="")


def _collect(
    nodes: Iterable[XmlNode],
    view: TreeView,
    trace: DifferenceTrace,
    reversed_sides: bool,
    prefix: str,
) -> None:
    for node in nodes:
        state = view.state.state(node)
        if state is NodeState.MATCHED_DEEP:
            continue

        full_signature = prefix + view.fingerprints.signature(node)

        if state is NodeState.UNVISITED:
            this_value, that_value = (
                (ABSENT, PRESENT) if reversed_sides else (PRESENT, ABSENT)
            )
            trace.add_difference(
                f"Presence of XML node {full_signature}", this_value, that_value
            )
            continue

        difference = view.state.difference(node)
        if difference is not None:
            trace.add_difference(
                difference.description, difference.this_value, difference.that_value
            )
        else:
            _collect(node.children, view, trace, reversed_sides, full_signature)
