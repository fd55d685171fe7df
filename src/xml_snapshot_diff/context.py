"""TreeView and ComparisonContext: the state of one file-pair comparison.

A ``ComparisonContext`` ties together the two parsed trees, the skip rules
of both sides and the accumulating ``DifferenceTrace``.  It is owned by a
single compare call and must not be shared between comparisons.  The
parsed trees themselves are immutable and may be reused freely: each
context creates fresh ``VisitState`` tables for them.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from xml_snapshot_diff.algorithm.config import MatcherConfig
from xml_snapshot_diff.algorithm.fingerprint import Fingerprinter
from xml_snapshot_diff.algorithm.state import VisitState
from xml_snapshot_diff.result import DifferenceTrace
from xml_snapshot_diff.tree.nodes import XmlNode

if TYPE_CHECKING:
    from xml_snapshot_diff.rules import SkipRule

__all__ = ["ComparisonContext", "TreeView"]


@dataclass(slots=True)
class TreeView:
    """A parsed tree together with its per-comparison state."""

    root: XmlNode
    state: VisitState
    fingerprints: Fingerprinter

    @classmethod
    def create(cls, root: XmlNode, config: MatcherConfig | None = None) -> TreeView:
        state = VisitState()
        return cls(root=root, state=state, fingerprints=Fingerprinter(state, config))


@dataclass(slots=True)
class ComparisonContext:
    """Everything one file-pair comparison reads and writes.

    Attributes:
        first:        View of the first ("this") tree.
        second:       View of the second ("that") tree.
        first_rules:  Skip rules configured for the first snapshot.
        second_rules: Skip rules configured for the second snapshot.
        trace:        Accumulating difference trace.
    """

    first: TreeView
    second: TreeView
    first_rules: Sequence[SkipRule] = ()
    second_rules: Sequence[SkipRule] = ()
    trace: DifferenceTrace = field(default_factory=DifferenceTrace)

    @classmethod
    def create(
        cls,
        first_root: XmlNode,
        second_root: XmlNode,
        first_rules: Sequence[SkipRule] = (),
        second_rules: Sequence[SkipRule] = (),
        config: MatcherConfig | None = None,
        trace: DifferenceTrace | None = None,
    ) -> ComparisonContext:
        return cls(
            first=TreeView.create(first_root, config),
            second=TreeView.create(second_root, config),
            first_rules=tuple(first_rules),
            second_rules=tuple(second_rules),
            trace=trace if trace is not None else DifferenceTrace(),
        )
