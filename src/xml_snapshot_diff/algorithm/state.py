"""VisitState: per-tree comparison state kept outside the parsed nodes.

The parsed ``XmlNode`` tree is immutable.  Everything a comparison pass
learns about a node (its ``NodeState``, a recorded content mismatch, the
attributes excluded by skip rules, whether a skip rule suppressed it) lives
in a ``VisitState`` table keyed by the node's ``position``.  A fresh table is
created for every comparison, so nothing leaks from one pass to the next.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from xml_snapshot_diff.tree.nodes import NodeState, XmlNode

__all__ = ["NodeDifference", "VisitState"]


@dataclass(frozen=True, slots=True)
class NodeDifference:
    """Content mismatch recorded on a node paired by signature."""

    description: str
    this_value: str
    that_value: str


@dataclass(slots=True)
class VisitState:
    """Mutable comparison state for the nodes of one tree.

    All lookups default to "nothing recorded": an unknown position is
    ``UNVISITED``, has no difference, no excluded attributes and is not
    skipped.
    """

    _states: dict[tuple[int, ...], NodeState] = field(default_factory=dict)
    _differences: dict[tuple[int, ...], NodeDifference] = field(default_factory=dict)
    _excluded: dict[tuple[int, ...], frozenset[str]] = field(default_factory=dict)
    _skipped: set[tuple[int, ...]] = field(default_factory=set)

    # ------------------------------------------------------------------
    # Node state
    # ------------------------------------------------------------------

    def state(self, node: XmlNode) -> NodeState:
        return self._states.get(node.position, NodeState.UNVISITED)

    def is_unvisited(self, node: XmlNode) -> bool:
        return self.state(node) is NodeState.UNVISITED

    def advance(self, node: XmlNode, state: NodeState) -> None:
        """Move ``node`` to ``state``; moving backwards is a no-op."""
        if state.rank > self.state(node).rank:
            self._states[node.position] = state

    def mark_shallow(self, node: XmlNode) -> None:
        self.advance(node, NodeState.MATCHED_SHALLOW)

    def mark_deep(self, node: XmlNode) -> None:
        self.advance(node, NodeState.MATCHED_DEEP)

    # ------------------------------------------------------------------
    # Recorded differences
    # ------------------------------------------------------------------

    def record_difference(self, node: XmlNode, difference: NodeDifference) -> None:
        self._differences[node.position] = difference

    def difference(self, node: XmlNode) -> NodeDifference | None:
        return self._differences.get(node.position)

    # ------------------------------------------------------------------
    # Skip rule effects
    # ------------------------------------------------------------------

    def skip(self, node: XmlNode) -> None:
        """Exclude ``node`` and its subtree from the comparison."""
        self._skipped.add(node.position)
        self.mark_deep(node)

    def is_skipped(self, node: XmlNode) -> bool:
        return node.position in self._skipped

    def exclude_attribute(self, node: XmlNode, name: str) -> None:
        current = self._excluded.get(node.position, frozenset())
        self._excluded[node.position] = current | {name.lower()}

    def excluded_attributes(self, node: XmlNode) -> frozenset[str]:
        """Lower-cased names of the attributes excluded on ``node``."""
        return self._excluded.get(node.position, frozenset())
