"""XmlNode dataclass and NodeState StrEnum for the parsed XML tree.

``XmlNode`` is immutable: the comparison progress of a node is kept outside
of it (see ``xml_snapshot_diff.algorithm.state.VisitState``), so one parsed
tree can be compared any number of times, from any number of threads.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto


class NodeState(StrEnum):
    """Matching progress of one node during one comparison pass.

    - UNVISITED        -> "unvisited"       : no counterpart found (yet)
    - MATCHED_SHALLOW  -> "matched_shallow" : paired by signature only
    - MATCHED_DEEP     -> "matched_deep"    : whole subtree proven equal (or skipped)

    Transitions only move forward in the order listed above.
    """

    UNVISITED = auto()
    MATCHED_SHALLOW = auto()
    MATCHED_DEEP = auto()

    @property
    def rank(self) -> int:
        return _RANKS[self]


_RANKS = {
    NodeState.UNVISITED: 0,
    NodeState.MATCHED_SHALLOW: 1,
    NodeState.MATCHED_DEEP: 2,
}


@dataclass(frozen=True, slots=True)
class XmlNode:
    """One XML element.

    Attributes:
        tag:        Element name.  Namespaced elements keep the lxml
                    ``{uri}local`` form.
        attributes: ``(name, value)`` pairs in document order.
        children:   Child elements in document order.
        text:       Character data directly inside the element (leading text
                    and the tails of the child elements), stripped and joined
                    with single spaces.
        position:   Child indexes leading from the root to this node.  The
                    root is ``()``.  Unique within one tree.
        line:       Source line reported by the parser, when known.
    """

    tag: str
    attributes: tuple[tuple[str, str], ...] = ()
    children: tuple[XmlNode, ...] = ()
    text: str = ""
    position: tuple[int, ...] = ()
    line: int | None = None

    @property
    def local_name(self) -> str:
        """Tag without the ``{namespace}`` prefix."""
        return self.tag.rsplit("}", 1)[-1]

    @property
    def attribute_map(self) -> dict[str, str]:
        """Attributes as an ordered ``dict``."""
        return dict(self.attributes)

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return an attribute value, matching the name case-insensitively."""
        wanted = name.lower()
        for key, value in self.attributes:
            if key.lower() == wanted:
                return value
        return default

    def iter(self) -> list[XmlNode]:
        """Return this node and all of its descendants in document order."""
        nodes = [self]
        for child in self.children:
            nodes.extend(child.iter())
        return nodes
