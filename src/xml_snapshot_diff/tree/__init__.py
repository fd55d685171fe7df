"""Tree subpackage for XML-to-tree conversion primitives.

Re-exports the public API for the tree module:
- XmlNode: immutable dataclass representing one XML element
- NodeState: StrEnum of the comparison states (UNVISITED, MATCHED_SHALLOW, MATCHED_DEEP)
- TreeBuilder: parses XML text into an XmlNode tree
"""

from xml_snapshot_diff.tree.builder import TreeBuilder
from xml_snapshot_diff.tree.nodes import NodeState, XmlNode

__all__ = ["NodeState", "TreeBuilder", "XmlNode"]
