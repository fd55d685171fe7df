"""Fingerprinter: signature and content serialization of XML nodes.

- Signature: ``<tag a="1" b="2">``, built from the tag and the attributes
  only.  It is the key used to find a counterpart among sibling nodes.
- Content: the signature, the text and the content of every child, closed
  by ``</tag>``.  Once two nodes are paired by signature, equal content
  proves the whole subtrees equal.

Both honour the skip rules recorded in a ``VisitState``: excluded attributes
are left out and skipped child subtrees do not contribute to the content of
their parent.  Attributes are sorted by lower-cased name, so attribute order
in the source document is not significant.

Content strings of large subtrees are requested repeatedly while the matcher
descends, so they are memoized in a per-instance ``LRUCache`` keyed by node
identity.  Each entry holds its node, so an id is never reused while cached.
"""

from __future__ import annotations

from xml.sax.saxutils import escape, quoteattr

from cachetools import LRUCache

from xml_snapshot_diff.algorithm.config import MatcherConfig
from xml_snapshot_diff.algorithm.state import VisitState
from xml_snapshot_diff.tree.nodes import XmlNode

__all__ = ["Fingerprinter"]


class Fingerprinter:
    """Computes signatures and contents for the nodes of one tree.

    Must only be used after the skip rules of the comparison were applied to
    ``state``: cached contents are not invalidated when rules change.

    Args:
        state:  Visit state of the tree the nodes belong to.
        config: Matcher configuration (case sensitivity, cache size).
    """

    def __init__(self, state: VisitState, config: MatcherConfig | None = None) -> None:
        self._state = state
        self._config = config if config is not None else MatcherConfig()
        self._contents: LRUCache[int, tuple[XmlNode, str]] = LRUCache(
            maxsize=self._config.max_cache_size
        )

    @property
    def config(self) -> MatcherConfig:
        return self._config

    def signature(self, node: XmlNode) -> str:
        excluded = self._state.excluded_attributes(node)
        attributes = sorted(
            (
                (name, value)
                for name, value in node.attributes
                if name.lower() not in excluded
            ),
            key=lambda item: (item[0].lower(), item[0]),
        )
        rendered = "".join(f" {name}={quoteattr(value)}" for name, value in attributes)
        return f"<{node.tag}{rendered}>"

    def content(self, node: XmlNode) -> str:
        cached = self._contents.get(id(node))
        if cached is not None and cached[0] is node:
            return cached[1]
        children = "".join(
            self.content(child)
            for child in node.children
            if not self._state.is_skipped(child)
        )
        content = f"{self.signature(node)}{escape(node.text)}{children}</{node.tag}>"
        self._contents[id(node)] = (node, content)
        return content

    def signature_key(self, node: XmlNode) -> str:
        return self._config.normalize(self.signature(node))

    def content_key(self, node: XmlNode) -> str:
        return self._config.normalize(self.content(node))

    def text_key(self, node: XmlNode) -> str:
        return self._config.normalize(node.text)
