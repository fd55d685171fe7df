"""TreeBuilder: parses XML text into an immutable XmlNode tree.

Parsing is done by lxml with a hardened parser (no network access, no
entity expansion).  Comments and processing instructions are dropped, so
only elements become nodes.  Character data of an element is its leading
text plus the tails of its child elements.

Positions are built during traversal:
- Root is ``()``
- Each child appends its index among the element children of its parent
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from lxml import etree

from xml_snapshot_diff.errors import ParseError
from xml_snapshot_diff.tree.nodes import XmlNode

_XML_DECLARATION = re.compile(r"\A\s*<\?xml\b[^>]*\?>")


def _new_parser() -> etree.XMLParser:
    return etree.XMLParser(
        remove_comments=True,
        remove_pis=True,
        resolve_entities=False,
        no_network=True,
        huge_tree=False,
    )


@dataclass
class TreeBuilder:
    """Converts XML text (or an lxml element) into an ``XmlNode`` tree.

    Example::
        builder = TreeBuilder()
        root = builder.parse("<root><a x='1'>text</a></root>")
        # root: XmlNode("root") -> XmlNode("a", attributes=(("x", "1"),), text="text")
    """

    def parse(self, content: str | bytes, source: str = "<string>") -> XmlNode:
        """Parse an XML document and return its root node.

        Args:
            content: The document.  ``str`` input is already decoded: its XML
                declaration, if any, is dropped and the text parsed as is.
                ``bytes`` input is decoded by the parser, honouring the
                declared encoding (UTF-8 when none is declared).
            source:  Identifier of the content, used in error messages.

        Raises:
            ParseError: If the document is empty or not well-formed.
        """
        data = (
            _XML_DECLARATION.sub("", content, count=1)
            if isinstance(content, str)
            else content
        )
        if not data.strip():
            raise ParseError(source, ValueError("document is empty"))
        try:
            element = etree.fromstring(data, parser=_new_parser())
        except (etree.XMLSyntaxError, ValueError) as exc:
            raise ParseError(source, exc) from exc
        return self.build(element)

    def build(self, element: etree._Element, position: tuple[int, ...] = ()) -> XmlNode:
        """Convert an lxml element and its element descendants to ``XmlNode``s."""
        elements = [child for child in element if isinstance(child.tag, str)]
        children = tuple(
            self.build(child, (*position, index))
            for index, child in enumerate(elements)
        )
        return XmlNode(
            tag=str(element.tag),
            attributes=tuple((str(k), str(v)) for k, v in element.attrib.items()),
            children=children,
            text=_collect_text(element),
            position=position,
            line=element.sourceline,
        )


def _collect_text(element: etree._Element) -> str:
    # Tails of unresolved entity references belong to this element as well.
    parts = [element.text, *(child.tail for child in element)]
    return " ".join(part.strip() for part in parts if part and part.strip())
