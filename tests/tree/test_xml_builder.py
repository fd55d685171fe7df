"""Tests for TreeBuilder.

Covers element structure, document order, positions, attribute order,
text collection (mixed content, whitespace), comments and processing
instructions, namespaces, XML declarations and ParseError on bad input.
"""

from __future__ import annotations

import pytest

from xml_snapshot_diff.errors import ParseError
from xml_snapshot_diff.tree.builder import TreeBuilder
from xml_snapshot_diff.tree.nodes import XmlNode

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def builder() -> TreeBuilder:
    """A fresh TreeBuilder instance for each test."""
    return TreeBuilder()


# ---------------------------------------------------------------------------
# Structure
# ---------------------------------------------------------------------------


class TestStructure:
    def test_single_element(self, builder: TreeBuilder) -> None:
        root = builder.parse("<root/>")
        assert root.tag == "root"
        assert root.children == ()
        assert root.text == ""

    def test_children_in_document_order(self, builder: TreeBuilder) -> None:
        root = builder.parse("<root><b/><a/><c/></root>")
        assert [c.tag for c in root.children] == ["b", "a", "c"]

    def test_positions(self, builder: TreeBuilder) -> None:
        root = builder.parse("<root><a><x/><y/></a><b/></root>")
        a, b = root.children
        assert root.position == ()
        assert a.position == (0,)
        assert b.position == (1,)
        assert [c.position for c in a.children] == [(0, 0), (0, 1)]

    def test_positions_are_unique(self, builder: TreeBuilder) -> None:
        root = builder.parse("<r><a><a/><a/></a><a><a/></a></r>")
        positions = [n.position for n in root.iter()]
        assert len(positions) == len(set(positions))

    def test_attributes_keep_document_order(self, builder: TreeBuilder) -> None:
        root = builder.parse('<root z="1" a="2" m="3"/>')
        assert root.attributes == (("z", "1"), ("a", "2"), ("m", "3"))

    def test_returns_xml_node(self, builder: TreeBuilder) -> None:
        assert isinstance(builder.parse("<root/>"), XmlNode)

    def test_line_numbers_recorded(self, builder: TreeBuilder) -> None:
        root = builder.parse("<root>\n  <a/>\n</root>")
        assert root.line == 1
        assert root.children[0].line == 2


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------


class TestText:
    def test_text_is_stripped(self, builder: TreeBuilder) -> None:
        root = builder.parse("<root>\n   value \n</root>")
        assert root.text == "value"

    def test_whitespace_only_text_is_empty(self, builder: TreeBuilder) -> None:
        root = builder.parse("<root>\n  <a/>\n</root>")
        assert root.text == ""

    def test_mixed_content_includes_tails(self, builder: TreeBuilder) -> None:
        root = builder.parse("<p>Hello <b>big</b> world</p>")
        assert root.text == "Hello world"
        assert root.children[0].text == "big"

    def test_entities_are_decoded(self, builder: TreeBuilder) -> None:
        root = builder.parse("<a>x &amp; y</a>")
        assert root.text == "x & y"

    def test_cdata_is_text(self, builder: TreeBuilder) -> None:
        root = builder.parse("<a><![CDATA[<raw>]]></a>")
        assert root.text == "<raw>"


# ---------------------------------------------------------------------------
# Non-element nodes
# ---------------------------------------------------------------------------


class TestNonElementNodes:
    def test_comments_are_dropped(self, builder: TreeBuilder) -> None:
        root = builder.parse("<root><!-- note --><a/></root>")
        assert [c.tag for c in root.children] == ["a"]

    def test_processing_instructions_are_dropped(self, builder: TreeBuilder) -> None:
        root = builder.parse("<root><?app data?><a/></root>")
        assert [c.tag for c in root.children] == ["a"]


# ---------------------------------------------------------------------------
# Input forms
# ---------------------------------------------------------------------------


class TestInputForms:
    def test_str_with_xml_declaration(self, builder: TreeBuilder) -> None:
        root = builder.parse('<?xml version="1.0" encoding="UTF-8"?><root/>')
        assert root.tag == "root"

    def test_decoded_str_with_foreign_declaration(self, builder: TreeBuilder) -> None:
        text = '<?xml version="1.0" encoding="ISO-8859-1"?>\n<root>é</root>'
        assert builder.parse(text).text == "é"

    def test_bytes_honour_declared_encoding(self, builder: TreeBuilder) -> None:
        data = '<?xml version="1.0" encoding="ISO-8859-1"?><root>é</root>'.encode(
            "latin-1"
        )
        assert builder.parse(data).text == "é"

    def test_bytes_input(self, builder: TreeBuilder) -> None:
        root = builder.parse("<root>é</root>".encode())
        assert root.text == "é"

    def test_namespaced_tags_keep_clark_notation(self, builder: TreeBuilder) -> None:
        root = builder.parse('<c:root xmlns:c="urn:cfg"><c:entry/></c:root>')
        assert root.tag == "{urn:cfg}root"
        assert root.children[0].local_name == "entry"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestParseErrors:
    def test_malformed_xml_raises_parse_error(self, builder: TreeBuilder) -> None:
        with pytest.raises(ParseError) as exc_info:
            builder.parse("<root><a></root>", source="config.xml")
        assert exc_info.value.path == "config.xml"
        assert exc_info.value.cause is not None
        assert "config.xml" in str(exc_info.value)

    def test_cause_is_chained(self, builder: TreeBuilder) -> None:
        with pytest.raises(ParseError) as exc_info:
            builder.parse("not xml at all")
        assert exc_info.value.__cause__ is exc_info.value.cause

    def test_empty_document_raises_parse_error(self, builder: TreeBuilder) -> None:
        with pytest.raises(ParseError):
            builder.parse("")

    def test_whitespace_document_raises_parse_error(self, builder: TreeBuilder) -> None:
        with pytest.raises(ParseError):
            builder.parse("   \n ")

    def test_default_source_identifier(self, builder: TreeBuilder) -> None:
        with pytest.raises(ParseError) as exc_info:
            builder.parse("<a>")
        assert exc_info.value.path == "<string>"
