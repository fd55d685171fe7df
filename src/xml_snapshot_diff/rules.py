"""Skip rules: configured exceptions applied to both trees before matching.

A ``SkipRule`` pairs a path selector with an effect:

- ``SkipEffect.NODE`` excludes the selected elements (and their subtrees)
  from the comparison.  They are marked ``MATCHED_DEEP`` and do not
  contribute to the content of their parent.
- ``SkipEffect.ATTRIBUTE`` excludes one attribute of the selected elements
  from their signature and content.

Both effects may be narrowed by a value condition on the element text (or,
with ``attribute`` set, on that attribute's value), compared according to a
``MatchType``.

Selectors are ``/``-separated element names.  A leading ``/`` anchors the
path at the root element; otherwise (or with a leading ``//``) the path
matches at any depth.  Each segment is a case-insensitive shell-style
pattern.  Example::

    from xml_snapshot_diff.rules import MatchType, SkipRule

    rules = [
        SkipRule.skip_node("//timestamp"),
        SkipRule.skip_attribute("/config/entry", "id"),
        SkipRule.skip_node_by_value("log/line", r"^DEBUG", MatchType.REGEX),
    ]

Rules are applied symmetrically by ``apply_rules``: the rules of the first
snapshot are applied to the first tree and then the second tree, then the
rules of the second snapshot to the second tree and then the first tree.
A rule declared for either side therefore suppresses the same location in
both trees.  Applying a rule more than once has no further effect.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from enum import StrEnum, auto
from fnmatch import fnmatchcase
from typing import TYPE_CHECKING

from xml_snapshot_diff.tree.nodes import XmlNode

if TYPE_CHECKING:
    from xml_snapshot_diff.context import TreeView

__all__ = [
    "MatchType",
    "PathSelector",
    "SkipEffect",
    "SkipRule",
    "apply_rules",
]

logger = logging.getLogger(__name__)


class SkipEffect(StrEnum):
    """What a skip rule suppresses.

    - NODE      -> "node"      : the whole element and its subtree
    - ATTRIBUTE -> "attribute" : one attribute of the element
    """

    NODE = auto()
    ATTRIBUTE = auto()


class MatchType(StrEnum):
    """How the value condition of a skip rule is evaluated.

    - TEXT          -> "text"          : stripped value equals the expected value
    - CONTAINS_TEXT -> "contains_text" : value contains the expected value
    - REGEX         -> "regex"         : ``re.search`` of the expected pattern succeeds
    """

    TEXT = auto()
    CONTAINS_TEXT = auto()
    REGEX = auto()


@dataclass(frozen=True, slots=True)
class PathSelector:
    """Parsed element path used to select the nodes a rule applies to.

    Attributes:
        segments: Element name patterns from the outermost to the selected element.
        anchored: True when the path must start at the root element.
    """

    segments: tuple[str, ...]
    anchored: bool = False

    @classmethod
    def parse(cls, selector: str) -> PathSelector:
        """Parse ``/a/b``, ``//b``, ``a/b`` or ``b`` style selectors.

        Raises:
            ValueError: If the selector is empty or has an empty segment.
        """
        text = selector.strip()
        anchored = False
        if text.startswith("//"):
            text = text[2:]
        elif text.startswith("/"):
            anchored = True
            text = text[1:]

        segments = tuple(segment.strip() for segment in text.split("/"))
        if not text or any(not segment for segment in segments):
            msg = f"invalid node selector: {selector!r}"
            raise ValueError(msg)
        return cls(segments=segments, anchored=anchored)

    def matches(self, path: Sequence[XmlNode]) -> bool:
        """Return True if the element at the end of ``path`` is selected.

        Args:
            path: Nodes from the root element down to the candidate element.
        """
        if len(path) < len(self.segments):
            return False
        if self.anchored and len(path) != len(self.segments):
            return False
        tail = path[len(path) - len(self.segments) :]
        return all(
            _segment_matches(pattern, node)
            for pattern, node in zip(self.segments, tail, strict=True)
        )


def _segment_matches(pattern: str, node: XmlNode) -> bool:
    pattern = pattern.lower()
    return fnmatchcase(node.local_name.lower(), pattern) or fnmatchcase(
        node.tag.lower(), pattern
    )


@dataclass(frozen=True, slots=True)
class SkipRule:
    """Selector plus effect, applied to a tree before matching.

    Attributes:
        selector:   Element path (see ``PathSelector``).
        effect:     What the rule suppresses.
        attribute:  For ``ATTRIBUTE`` rules, the attribute to exclude
                    (required).  For ``NODE`` rules, the attribute whose
                    presence (and, with ``value``, whose value) is required
                    for the element to be skipped.
        value:      Optional condition on the element text, or on the value of
                    ``attribute`` when set.
        match_type: How ``value`` is compared.
    """

    selector: str
    effect: SkipEffect = SkipEffect.NODE
    attribute: str | None = None
    value: str | None = None
    match_type: MatchType = MatchType.TEXT
    _path: PathSelector = field(init=False, repr=False, compare=False)
    _pattern: re.Pattern[str] | None = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_path", PathSelector.parse(self.selector))
        if self.effect is SkipEffect.ATTRIBUTE and not self.attribute:
            msg = "attribute rules need the name of the attribute to skip"
            raise ValueError(msg)
        pattern = None
        if self.match_type is MatchType.REGEX:
            if self.value is None:
                msg = "regex rules need a value pattern"
                raise ValueError(msg)
            try:
                pattern = re.compile(self.value)
            except re.error as exc:
                msg = f"invalid regex {self.value!r}: {exc}"
                raise ValueError(msg) from exc
        object.__setattr__(self, "_pattern", pattern)

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def skip_node(cls, selector: str) -> SkipRule:
        """Skip every element selected by ``selector``."""
        return cls(selector)

    @classmethod
    def skip_node_by_value(
        cls, selector: str, value: str, match_type: MatchType = MatchType.TEXT
    ) -> SkipRule:
        """Skip selected elements whose text matches ``value``."""
        return cls(selector, value=value, match_type=match_type)

    @classmethod
    def skip_node_by_attribute(
        cls,
        selector: str,
        attribute: str,
        value: str | None = None,
        match_type: MatchType = MatchType.TEXT,
    ) -> SkipRule:
        """Skip selected elements carrying ``attribute`` (matching ``value``)."""
        return cls(selector, attribute=attribute, value=value, match_type=match_type)

    @classmethod
    def skip_attribute(
        cls,
        selector: str,
        attribute: str,
        value: str | None = None,
        match_type: MatchType = MatchType.TEXT,
    ) -> SkipRule:
        """Ignore ``attribute`` on selected elements (when it matches ``value``)."""
        return cls(
            selector,
            effect=SkipEffect.ATTRIBUTE,
            attribute=attribute,
            value=value,
            match_type=match_type,
        )

    # ------------------------------------------------------------------
    # Application
    # ------------------------------------------------------------------

    def apply(self, view: TreeView) -> int:
        """Apply the rule to ``view`` and return how many nodes it touched."""
        touched = 0
        for node, path in _walk(view.root, ()):
            if not self._path.matches(path):
                continue
            if self.effect is SkipEffect.NODE:
                if self._node_condition_holds(node):
                    view.state.skip(node)
                    touched += 1
                continue
            attribute = self.attribute
            if attribute is None:
                continue
            actual = node.get(attribute)
            if actual is not None and self._value_matches(actual):
                view.state.exclude_attribute(node, attribute)
                touched += 1
        return touched

    def _node_condition_holds(self, node: XmlNode) -> bool:
        if self.attribute is None:
            return self._value_matches(node.text)
        actual = node.get(self.attribute)
        return actual is not None and self._value_matches(actual)

    def _value_matches(self, actual: str) -> bool:
        if self.value is None:
            return True
        if self._pattern is not None:
            return self._pattern.search(actual) is not None
        if self.match_type is MatchType.CONTAINS_TEXT:
            return self.value in actual
        return actual.strip() == self.value.strip()


def _walk(
    node: XmlNode, parents: tuple[XmlNode, ...]
) -> Iterator[tuple[XmlNode, tuple[XmlNode, ...]]]:
    path = (*parents, node)
    yield node, path
    for child in node.children:
        yield from _walk(child, path)


def apply_rules(
    first_rules: Sequence[SkipRule],
    second_rules: Sequence[SkipRule],
    first_view: TreeView,
    second_view: TreeView,
) -> None:
    """Apply the rules of both snapshots to both trees, in the fixed order."""
    for rule in first_rules:
        touched = rule.apply(first_view) + rule.apply(second_view)
        logger.debug("Rule %r of the first snapshot touched %d node(s)", rule, touched)
    for rule in second_rules:
        touched = rule.apply(second_view) + rule.apply(first_view)
        logger.debug("Rule %r of the second snapshot touched %d node(s)", rule, touched)
