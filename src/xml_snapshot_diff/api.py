"""Public API functions for xml-snapshot-diff.

This module provides the three user-facing functions: compare_xml,
compare_files and is_equal.  Each call creates a fresh XmlComparator (and a
fresh comparison context) to guarantee zero global state mutation between
calls.
"""

from __future__ import annotations

from collections.abc import Sequence

from xml_snapshot_diff.algorithm.config import MatcherConfig
from xml_snapshot_diff.comparator import XmlComparator
from xml_snapshot_diff.loader import ContentLoader, FileLocation
from xml_snapshot_diff.result import DifferenceTrace
from xml_snapshot_diff.rules import SkipRule

__all__ = ["compare_files", "compare_xml", "is_equal"]


def compare_xml(
    first: str | bytes,
    second: str | bytes,
    first_rules: Sequence[SkipRule] = (),
    second_rules: Sequence[SkipRule] = (),
    config: MatcherConfig | None = None,
) -> DifferenceTrace:
    """Compare two in-memory XML documents.

    Args:
        first:        First document.
        second:       Second document.
        first_rules:  Skip rules of the first side.
        second_rules: Skip rules of the second side.  Rules of either side
                      apply to both documents.
        config:       Matcher configuration.  Defaults to ``MatcherConfig()``.

    Returns:
        The ``DifferenceTrace``; empty when the documents are equal.

    Raises:
        ParseError: If either document is not well-formed XML.
    """
    comparator = XmlComparator(config=config)
    return comparator.compare_strings(first, second, first_rules, second_rules)


def compare_files(
    first: FileLocation | str,
    second: FileLocation | str,
    first_rules: Sequence[SkipRule] = (),
    second_rules: Sequence[SkipRule] = (),
    config: MatcherConfig | None = None,
    loader: ContentLoader | None = None,
) -> DifferenceTrace:
    """Load two XML files and compare them.

    Args:
        first:  First file; a plain string is a local path.
        second: Second file; a plain string is a local path.
        first_rules, second_rules: Skip rules of each side.
        config: Matcher configuration.  Defaults to ``MatcherConfig()``.
        loader: Loader used to resolve remote endpoints.  Defaults to a
            loader serving local files only.

    Raises:
        LoadError:  If either file cannot be retrieved.
        ParseError: If either file is not well-formed XML.
    """
    comparator = XmlComparator(loader=loader, config=config)
    return comparator.compare_files(first, second, first_rules, second_rules)


def is_equal(
    first: str | bytes,
    second: str | bytes,
    first_rules: Sequence[SkipRule] = (),
    second_rules: Sequence[SkipRule] = (),
    config: MatcherConfig | None = None,
) -> bool:
    """Return True if two in-memory XML documents show no difference."""
    trace = compare_xml(first, second, first_rules, second_rules, config=config)
    return not trace.has_differences
