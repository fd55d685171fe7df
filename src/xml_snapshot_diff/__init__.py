"""XML snapshot diff - structural equality with exceptions for XML files."""

from __future__ import annotations

from xml_snapshot_diff.algorithm.config import MatcherConfig, MatchingMode
from xml_snapshot_diff.api import compare_files, compare_xml, is_equal
from xml_snapshot_diff.comparator import XmlComparator
from xml_snapshot_diff.errors import LoadError, ParseError, XmlSnapshotError
from xml_snapshot_diff.loader import ContentLoader, FileLocation
from xml_snapshot_diff.result import Difference, DifferenceTrace
from xml_snapshot_diff.rules import MatchType, SkipEffect, SkipRule
from xml_snapshot_diff.sources import LOCAL, SourceRegistry

__version__: str = "0.1.0"
__all__: list[str] = [
    "LOCAL",
    "ContentLoader",
    "Difference",
    "DifferenceTrace",
    "FileLocation",
    "LoadError",
    "MatchType",
    "MatcherConfig",
    "MatchingMode",
    "ParseError",
    "SkipEffect",
    "SkipRule",
    "SourceRegistry",
    "XmlComparator",
    "XmlSnapshotError",
    "compare_files",
    "compare_xml",
    "is_equal",
]
