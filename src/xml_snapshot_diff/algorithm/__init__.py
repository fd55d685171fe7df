"""algorithm subpackage: public API for the tree matching algorithm.

Provides the matcher, its configuration, the sibling matching policies and
the difference collector.  Import from this module (not from sub-modules
directly) to stay on the stable public interface.

Example::

    from xml_snapshot_diff.algorithm import TreeMatcher, collect_differences
    from xml_snapshot_diff.context import ComparisonContext

    context = ComparisonContext.create(first_root, second_root)
    TreeMatcher().match(context)
    collect_differences(context.first, context.trace)
    collect_differences(context.second, context.trace, reversed_sides=True)
"""

from __future__ import annotations

from xml_snapshot_diff.algorithm.collector import collect_differences
from xml_snapshot_diff.algorithm.config import MatcherConfig, MatchingMode
from xml_snapshot_diff.algorithm.fingerprint import Fingerprinter
from xml_snapshot_diff.algorithm.matcher import TreeMatcher
from xml_snapshot_diff.algorithm.policies import (
    GreedyMatchingPolicy,
    MatchingPolicy,
    OptimalMatchingPolicy,
    policy_for,
)
from xml_snapshot_diff.algorithm.state import NodeDifference, VisitState

__all__ = [
    "Fingerprinter",
    "GreedyMatchingPolicy",
    "MatcherConfig",
    "MatchingMode",
    "MatchingPolicy",
    "NodeDifference",
    "OptimalMatchingPolicy",
    "TreeMatcher",
    "VisitState",
    "collect_differences",
    "policy_for",
]
