"""XmlComparator: orchestrator that wires loader, skip rules, matcher and collector.

This is the central wiring layer between the tree algorithm and the public
API.  One ``compare_*`` call compares one file pair:

1. Both documents are loaded and parsed (``ContentLoader``).  A
   ``LoadError`` or ``ParseError`` aborts the call before any trace exists.
2. A fresh ``ComparisonContext`` is created, so no visit state is shared
   with other comparisons.
3. The skip rules of both sides are applied to both trees (``apply_rules``).
4. The ``TreeMatcher`` pairs the trees.
5. The differences of the first tree, then of the second tree, are collected
   into the ``DifferenceTrace``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from xml_snapshot_diff.algorithm.collector import collect_differences
from xml_snapshot_diff.algorithm.config import MatcherConfig
from xml_snapshot_diff.algorithm.matcher import TreeMatcher
from xml_snapshot_diff.algorithm.policies import MatchingPolicy, policy_for
from xml_snapshot_diff.context import ComparisonContext
from xml_snapshot_diff.loader import ContentLoader, FileLocation
from xml_snapshot_diff.result import DifferenceTrace
from xml_snapshot_diff.rules import SkipRule, apply_rules
from xml_snapshot_diff.tree.builder import TreeBuilder
from xml_snapshot_diff.tree.nodes import XmlNode

__all__ = ["XmlComparator"]

logger = logging.getLogger(__name__)


class XmlComparator:
    """Compares XML documents for equality with configurable exceptions.

    The comparator itself holds no per-comparison state and may be shared
    between threads, provided the configured loader's sources can be.

    Example::

        from xml_snapshot_diff.comparator import XmlComparator
        from xml_snapshot_diff.rules import SkipRule

        cmp = XmlComparator()
        trace = cmp.compare_strings(
            "<root><ts>1</ts><a>x</a></root>",
            "<root><ts>2</ts><a>X</a></root>",
            first_rules=[SkipRule.skip_node("ts")],
        )
        print(trace.has_differences)   # False
    """

    def __init__(
        self,
        loader: ContentLoader | None = None,
        config: MatcherConfig | None = None,
        policy: MatchingPolicy | None = None,
    ) -> None:
        """Initialise the comparator.

        Args:
            loader: Resolves file references.  Defaults to a loader serving
                local files only.
            config: Matcher configuration.  Defaults to ``MatcherConfig()``.
            policy: Sibling matching policy.  Defaults to the policy selected
                by ``config.matching_mode``.
        """
        self._config = config if config is not None else MatcherConfig()
        self._loader = loader if loader is not None else ContentLoader()
        self._matcher = TreeMatcher(
            policy if policy is not None else policy_for(self._config.matching_mode)
        )
        self._builder = TreeBuilder()

    @property
    def config(self) -> MatcherConfig:
        return self._config

    @property
    def loader(self) -> ContentLoader:
        return self._loader

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compare_files(
        self,
        first: FileLocation | str,
        second: FileLocation | str,
        first_rules: Sequence[SkipRule] = (),
        second_rules: Sequence[SkipRule] = (),
        first_snapshot: str | None = None,
        second_snapshot: str | None = None,
    ) -> DifferenceTrace:
        """Load two XML files and compare them.

        Args:
            first:  First file; a plain string is a local path.
            second: Second file; a plain string is a local path.
            first_rules:  Skip rules configured for the first snapshot.
            second_rules: Skip rules configured for the second snapshot.
            first_snapshot:  Identifier recorded in the trace.  Defaults to
                the endpoint of ``first``.
            second_snapshot: Identifier recorded in the trace.  Defaults to
                the endpoint of ``second``.

        Raises:
            LoadError:  If either file cannot be retrieved.
            ParseError: If either file is not well-formed XML.
        """
        first_ref = _as_location(first)
        second_ref = _as_location(second)

        first_root = self._loader.load(first_ref)
        second_root = self._loader.load(second_ref)

        trace = self.compare_trees(
            first_root,
            second_root,
            first_rules=first_rules,
            second_rules=second_rules,
            first_snapshot=first_snapshot or first_ref.endpoint,
            second_snapshot=second_snapshot or second_ref.endpoint,
        )
        trace.first_path = first_ref.path
        trace.second_path = second_ref.path

        if trace.has_differences:
            logger.info(
                "%d difference(s) between %s and %s", len(trace), first_ref, second_ref
            )
        else:
            logger.debug("Same files: %s and %s", first_ref, second_ref)
        return trace

    def compare_strings(
        self,
        first: str | bytes,
        second: str | bytes,
        first_rules: Sequence[SkipRule] = (),
        second_rules: Sequence[SkipRule] = (),
        first_snapshot: str = "first",
        second_snapshot: str = "second",
    ) -> DifferenceTrace:
        """Parse two in-memory XML documents and compare them.

        Raises:
            ParseError: If either document is not well-formed XML.
        """
        first_root = self._builder.parse(first, source=first_snapshot)
        second_root = self._builder.parse(second, source=second_snapshot)
        return self.compare_trees(
            first_root,
            second_root,
            first_rules=first_rules,
            second_rules=second_rules,
            first_snapshot=first_snapshot,
            second_snapshot=second_snapshot,
        )

    def compare_trees(
        self,
        first_root: XmlNode,
        second_root: XmlNode,
        first_rules: Sequence[SkipRule] = (),
        second_rules: Sequence[SkipRule] = (),
        first_snapshot: str = "first",
        second_snapshot: str = "second",
    ) -> DifferenceTrace:
        """Compare two parsed trees and return their difference trace.

        The trees are not modified and may be compared again later.
        """
        context = ComparisonContext.create(
            first_root,
            second_root,
            first_rules=first_rules,
            second_rules=second_rules,
            config=self._config,
            trace=DifferenceTrace(
                first_snapshot=first_snapshot, second_snapshot=second_snapshot
            ),
        )
        return self.run(context)

    def run(self, context: ComparisonContext) -> DifferenceTrace:
        """Apply rules, match and collect differences for a prepared context."""
        apply_rules(
            context.first_rules, context.second_rules, context.first, context.second
        )
        self._matcher.match(context)
        collect_differences(context.first, context.trace, reversed_sides=False)
        collect_differences(context.second, context.trace, reversed_sides=True)
        return context.trace


def _as_location(ref: FileLocation | str) -> FileLocation:
    return ref if isinstance(ref, FileLocation) else FileLocation(path=ref)
