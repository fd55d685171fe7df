"""TreeMatcher: recursive signature-based pairing of two XML trees.

Architecture:
- The two roots are treated as the only children of a virtual document node,
  so differing root elements end up unpaired instead of being ignored.
- At each level the ``MatchingPolicy`` pairs the still-unvisited children by
  signature.  Paired children are marked ``MATCHED_SHALLOW``.
- Paired children with equal content are marked ``MATCHED_DEEP`` and the
  matcher does not descend into them: the content serialization already
  covers the whole subtree.
- Paired children with unequal content are descended into, so the
  difference is localized at the deepest differing node(s).  When the own
  text of the pair differs, a ``NodeDifference`` is recorded on the first
  node.
- Children left ``UNVISITED`` have no counterpart.  They are reported by the
  difference collector, not here.

Recursion terminates because each call only visits direct children of the
current pair and node states only move forward.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from xml_snapshot_diff.algorithm.policies import GreedyMatchingPolicy, MatchingPolicy
from xml_snapshot_diff.algorithm.state import NodeDifference
from xml_snapshot_diff.tree.nodes import XmlNode

if TYPE_CHECKING:
    from xml_snapshot_diff.context import ComparisonContext, TreeView

__all__ = ["TreeMatcher"]

logger = logging.getLogger(__name__)


class TreeMatcher:
    """Pairs the nodes of the two trees of a ``ComparisonContext``.

    Example::

        from xml_snapshot_diff.algorithm.matcher import TreeMatcher
        from xml_snapshot_diff.context import ComparisonContext

        context = ComparisonContext.create(first_root, second_root)
        TreeMatcher().match(context)
        # context.first.state / context.second.state now hold the pairing
    """

    def __init__(self, policy: MatchingPolicy | None = None) -> None:
        self._policy: MatchingPolicy = (
            policy if policy is not None else GreedyMatchingPolicy()
        )

    @property
    def policy(self) -> MatchingPolicy:
        return self._policy

    def match(self, context: ComparisonContext) -> None:
        """Run the matching pass over both trees of ``context``."""
        self._match_children(
            (context.first.root,),
            (context.second.root,),
            context.first,
            context.second,
            prefix="",
        )

    def compare(
        self, first_node: XmlNode, second_node: XmlNode, context: ComparisonContext
    ) -> None:
        """Pair the children of two nodes already known to correspond.

        Both nodes are marked ``MATCHED_SHALLOW`` first, so that the
        collector examines their children instead of reporting them as
        unpaired.
        """
        context.first.state.mark_shallow(first_node)
        context.second.state.mark_shallow(second_node)
        prefix = context.first.fingerprints.signature(first_node)
        self._match_children(
            first_node.children,
            second_node.children,
            context.first,
            context.second,
            prefix=prefix,
        )

    def _match_children(
        self,
        first_children: tuple[XmlNode, ...],
        second_children: tuple[XmlNode, ...],
        first: TreeView,
        second: TreeView,
        prefix: str,
    ) -> None:
        pairs = self._policy.pair(first_children, second_children, first, second)

        for this_child, that_child in pairs:
            first.state.mark_shallow(this_child)
            second.state.mark_shallow(that_child)

            if first.fingerprints.content_key(this_child) == (
                second.fingerprints.content_key(that_child)
            ):
                first.state.mark_deep(this_child)
                second.state.mark_deep(that_child)
                continue

            full_signature = prefix + first.fingerprints.signature(this_child)
            if first.fingerprints.text_key(this_child) != (
                second.fingerprints.text_key(that_child)
            ):
                logger.debug("Text differs at %s", full_signature)
                first.state.record_difference(
                    this_child,
                    NodeDifference(
                        description=f"Text of XML node {full_signature}",
                        this_value=this_child.text,
                        that_value=that_child.text,
                    ),
                )

            self._match_children(
                this_child.children,
                that_child.children,
                first,
                second,
                prefix=full_signature,
            )
