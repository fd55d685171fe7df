"""Sibling matching policies for the tree matcher.

A policy decides which children of two already-paired nodes are paired with
each other.  Only children that are still ``UNVISITED`` take part, and two
children may only be paired when their signatures are equal.

``GreedyMatchingPolicy`` is the default: for each child of the first node in
document order, the earliest unpaired child of the second node with the same
signature wins.  It never backtracks, so duplicate-signature siblings whose
content also differs may be paired with the "wrong" counterpart when they
appear in a different relative order.  That is accepted behaviour, not a bug.

``OptimalMatchingPolicy`` solves the same pairing as a minimum-cost
assignment in which a pair with equal content costs 0 and a pair with
unequal content costs 1, so equal subtrees find each other regardless of
their order.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

from xml_snapshot_diff.algorithm.assignment import minimum_cost_assignment
from xml_snapshot_diff.algorithm.config import MatchingMode
from xml_snapshot_diff.tree.nodes import XmlNode

if TYPE_CHECKING:
    from xml_snapshot_diff.context import TreeView

__all__ = [
    "GreedyMatchingPolicy",
    "MatchingPolicy",
    "OptimalMatchingPolicy",
    "policy_for",
]


@runtime_checkable
class MatchingPolicy(Protocol):
    """Structural protocol for sibling matching policies.

    ``pair`` returns ``(first_child, second_child)`` pairs.  Every returned
    pair must have equal signature keys, every child may appear at most once,
    and children that are not ``UNVISITED`` must not appear at all.  The
    policy must not change the visit state itself.
    """

    def pair(
        self,
        first_children: Sequence[XmlNode],
        second_children: Sequence[XmlNode],
        first: TreeView,
        second: TreeView,
    ) -> list[tuple[XmlNode, XmlNode]]: ...


class GreedyMatchingPolicy:
    """First-match, no-backtracking sibling pairing."""

    def pair(
        self,
        first_children: Sequence[XmlNode],
        second_children: Sequence[XmlNode],
        first: TreeView,
        second: TreeView,
    ) -> list[tuple[XmlNode, XmlNode]]:
        candidates = [
            (second.fingerprints.signature_key(child), child)
            for child in second_children
            if second.state.is_unvisited(child)
        ]
        taken: set[int] = set()
        pairs: list[tuple[XmlNode, XmlNode]] = []

        for child in first_children:
            if not first.state.is_unvisited(child):
                continue
            key = first.fingerprints.signature_key(child)
            for index, (candidate_key, candidate) in enumerate(candidates):
                if index not in taken and candidate_key == key:
                    taken.add(index)
                    pairs.append((child, candidate))
                    break

        return pairs

    def __repr__(self) -> str:
        return "GreedyMatchingPolicy()"


class OptimalMatchingPolicy:
    """Minimum-cost sibling pairing on signature and content equality.

    Cost of pairing first child ``i`` with second child ``j``:

    - ``inf`` when the signatures differ (forbidden)
    - ``0`` when the contents are equal, ``1`` otherwise
    - plus ``|i - j| * epsilon`` so that, among equally good assignments,
      the one closest to document order is chosen
    """

    def pair(
        self,
        first_children: Sequence[XmlNode],
        second_children: Sequence[XmlNode],
        first: TreeView,
        second: TreeView,
    ) -> list[tuple[XmlNode, XmlNode]]:
        rows = [c for c in first_children if first.state.is_unvisited(c)]
        cols = [c for c in second_children if second.state.is_unvisited(c)]
        if not rows or not cols:
            return []

        m, n = len(rows), len(cols)
        # Keeps the summed order penalty below 0.5, i.e. below one content mismatch.
        epsilon = 1.0 / (2.0 * (m * n + 1))
        cost_matrix = np.full((m, n), np.inf)

        col_signatures = [second.fingerprints.signature_key(c) for c in cols]
        for i, row in enumerate(rows):
            signature = first.fingerprints.signature_key(row)
            for j, col in enumerate(cols):
                if col_signatures[j] != signature:
                    continue
                equal = first.fingerprints.content_key(row) == (
                    second.fingerprints.content_key(col)
                )
                cost_matrix[i, j] = (0.0 if equal else 1.0) + abs(i - j) * epsilon

        return [(rows[i], cols[j]) for i, j in minimum_cost_assignment(cost_matrix)]

    def __repr__(self) -> str:
        return "OptimalMatchingPolicy()"


def policy_for(mode: MatchingMode) -> MatchingPolicy:
    """Return the default policy instance for ``mode``."""
    if mode is MatchingMode.OPTIMAL:
        return OptimalMatchingPolicy()
    return GreedyMatchingPolicy()
