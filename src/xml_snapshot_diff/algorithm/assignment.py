"""Minimum-cost bipartite assignment with np.inf guard.

Wraps scipy's ``linear_sum_assignment`` so that infinite-cost cells (pairs
that must never be matched, e.g. siblings with different signatures) never
reach the solver, which would raise ``ValueError``.  After assignment, pairs
that landed on originally-infinite positions are filtered out.

Guard value formula: ``finite_max * 2.0 + 1.0``
"""

from __future__ import annotations

import numpy as np
from scipy.optimize import linear_sum_assignment  # type: ignore[import-untyped]


def minimum_cost_assignment(
    cost_matrix: np.ndarray,
) -> list[tuple[int, int]]:
    """Compute a minimum-cost assignment, ignoring forbidden cells.

    Args:
        cost_matrix: 2-D cost matrix of shape ``(m, n)``.  May contain
            ``np.inf`` to mark forbidden assignments.

    Returns:
        ``(row, column)`` pairs sorted by row, with any pair whose *original*
        cost was infinite removed.  Empty when no valid assignment exists.
    """
    if cost_matrix.size == 0:
        return []

    cost = np.asarray(cost_matrix, dtype=float)

    inf_mask = np.isinf(cost)

    if inf_mask.all():
        return []

    if inf_mask.any():
        finite_max = float(cost[~inf_mask].max())
        guard_value = finite_max * 2.0 + 1.0
        cost = np.where(inf_mask, guard_value, cost)

    row_ind, col_ind = linear_sum_assignment(cost)

    if inf_mask.any():
        keep = ~inf_mask[row_ind, col_ind]
        row_ind = row_ind[keep]
        col_ind = col_ind[keep]

    return sorted(zip(row_ind.tolist(), col_ind.tolist(), strict=True))
