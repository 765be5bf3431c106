"""Equality matching of sequence elements via optimal bipartite assignment.

Used by the sequence strategy when elements cannot be aligned by position.
Builds an (m, n) cost matrix over working x base elements:

- unequal pair : ``np.inf`` (forbidden)
- equal pair   : ``|i - j| / (max(m, n) + 1)``, so that among several equal
  candidates the assignment preserving relative order wins.

Infinite cells never reach scipy's solver (which rejects them): they are
replaced by a guard value ``finite_max * 2.0 + 1.0`` and any pair that lands
on an originally-infinite cell is dropped afterwards.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np
from scipy.optimize import linear_sum_assignment  # type: ignore[import-untyped]

from object_diff.equality import values_equal

__all__ = ["equality_cost_matrix", "match_by_equality", "values_equal"]


def equality_cost_matrix(working: Sequence[Any], base: Sequence[Any]) -> np.ndarray:
    """Return the (len(working), len(base)) matching cost matrix."""
    m = len(working)
    n = len(base)
    scale = float(max(m, n) + 1)
    cost = np.full((m, n), np.inf, dtype=float)
    for i, w in enumerate(working):
        for j, b in enumerate(base):
            if values_equal(w, b):
                cost[i, j] = abs(i - j) / scale
    return cost


def match_by_equality(
    working: Sequence[Any],
    base: Sequence[Any],
) -> list[tuple[int, int]]:
    """Pair equal elements one-to-one, preferring order-preserving pairs.

    Args:
        working: Working-side elements.
        base:    Base-side elements.

    Returns:
        ``(working_index, base_index)`` pairs sorted by working index.  Indices
        missing from the result are unmatched on their side.
    """
    if not working or not base:
        return []

    cost = equality_cost_matrix(working, base)
    forbidden = np.isinf(cost)
    if forbidden.all():
        return []

    solvable = cost
    if forbidden.any():
        guard_value = float(cost[~forbidden].max()) * 2.0 + 1.0
        solvable = np.where(forbidden, guard_value, cost)

    row_ind, col_ind = linear_sum_assignment(solvable)
    keep = ~forbidden[row_ind, col_ind]
    pairs = zip(row_ind[keep].tolist(), col_ind[keep].tolist(), strict=True)
    return sorted(pairs)
