"""Tests for equality matching of sequence elements.

Covers:
- values_equal identity short-circuit, == fallback and cyclic values
- Cost matrix shape, forbidden cells and order-preserving costs
- match_by_equality: empty inputs, no equal pairs, reordering,
  duplicates, rectangular inputs and unhashable elements
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from object_diff.engine.matcher import (
    equality_cost_matrix,
    match_by_equality,
    values_equal,
)


class _NeverEqual:
    def __eq__(self, other: object) -> bool:
        return False

    __hash__ = object.__hash__


@dataclass
class _Loop:
    name: str
    ref: _Loop | None = None


def _loop(name: str) -> _Loop:
    loop = _Loop(name)
    loop.ref = loop
    return loop


class TestValuesEqual:
    def test_identity_wins_over_eq(self) -> None:
        item = _NeverEqual()
        assert values_equal(item, item)
        assert not values_equal(item, _NeverEqual())

    def test_falls_back_to_eq(self) -> None:
        assert values_equal([1, 2], [1, 2])
        assert not values_equal(1, 2)

    def test_cyclic_values_are_unequal_instead_of_recursing(self) -> None:
        first = _loop("a")
        assert values_equal(first, first)
        assert not values_equal(first, _loop("a"))
        assert not values_equal(first, _loop("b"))


class TestCostMatrix:
    def test_shape_and_forbidden_cells(self) -> None:
        cost = equality_cost_matrix(["a", "b", "c"], ["b", "x"])
        assert cost.shape == (3, 2)
        assert np.isinf(cost[0, 0])
        assert np.isinf(cost[2, 1])
        assert cost[1, 0] == 1 / 4

    def test_diagonal_is_free(self) -> None:
        cost = equality_cost_matrix(["a", "b"], ["a", "b"])
        assert cost[0, 0] == 0.0
        assert cost[1, 1] == 0.0


class TestMatchByEquality:
    def test_empty_sides(self) -> None:
        assert match_by_equality([], [1]) == []
        assert match_by_equality([1], []) == []

    def test_nothing_equal(self) -> None:
        assert match_by_equality([1, 2], [3, 4]) == []

    def test_reordered_elements(self) -> None:
        assert match_by_equality([1, 2, 3], [3, 1, 2]) == [(0, 1), (1, 2), (2, 0)]

    def test_duplicates_keep_relative_order(self) -> None:
        assert match_by_equality(["x", "x"], ["x", "x"]) == [(0, 0), (1, 1)]

    def test_unmatched_elements_are_left_out(self) -> None:
        assert match_by_equality(["a", "b", "c"], ["c", "a"]) == [(0, 1), (2, 0)]

    def test_more_base_than_working(self) -> None:
        assert match_by_equality(["b"], ["a", "b", "c"]) == [(0, 1)]

    def test_unhashable_elements(self) -> None:
        assert match_by_equality([[1], [2]], [[2], [1]]) == [(0, 1), (1, 0)]

    def test_cyclic_elements_match_only_themselves(self) -> None:
        shared = _loop("a")
        assert match_by_equality([shared, "x"], [_loop("a")]) == []
        assert match_by_equality([_loop("a"), shared], [shared]) == [(1, 0)]
