"""Tests for SetStrategy.

Covers:
- Membership-only comparison: added, removed and common elements
- Common elements are UNTOUCHED leaves and never recursed into
- frozenset and mixed set kinds
"""

from __future__ import annotations

from object_diff import compare
from object_diff.protocols import Capability
from object_diff.strategies.sets import SetStrategy
from object_diff.tree.path import CollectionElement


class TestAccepts:
    def test_accepts_set_types(self) -> None:
        strategy = SetStrategy()
        assert strategy.capability is Capability.SET
        assert strategy.accepts(set)
        assert strategy.accepts(frozenset)
        assert not strategy.accepts(list)
        assert not strategy.accepts(dict)


class TestCompare:
    def test_membership_states(self) -> None:
        root = compare({1, 2}, {2, 3})
        assert root.is_changed()
        assert root.child_count == 3
        assert root.get_child(CollectionElement(1)).is_added()  # type: ignore[union-attr]
        assert root.get_child(CollectionElement(2)).is_untouched()  # type: ignore[union-attr]
        assert root.get_child(CollectionElement(3)).is_removed()  # type: ignore[union-attr]

    def test_equal_sets_are_untouched(self) -> None:
        root = compare(frozenset({"a", "b"}), frozenset({"b", "a"}))
        assert root.is_untouched()
        assert root.child_count == 2

    def test_common_elements_are_leaves(self) -> None:
        root = compare({(1, 2)}, {(1, 2)})
        common = root.get_child(CollectionElement((1, 2)))
        assert common is not None
        assert common.is_untouched()
        assert not common.has_children()
        assert common.value_type is tuple

    def test_set_and_frozenset_compare_by_membership(self) -> None:
        root = compare({1}, frozenset({1, 2}))
        assert root.get_child(CollectionElement(2)).is_removed()  # type: ignore[union-attr]
