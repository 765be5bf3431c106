"""Tests for visitor dispatch over finished trees.

Covers:
- walk() visits parents before children, children in insertion order
- Visit.stop() aborts the traversal, Visit.dont_go_deeper() prunes a subtree
- NodeCollector with and without state filters
- PathFinder locates nodes and stops early
- ReturnableOnlyVisitor hides non-returnable subtrees
- NodePrinter renders changed leaves and circular nodes, logging at DEBUG
- Deep trees are walked iteratively
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import pytest

from object_diff import compare
from object_diff.tree.nodes import DiffNode, State
from object_diff.tree.path import NodePath
from object_diff.tree.visitors import (
    NodeCollector,
    NodePrinter,
    PathFinder,
    ReturnableOnlyVisitor,
    Visit,
    walk,
)


@pytest.fixture
def changed_chain(linked: Callable[..., Any]) -> tuple[Any, Any, DiffNode]:
    working = linked("a", "b")
    base = linked("a", "c")
    return working, base, compare(working, base)


def _paths(nodes: list[DiffNode]) -> list[str]:
    return [str(node.path) for node in nodes]


class TestWalk:
    def test_pre_order_in_insertion_order(
        self, changed_chain: tuple[Any, Any, DiffNode]
    ) -> None:
        _, _, root = changed_chain
        collector = NodeCollector()
        walk(root, collector)
        assert _paths(collector.nodes) == [
            "/",
            "/id",
            "/reference",
            "/reference/id",
            "/reference/reference",
        ]

    def test_visit_method_delegates_to_walk(
        self, changed_chain: tuple[Any, Any, DiffNode]
    ) -> None:
        _, _, root = changed_chain
        via_method = NodeCollector()
        via_function = NodeCollector()
        root.visit(via_method)
        walk(root, via_function)
        assert via_method.nodes == via_function.nodes

    def test_stop_aborts_traversal(
        self, changed_chain: tuple[Any, Any, DiffNode]
    ) -> None:
        _, _, root = changed_chain
        seen: list[DiffNode] = []

        def first_two(node: DiffNode, visit: Visit) -> None:
            seen.append(node)
            if len(seen) == 2:
                visit.stop()

        root.visit(first_two)
        assert _paths(seen) == ["/", "/id"]

    def test_dont_go_deeper_prunes_subtree(
        self, changed_chain: tuple[Any, Any, DiffNode]
    ) -> None:
        _, _, root = changed_chain
        seen: list[DiffNode] = []

        def shallow(node: DiffNode, visit: Visit) -> None:
            seen.append(node)
            if node.path == NodePath.of("reference"):
                visit.dont_go_deeper()

        root.visit(shallow)
        assert _paths(seen) == ["/", "/id", "/reference"]

    def test_deep_tree_is_walked_fully(self) -> None:
        working: dict[str, Any] = {}
        base: dict[str, Any] = {}
        w, b = working, base
        for _ in range(120):
            w["next"] = {}
            b["next"] = {}
            w, b = w["next"], b["next"]
        w["leaf"] = 1
        b["leaf"] = 2

        collector = NodeCollector(State.CHANGED)
        walk(compare(working, base), collector)
        assert len(collector.nodes) == 122


class TestNodeCollector:
    def test_filters_by_state(self, changed_chain: tuple[Any, Any, DiffNode]) -> None:
        _, _, root = changed_chain
        collector = NodeCollector(State.UNTOUCHED)
        root.visit(collector)
        assert _paths(collector.nodes) == ["/id", "/reference/reference"]

    def test_accepts_several_states(
        self, changed_chain: tuple[Any, Any, DiffNode]
    ) -> None:
        _, _, root = changed_chain
        collector = NodeCollector(State.ADDED, State.CHANGED)
        root.visit(collector)
        assert _paths(collector.nodes) == ["/", "/reference", "/reference/id"]


class TestPathFinder:
    def test_finds_node(self, changed_chain: tuple[Any, Any, DiffNode]) -> None:
        _, _, root = changed_chain
        finder = PathFinder(NodePath.of("reference", "id"))
        root.visit(finder)
        assert finder.node is root.get_child(NodePath.of("reference", "id"))

    def test_missing_path_leaves_node_empty(
        self, changed_chain: tuple[Any, Any, DiffNode]
    ) -> None:
        _, _, root = changed_chain
        finder = PathFinder(NodePath.of("nope"))
        root.visit(finder)
        assert finder.node is None


class TestReturnableOnlyVisitor:
    def test_hides_untouched_leaves(
        self, changed_chain: tuple[Any, Any, DiffNode]
    ) -> None:
        _, _, root = changed_chain
        collector = NodeCollector()
        root.visit(ReturnableOnlyVisitor(collector))
        assert _paths(collector.nodes) == ["/", "/reference", "/reference/id"]


class TestNodePrinter:
    def test_renders_changed_leaves_with_values(
        self, changed_chain: tuple[Any, Any, DiffNode]
    ) -> None:
        working, base, root = changed_chain
        printer = NodePrinter(working, base)
        root.visit(printer)
        assert printer.lines == [
            "/ ===> changed",
            "/reference ===> changed",
            "/reference/id ===> changed ('c' => 'b')",
        ]
        assert str(printer) == "\n".join(printer.lines)

    def test_renders_circle_start(self, linked: Callable[..., Any]) -> None:
        working = linked("a", "b", close=True)
        base = linked("a", "c", close=True)
        printer = NodePrinter(working, base)
        compare(working, base).visit(printer)
        assert printer.lines[-1] == "/reference/reference ===> circular (circle starts at /)"

    def test_logs_lines_at_debug(
        self,
        changed_chain: tuple[Any, Any, DiffNode],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        working, base, root = changed_chain
        caplog.set_level(logging.DEBUG, logger="object_diff.tree.visitors")
        root.visit(NodePrinter(working, base))
        assert "/reference/id ===> changed" in caplog.text
