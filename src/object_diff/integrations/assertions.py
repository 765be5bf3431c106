"""NodeAssertion: chained assertions about a node of a difference tree.

Select a node by path from a root, then chain checks; every failed check
raises ``AssertionError`` with the selected path and the node found there::

    assert_node(root, "reference", "reference").is_circular().has_circle_start_path(
        NodePath.root()
    )
    assert_node(root, NodePath.of("items")).has_state(State.CHANGED).has_children(2)

No pytest import is needed here; the pytest plugin merely exposes
``assert_node`` as a fixture.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

from object_diff.tree.nodes import State
from object_diff.tree.path import CollectionElement, NodePath, PropertyElement

if TYPE_CHECKING:
    from object_diff.tree.nodes import DiffNode
    from object_diff.tree.path import Element

__all__ = ["NodeAssertion", "assert_node"]


def assert_node(
    root: DiffNode | None,
    *selector: NodePath | Element | str,
) -> NodeAssertion:
    """Select the node below ``root`` addressed by ``selector``.

    ``selector`` is empty (the root itself), a single ``NodePath``, or a chain
    of property names and/or path elements.
    """
    if len(selector) == 1 and isinstance(selector[0], NodePath):
        path = selector[0]
    else:
        elements: list[Element] = []
        for part in selector:
            if isinstance(part, NodePath):
                elements.extend(part.elements)
            elif isinstance(part, (PropertyElement, CollectionElement)):
                elements.append(part)
            else:
                elements.append(PropertyElement(part))
        path = NodePath(tuple(elements))
    return NodeAssertion(root, path)


class NodeAssertion:
    """Assertions about the node at ``path`` (which may not exist)."""

    def __init__(self, root: DiffNode | None, path: NodePath) -> None:
        self._root = root
        self._path = path
        self._node = root.get_child(path) if root is not None else None

    @property
    def node(self) -> DiffNode | None:
        return self._node

    def exists(self) -> NodeAssertion:
        if self._node is None:
            self._fail("expected a node")
        return self

    def does_not_exist(self) -> NodeAssertion:
        if self._node is not None:
            self._fail("expected no node")
        return self

    def has_state(self, state: State) -> NodeAssertion:
        node = self._existing()
        if node.state is not state:
            self._fail(f"expected state {state.value!r}")
        return self

    def has_children(self, count: int | None = None) -> NodeAssertion:
        if count is not None and count < 0:
            msg = "The number of expected children must be greater or equal to 0."
            raise ValueError(msg)
        if count == 0:
            return self.has_no_children()
        node = self._existing()
        if count is None and not node.has_children():
            self._fail("expected at least one child")
        if count is not None and node.child_count != count:
            self._fail(f"expected {count} children")
        return self

    def has_no_children(self) -> NodeAssertion:
        if self._node is not None and self._node.has_children():
            self._fail("expected no children")
        return self

    def is_circular(self) -> NodeAssertion:
        return self.has_state(State.CIRCULAR)

    def is_untouched(self) -> NodeAssertion:
        return self.has_state(State.UNTOUCHED)

    def has_changes(self) -> NodeAssertion:
        if not self._existing().has_changes():
            self._fail("expected changes")
        return self

    def has_circle_start_path(self, path: NodePath) -> NodeAssertion:
        node = self._existing()
        if node.circle_start_path != path:
            self._fail(f"expected circle start path {path}")
        return self

    def _existing(self) -> DiffNode:
        if self._node is None:
            self._fail("expected a node")
        return self._node

    def _fail(self, expectation: str) -> NoReturn:
        found = repr(self._node) if self._node is not None else "nothing"
        children = (
            [str(c.path) for c in self._node] if self._node is not None else []
        )
        raise AssertionError(
            f"Node assertion failed at path {self._path}: {expectation}\n"
            f"  found:    {found}\n"
            f"  children: {children}"
        )
