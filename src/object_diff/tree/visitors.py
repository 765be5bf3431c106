"""Read-only visitor dispatch over a finished DiffNode tree.

A visitor is any callable ``visitor(node, visit)``.  The ``Visit`` handle lets
the visitor steer the walk:

- ``visit.dont_go_deeper()`` : skip the current node's children.
- ``visit.stop()``           : abort the whole traversal.

``walk`` is iterative (explicit stack), so arbitrarily deep trees never hit the
interpreter recursion limit.  Cycles cannot occur: the traversal engine
truncates them into childless CIRCULAR nodes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from object_diff.tree.nodes import DiffNode, State
    from object_diff.tree.path import NodePath

__all__ = [
    "NodeCollector",
    "NodePrinter",
    "NodeVisitor",
    "PathFinder",
    "ReturnableOnlyVisitor",
    "Visit",
    "walk",
]

logger = logging.getLogger(__name__)


class Visit:
    """Traversal control handle passed to every visitor call."""

    __slots__ = ("_skip_children", "_stopped")

    def __init__(self) -> None:
        self._stopped = False
        self._skip_children = False

    def stop(self) -> None:
        self._stopped = True

    def dont_go_deeper(self) -> None:
        self._skip_children = True

    @property
    def is_stopped(self) -> bool:
        return self._stopped

    def _take_skip(self) -> bool:
        skip, self._skip_children = self._skip_children, False
        return skip


class NodeVisitor(Protocol):
    def __call__(self, node: DiffNode, visit: Visit) -> None: ...


def walk(root: DiffNode, visitor: NodeVisitor) -> None:
    """Visit ``root`` and its descendants depth-first, parent before children."""
    visit = Visit()
    stack: list[DiffNode] = [root]
    while stack:
        node = stack.pop()
        visitor(node, visit)
        if visit.is_stopped:
            return
        if visit._take_skip():
            continue
        # Reversed so the first child is popped first (insertion order).
        stack.extend(reversed(list(node.children.values())))


# ---------------------------------------------------------------------------
# Built-in visitors
# ---------------------------------------------------------------------------


class NodeCollector:
    """Collects visited nodes, optionally only those in the given states.

    Example::

        collector = NodeCollector(State.CHANGED, State.ADDED)
        root.visit(collector)
        [str(n.path) for n in collector.nodes]
    """

    def __init__(self, *states: State) -> None:
        self._states = frozenset(states)
        self.nodes: list[DiffNode] = []

    def __call__(self, node: DiffNode, visit: Visit) -> None:
        if not self._states or node.state in self._states:
            self.nodes.append(node)


class PathFinder:
    """Locates the node at an absolute path and stops as soon as it is found."""

    def __init__(self, path: NodePath) -> None:
        self._path = path
        self.node: DiffNode | None = None

    def __call__(self, node: DiffNode, visit: Visit) -> None:
        if node.path == self._path:
            self.node = node
            visit.stop()
        elif not node.path < self._path:
            visit.dont_go_deeper()


class ReturnableOnlyVisitor:
    """Forwards only returnable nodes and never descends into hidden subtrees."""

    def __init__(self, delegate: Callable[[DiffNode, Visit], None]) -> None:
        self._delegate = delegate

    def __call__(self, node: DiffNode, visit: Visit) -> None:
        if not node.is_returnable():
            visit.dont_go_deeper()
            return
        self._delegate(node, visit)


class NodePrinter:
    """Debugging aid: renders one line per returnable node.

    Lines look like ``/reference/id ===> changed`` and are kept in ``lines``;
    each line is also emitted on this module's logger at DEBUG level.
    """

    def __init__(self, working: object = None, base: object = None) -> None:
        self._working = working
        self._base = base
        self.lines: list[str] = []

    def __call__(self, node: DiffNode, visit: Visit) -> None:
        if not node.is_returnable():
            return
        line = f"{node.path} ===> {node.state.value}"
        if node.is_changed() and not node.has_children():
            before = node.canonical_get(self._base)
            after = node.canonical_get(self._working)
            line += f" ({before!r} => {after!r})"
        elif node.is_circular():
            line += f" (circle starts at {node.circle_start_path})"
        self.lines.append(line)
        logger.debug(line)

    def __str__(self) -> str:
        return "\n".join(self.lines)
