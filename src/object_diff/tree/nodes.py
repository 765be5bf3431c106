"""DiffNode and State: the result tree of an object-graph comparison.

One ``DiffNode`` exists per compared location.  Each node is tied to the
``NodePath`` leading to it from the comparison root, carries the comparison
outcome (``State``), and exclusively owns its children.  ``parent`` is a
non-owning (weak) back-reference used only for upward queries such as
locating the ancestor that closed a circular reference; keep the root alive
while navigating upward.

Nodes are assembled by the traversal engine during a single ``compare`` call
and frozen before the root is handed back: after that, state and structure
are read-only and safe to share between threads.
"""

from __future__ import annotations

import weakref
from collections.abc import Iterator, Mapping
from enum import StrEnum, auto
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from object_diff.equality import values_equal
from object_diff.tree.path import CollectionElement, Element, NodePath, PropertyElement

if TYPE_CHECKING:
    from object_diff.engine.returnable import ReturnableResolver
    from object_diff.tree.visitors import NodeVisitor

__all__ = ["DiffNode", "State"]

_MISSING = object()


class State(StrEnum):
    """Comparison outcome at a node.

    - ADDED     -> "added"     : present in working, absent in base
    - REMOVED   -> "removed"   : absent in working, present in base
    - CHANGED   -> "changed"   : both present, values or descendants differ
    - UNTOUCHED -> "untouched" : both present (or both absent) and equal
    - CIRCULAR  -> "circular"  : working value already on the descent chain
    - IGNORED   -> "ignored"   : excluded by configuration, not compared
    """

    ADDED = auto()
    REMOVED = auto()
    CHANGED = auto()
    UNTOUCHED = auto()
    CIRCULAR = auto()
    IGNORED = auto()


# States that make an enclosing container CHANGED.
CHANGE_STATES: frozenset[State] = frozenset(
    {State.ADDED, State.REMOVED, State.CHANGED, State.CIRCULAR}
)


class DiffNode:
    """A node of the comparison result tree.

    Attributes:
        path:        Path from the comparison root to this node.
        state:       Comparison outcome; assigned exactly once.
        children:    Read-only mapping element -> child node, in traversal order.
        parent:      Enclosing node, ``None`` for the root (or once the tree
                     above has been garbage collected).
        value_type:  Runtime type the comparison strategy was resolved for
                     (``type(None)`` when both sides were absent).
        circle_start_path: For CIRCULAR nodes, the path of the ancestor whose
                     working value closed the cycle; ``None`` otherwise.
    """

    __slots__ = (
        "__weakref__",
        "_children",
        "_circle_start_path",
        "_frozen",
        "_parent",
        "_path",
        "_resolver",
        "_state",
        "_value_type",
    )

    def __init__(
        self,
        path: NodePath,
        value_type: type = type(None),
        parent: DiffNode | None = None,
        resolver: ReturnableResolver | None = None,
    ) -> None:
        self._path = path
        self._value_type = value_type
        self._parent: weakref.ref[DiffNode] | None = (
            weakref.ref(parent) if parent is not None else None
        )
        self._resolver = resolver
        self._state: State | None = None
        self._children: dict[Element, DiffNode] = {}
        self._circle_start_path: NodePath | None = None
        self._frozen = False

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    @property
    def path(self) -> NodePath:
        return self._path

    @property
    def state(self) -> State:
        if self._state is None:
            msg = f"State of node at {self._path} has not been assigned yet"
            raise RuntimeError(msg)
        return self._state

    @property
    def children(self) -> Mapping[Element, DiffNode]:
        return MappingProxyType(self._children)

    @property
    def parent(self) -> DiffNode | None:
        return self._parent() if self._parent is not None else None

    @property
    def value_type(self) -> type:
        return self._value_type

    @property
    def element(self) -> Element | None:
        """The last element of this node's path; ``None`` for the root."""
        return self._path.last_element

    @property
    def circle_start_path(self) -> NodePath | None:
        return self._circle_start_path

    @property
    def circle_start_node(self) -> DiffNode | None:
        """The ancestor node whose working value closed this node's cycle."""
        if self._circle_start_path is None:
            return None
        ancestor = self.parent
        while ancestor is not None:
            if ancestor.path == self._circle_start_path:
                return ancestor
            ancestor = ancestor.parent
        return None

    @property
    def child_count(self) -> int:
        return len(self._children)

    # ------------------------------------------------------------------
    # State queries
    # ------------------------------------------------------------------

    def is_root(self) -> bool:
        return self._parent is None and self._path.is_root()

    def is_added(self) -> bool:
        return self._state is State.ADDED

    def is_removed(self) -> bool:
        return self._state is State.REMOVED

    def is_changed(self) -> bool:
        return self._state is State.CHANGED

    def is_untouched(self) -> bool:
        return self._state is State.UNTOUCHED

    def is_circular(self) -> bool:
        return self._state is State.CIRCULAR

    def is_ignored(self) -> bool:
        return self._state is State.IGNORED

    def has_children(self) -> bool:
        return bool(self._children)

    def has_changes(self) -> bool:
        """True if this node or any descendant is ADDED/REMOVED/CHANGED/CIRCULAR."""
        if self._state in CHANGE_STATES:
            return True
        return any(child.has_changes() for child in self._children.values())

    # ------------------------------------------------------------------
    # Filtered (returnable) view
    # ------------------------------------------------------------------

    def is_returnable(self) -> bool:
        """Whether the active returnable policy exposes this node."""
        return self._effective_resolver().is_returnable(self)

    def returnable_children(self) -> list[DiffNode]:
        resolver = self._effective_resolver()
        return [c for c in self._children.values() if resolver.is_returnable(c)]

    def has_returnable_children(self) -> bool:
        resolver = self._effective_resolver()
        return any(resolver.is_returnable(c) for c in self._children.values())

    def _effective_resolver(self) -> ReturnableResolver:
        if self._resolver is None:
            from object_diff.engine.returnable import ReturnableResolver

            self._resolver = ReturnableResolver()
        return self._resolver

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_child(self, key: NodePath | Element | str) -> DiffNode | None:
        """Look up a node below this one.

        Args:
            key: An absolute ``NodePath`` (resolved downward from this node),
                 a path element naming a direct child, or a property name.

        Returns:
            The matching node, or ``None`` when nothing exists at ``key``.
        """
        if isinstance(key, NodePath):
            return self._descend(key)
        if isinstance(key, str):
            key = PropertyElement(key)
        return self._children.get(key)

    def _descend(self, path: NodePath) -> DiffNode | None:
        if path == self._path:
            return self
        if not self._path < path:
            return None
        node = self
        for element in path.elements[len(self._path) :]:
            child = node._children.get(element)
            if child is None:
                return None
            node = child
        return node

    def canonical_get(self, graph_root: Any, default: Any = None) -> Any:
        """Resolve this node's path against an arbitrary graph root.

        Works equally for the working graph, the base graph, or any graph of
        the same shape.  Returns ``default`` when the path does not resolve,
        which is expected for ADDED/REMOVED nodes on their absent side.

        Sequence elements are addressed by the working item.  A CHANGED
        element whose working and base items are unequal (a positionally
        aligned record with an edited field, say) therefore resolves only
        against the working graph; against the base graph it, and everything
        below it, yields ``default``.
        """
        value = graph_root
        for element in self._path.elements:
            value = _resolve_element(value, element)
            if value is _MISSING:
                return default
        return value

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def visit(self, visitor: NodeVisitor) -> None:
        """Run ``visitor`` over this subtree in pre-order (parent first)."""
        from object_diff.tree.visitors import walk

        walk(self, visitor)

    def __iter__(self) -> Iterator[DiffNode]:
        return iter(list(self._children.values()))

    def __len__(self) -> int:
        return len(self._children)

    def __bool__(self) -> bool:
        return True

    def __repr__(self) -> str:
        state = self._state.value if self._state is not None else None
        return (
            f"DiffNode(path='{self._path}', state={state!r}, "
            f"type={self._value_type.__name__}, children={len(self._children)})"
        )

    # ------------------------------------------------------------------
    # Construction hooks (traversal engine only)
    # ------------------------------------------------------------------

    def _assign_state(self, state: State) -> None:
        self._check_mutable()
        if self._state is not None:
            msg = (
                f"State of node at {self._path} is already {self._state.value!r}; "
                f"cannot reassign to {state.value!r}"
            )
            raise RuntimeError(msg)
        self._state = state

    def _mark_circular(self, circle_start_path: NodePath) -> None:
        self._assign_state(State.CIRCULAR)
        self._circle_start_path = circle_start_path

    def _add_child(self, child: DiffNode) -> None:
        self._check_mutable()
        element = child.path.last_element
        if (
            element is None
            or child.parent is not self
            or child.path.parent != self._path
        ):
            msg = f"Node at {child.path} is not a direct child of {self._path}"
            raise ValueError(msg)
        # Equal collection members collapse into one child; the first wins.
        self._children.setdefault(element, child)

    def _freeze(self) -> None:
        stack: list[DiffNode] = [self]
        while stack:
            node = stack.pop()
            node._frozen = True
            stack.extend(node._children.values())

    def _check_mutable(self) -> None:
        if self._frozen:
            msg = f"Node at {self._path} belongs to a finished comparison and is read-only"
            raise RuntimeError(msg)


def _resolve_element(value: Any, element: Element) -> Any:
    """Step from ``value`` along one path element; ``_MISSING`` if it breaks."""
    if value is None:
        return _MISSING
    if isinstance(element, PropertyElement):
        return getattr(value, element.name, _MISSING)
    if isinstance(element, CollectionElement):
        reference = element.reference
        if isinstance(value, Mapping):
            try:
                return value[reference] if reference in value else _MISSING
            except (TypeError, RecursionError):
                return _MISSING
        if isinstance(value, (str, bytes, bytearray)):
            return _MISSING
        if hasattr(value, "__iter__"):
            # Identity first so that the same instance wins over equal ones.
            items = list(value)
            for item in items:
                if item is reference:
                    return item
            for item in items:
                if values_equal(item, reference):
                    return item
    return _MISSING
