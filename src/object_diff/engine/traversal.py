"""TraversalEngine: recursive descent that builds the DiffNode tree.

The engine walks the working and base graphs simultaneously.  For every
location it creates one ``DiffNode`` and decides its state with a fixed
policy, applied in order:

1. IGNORED   : the configuration ignores the path; nothing is compared.
2. CIRCULAR  : the working value is already on the active descent chain; the
               path where it was entered is recorded as the circle start and
               the node gets no children.
3. UNTOUCHED : both values absent (``None``).
4. ADDED / REMOVED : exactly one value absent; the absent side is never
               recursed into.
5. Dispatch to the strategy resolved by the ``StrategyRegistry``.  Leaf
   strategies return CHANGED/UNTOUCHED.  Composite strategies call back into
   ``compare_child`` and the node becomes CHANGED if any child is
   ADDED/REMOVED/CHANGED/CIRCULAR, UNTOUCHED otherwise.

States are assigned exactly once.  Composite values are pushed on the
``InstanceTracker`` for the duration of their descent and popped on every
exit path, exceptions included.

One engine (and therefore one tracker) serves exactly one top-level
comparison; ``ObjectDiffer`` creates a fresh engine per ``compare`` call.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from object_diff.engine.tracker import InstanceTracker
from object_diff.protocols import Capability
from object_diff.tree.nodes import CHANGE_STATES, DiffNode, State
from object_diff.tree.path import NodePath

if TYPE_CHECKING:
    from object_diff.engine.config import DiffConfig, PathOverrides
    from object_diff.engine.returnable import ReturnableResolver
    from object_diff.strategies.registry import StrategyRegistry
    from object_diff.tree.path import Element

__all__ = ["TraversalEngine"]

logger = logging.getLogger(__name__)


class TraversalEngine:
    """Single-use recursive comparison engine.

    Example::

        engine = TraversalEngine(config, registry, resolver)
        root = engine.run(working, base)
    """

    def __init__(
        self,
        config: DiffConfig,
        registry: StrategyRegistry,
        resolver: ReturnableResolver,
    ) -> None:
        self.config = config
        self.registry = registry
        self._resolver = resolver
        self._tracker = InstanceTracker()
        # Parents that swallowed a changed duplicate child (equal collection
        # members collapse into one node, the first one wins).
        self._collapsed_changes: set[int] = set()
        self._used = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self, working: Any, base: Any) -> DiffNode:
        """Compare the two roots and return the frozen result tree."""
        if self._used:
            msg = "TraversalEngine instances serve a single comparison"
            raise RuntimeError(msg)
        self._used = True
        root = self._compare(None, NodePath.root(), working, base)
        root._freeze()
        return root

    def compare_child(
        self,
        parent: DiffNode,
        element: Element,
        working: Any,
        base: Any,
    ) -> DiffNode:
        """Compare one aligned pair below ``parent`` and attach the result.

        Called by composite strategies.  Returns the node that ``parent`` holds
        for ``element`` afterwards (the earlier node if ``element`` was already
        present).
        """
        child = self._compare(parent, parent.path.child(element), working, base)
        return self._attach(parent, child)

    def record_child(
        self,
        parent: DiffNode,
        element: Element,
        state: State,
        value_type: type,
    ) -> DiffNode:
        """Attach a leaf child whose state the strategy already knows.

        The ignore configuration still takes precedence over ``state``.
        """
        path = parent.path.child(element)
        child = DiffNode(path, value_type, parent, self._resolver)
        if self.config.is_ignored(path):
            child._assign_state(State.IGNORED)
        else:
            child._assign_state(state)
        return self._attach(parent, child)

    def is_primitive(self, value: Any) -> bool:
        """True if ``value`` would be compared as a leaf by type dispatch."""
        return self.registry.primitive.accepts(type(value))

    @property
    def depth(self) -> int:
        """Number of composite values on the active descent chain."""
        return len(self._tracker)

    # ------------------------------------------------------------------
    # Node state policy
    # ------------------------------------------------------------------

    def _compare(
        self,
        parent: DiffNode | None,
        path: NodePath,
        working: Any,
        base: Any,
    ) -> DiffNode:
        overrides = self.config.overrides_for(path)
        value_type = type(working) if working is not None else type(base)
        node = DiffNode(path, value_type, parent, self._resolver)
        circle_start = (
            self._tracker.start_path_of(working) if working is not None else None
        )

        if overrides.ignored:
            node._assign_state(State.IGNORED)
        elif circle_start is not None:
            logger.debug("Circular reference at %s (starts at %s)", path, circle_start)
            node._mark_circular(circle_start)
        elif working is None and base is None:
            node._assign_state(State.UNTOUCHED)
        elif base is None:
            node._assign_state(State.ADDED)
        elif working is None:
            node._assign_state(State.REMOVED)
        else:
            node._assign_state(self._dispatch(node, working, base, overrides))
        return node

    def _dispatch(
        self,
        node: DiffNode,
        working: Any,
        base: Any,
        overrides: PathOverrides,
    ) -> State:
        strategy = self.registry.resolve(node.path, working, base, overrides.strategy)

        if strategy.capability is Capability.PRIMITIVE:
            state = strategy.compare(node, working, base, self)
            return state if state is not None else State.UNTOUCHED

        if not strategy.accepts(type(base)):
            logger.debug(
                "Type mismatch at %s: %s vs %s",
                node.path,
                type(working).__qualname__,
                type(base).__qualname__,
            )
            return State.CHANGED

        with self._tracker.tracking(working, node.path):
            state = strategy.compare(node, working, base, self)
        return state if state is not None else self._aggregate(node)

    def _aggregate(self, node: DiffNode) -> State:
        if id(node) in self._collapsed_changes:
            return State.CHANGED
        if any(child.state in CHANGE_STATES for child in node.children.values()):
            return State.CHANGED
        return State.UNTOUCHED

    def _attach(self, parent: DiffNode, child: DiffNode) -> DiffNode:
        element = child.element
        if element is None:
            msg = "The root node cannot be attached below another node"
            raise ValueError(msg)
        existing = parent.children.get(element)
        if existing is not None:
            if child.state in CHANGE_STATES:
                self._collapsed_changes.add(id(parent))
            logger.debug("Collapsed duplicate element %s under %s", element, parent.path)
            return existing
        parent._add_child(child)
        return child
