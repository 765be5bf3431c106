"""ObjectDiffer: orchestrator that wires configuration, strategies and engine.

This is the central wiring layer between the traversal engine and the public
API.

Architecture:
- The differ owns one ``StrategyRegistry`` and one ``CachingEnumerator``
  built from its ``DiffConfig``.  Both are stateless with respect to any
  single comparison, so member lists cached by one ``compare()`` call are
  reused by the next.
- Every ``compare()`` call creates a fresh ``TraversalEngine`` (and with it a
  fresh ``InstanceTracker``), so concurrent calls on one differ never share
  mutable traversal state.
- The returned tree is frozen and can be read from any thread.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from object_diff.cache import CachingEnumerator
from object_diff.engine.config import DiffConfig
from object_diff.engine.returnable import ReturnableResolver
from object_diff.engine.traversal import TraversalEngine
from object_diff.introspection import IntrospectionEnumerator
from object_diff.strategies.registry import StrategyRegistry
from object_diff.tree.visitors import NodeCollector

if TYPE_CHECKING:
    from object_diff.protocols import MemberEnumerator
    from object_diff.tree.nodes import DiffNode

__all__ = ["ObjectDiffer"]

logger = logging.getLogger(__name__)


class ObjectDiffer:
    """Compares two object graphs and returns the root ``DiffNode``.

    Example::

        from object_diff import ObjectDiffer

        differ = ObjectDiffer()
        root = differ.compare(working_order, base_order)
        root.state                                   # State.CHANGED
        root.get_child(NodePath.of("customer", "email")).state
    """

    def __init__(
        self,
        config: DiffConfig | None = None,
        enumerator: MemberEnumerator | None = None,
    ) -> None:
        """Initialise the differ.

        Args:
            config: Comparison configuration.  Defaults to ``DiffConfig()``.
            enumerator: Introspection collaborator listing the comparable
                members of a type.  Defaults to ``IntrospectionEnumerator()``.
                Whatever is given is wrapped in a per-instance LRU cache of
                ``config.max_member_cache_size`` types.
        """
        self._config: DiffConfig = config if config is not None else DiffConfig()
        raw_enumerator: Any = (
            enumerator if enumerator is not None else IntrospectionEnumerator()
        )
        self._enumerator = CachingEnumerator(
            raw_enumerator, max_size=self._config.max_member_cache_size
        )
        self._registry = StrategyRegistry(self._config, self._enumerator)
        self._resolver = ReturnableResolver(self._config)

    @property
    def config(self) -> DiffConfig:
        return self._config

    def compare(self, working: Any, base: Any) -> DiffNode:
        """Compare ``working`` against ``base``.

        Neither graph is mutated.  Cycles terminate as CIRCULAR nodes.

        Raises:
            UnsupportedTypeError: If a value in either graph cannot be
                dispatched to any comparison strategy.
        """
        t0 = time.perf_counter()
        engine = TraversalEngine(self._config, self._registry, self._resolver)
        root = engine.run(working, base)
        if logger.isEnabledFor(logging.DEBUG):
            collector = NodeCollector()
            root.visit(collector)
            logger.debug(
                "Compared %s against %s: root %s, %d nodes in %.2f ms",
                type(working).__qualname__,
                type(base).__qualname__,
                root.state.value,
                len(collector.nodes),
                (time.perf_counter() - t0) * 1000.0,
            )
        return root
