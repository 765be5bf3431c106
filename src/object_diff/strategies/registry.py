"""StrategyRegistry: selects exactly one comparison strategy per node.

Selection is type-driven and deterministic:

1. A per-path override from the configuration wins (it must still accept
   the value type).
2. Otherwise the runtime type of the working value (the base value when the
   working side is absent) is offered to the built-ins in order
   primitive -> mapping -> set -> sequence -> member; the first that accepts
   it is used.
3. If nothing accepts the type (a slotted object without members, a bare
   ``object()``, a class object), ``UnsupportedTypeError`` is raised and the
   whole comparison fails.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from object_diff.errors import UnsupportedTypeError
from object_diff.strategies.mapping import MappingStrategy
from object_diff.strategies.member import MemberStrategy
from object_diff.strategies.primitive import PrimitiveStrategy
from object_diff.strategies.sequence import SequenceStrategy
from object_diff.strategies.sets import SetStrategy

if TYPE_CHECKING:
    from object_diff.engine.config import DiffConfig
    from object_diff.protocols import ComparisonStrategy, MemberEnumerator
    from object_diff.tree.path import NodePath

__all__ = ["StrategyRegistry"]

logger = logging.getLogger(__name__)


class StrategyRegistry:
    """Built-in strategies wired for one configuration.

    Strategies are stateless, so a registry is safely reused across
    ``compare`` calls of the same differ.
    """

    def __init__(self, config: DiffConfig, enumerator: MemberEnumerator) -> None:
        self.primitive = PrimitiveStrategy(config.equals_only_types)
        self.builtins: tuple[ComparisonStrategy, ...] = (
            self.primitive,
            MappingStrategy(),
            SetStrategy(),
            SequenceStrategy(config.sequence_alignment),
            MemberStrategy(enumerator),
        )

    def resolve(
        self,
        path: NodePath,
        working: Any,
        base: Any,
        forced: ComparisonStrategy | None = None,
    ) -> ComparisonStrategy:
        """Return the strategy for the pair at ``path``.

        Raises:
            UnsupportedTypeError: If the forced strategy rejects the value type
                or no built-in strategy accepts it.
        """
        value_type = type(working) if working is not None else type(base)

        if forced is not None:
            if not forced.accepts(value_type):
                raise UnsupportedTypeError(
                    value_type,
                    path,
                    f"configured strategy {type(forced).__name__} does not accept it",
                )
            return forced

        for strategy in self.builtins:
            if strategy.accepts(value_type):
                logger.debug(
                    "Resolved %s strategy for %s at %s",
                    strategy.capability,
                    value_type.__qualname__,
                    path,
                )
                return strategy

        raise UnsupportedTypeError(
            value_type, path, "no comparison strategy accepts it"
        )
