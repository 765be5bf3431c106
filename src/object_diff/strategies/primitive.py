"""PrimitiveStrategy: leaf comparison by value equality.

Leaf values have no structure worth recursing into: two present values are
UNTOUCHED when equal and CHANGED otherwise.  Besides the built-in scalar
types, any type registered through ``DiffConfig.equals_only_types`` is
compared here, which lets callers treat value objects (money amounts,
coordinates, ...) as opaque.
"""

from __future__ import annotations

import datetime
import enum
import fractions
import uuid
from decimal import Decimal
from pathlib import PurePath
from typing import TYPE_CHECKING, Any

from object_diff.equality import values_equal
from object_diff.protocols import Capability
from object_diff.tree.nodes import State

if TYPE_CHECKING:
    from object_diff.engine.traversal import TraversalEngine
    from object_diff.tree.nodes import DiffNode

__all__ = ["PRIMITIVE_TYPES", "PrimitiveStrategy"]

PRIMITIVE_TYPES: tuple[type, ...] = (
    type(None),
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    bytearray,
    memoryview,
    range,
    Decimal,
    fractions.Fraction,
    enum.Enum,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    datetime.tzinfo,
    uuid.UUID,
    PurePath,
)


class PrimitiveStrategy:
    """Compares leaf values with ``==`` (identity short-circuits)."""

    capability = Capability.PRIMITIVE

    def __init__(self, equals_only_types: frozenset[type] = frozenset()) -> None:
        self._types = PRIMITIVE_TYPES + tuple(equals_only_types)

    def accepts(self, value_type: type) -> bool:
        return issubclass(value_type, self._types)

    def compare(
        self,
        node: DiffNode,
        working: Any,
        base: Any,
        engine: TraversalEngine,
    ) -> State:
        return State.UNTOUCHED if values_equal(working, base) else State.CHANGED
