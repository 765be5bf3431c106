"""Comparison strategies and the registry that dispatches between them.

All strategies satisfy the ``ComparisonStrategy`` Protocol structurally:

- ``PrimitiveStrategy`` : leaf value equality
- ``MemberStrategy``    : member-by-member recursion via a ``MemberEnumerator``
- ``SequenceStrategy``  : ordered sequences (positional or equality alignment)
- ``MappingStrategy``   : keyed mappings
- ``SetStrategy``       : unordered sets, membership only

Custom strategies are plugged in per path with ``DiffConfig.with_strategy``.
"""

from object_diff.strategies.mapping import MappingStrategy
from object_diff.strategies.member import MemberStrategy
from object_diff.strategies.primitive import PRIMITIVE_TYPES, PrimitiveStrategy
from object_diff.strategies.registry import StrategyRegistry
from object_diff.strategies.sequence import SequenceStrategy
from object_diff.strategies.sets import SetStrategy

__all__ = [
    "PRIMITIVE_TYPES",
    "MappingStrategy",
    "MemberStrategy",
    "PrimitiveStrategy",
    "SequenceStrategy",
    "SetStrategy",
    "StrategyRegistry",
]
