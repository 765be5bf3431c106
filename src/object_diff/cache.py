"""CachingEnumerator: LRU-backed caching proxy for any MemberEnumerator.

Introspecting a type (dataclass fields, MRO walk, ``__init__`` signatures) is
far more expensive than comparing a member, and the same types are met over
and over while walking a graph.  ``CachingEnumerator`` wraps any
``MemberEnumerator``-conformant object and memoises its answer per type.
Eviction is silent once ``max_size`` types are cached.

Each instance owns its own ``LRUCache``; two differs never share entries.

Example::

    from object_diff.cache import CachingEnumerator
    from object_diff.introspection import IntrospectionEnumerator

    enumerator = CachingEnumerator(IntrospectionEnumerator(), max_size=256)
    enumerator.members(User)   # introspects
    enumerator.members(User)   # served from memory
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from cachetools import LRUCache

if TYPE_CHECKING:
    from object_diff.introspection import Member
    from object_diff.protocols import MemberEnumerator

__all__ = ["CachingEnumerator"]


class CachingEnumerator:
    """LRU-backed caching proxy around any ``MemberEnumerator``.

    Args:
        enumerator: Any object with a ``members(value_type)`` method.
        max_size: Maximum number of types whose member tuples are kept.
            Defaults to 256.
    """

    def __init__(self, enumerator: MemberEnumerator, max_size: int = 256) -> None:
        self._enumerator: Any = enumerator
        self._cache: LRUCache[type, tuple[Member, ...]] = LRUCache(maxsize=max_size)

    @property
    def max_size(self) -> int:
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        return int(self._cache.currsize)

    def members(self, value_type: type) -> tuple[Member, ...]:
        """Return the members of ``value_type``; only a miss hits the wrapped enumerator."""
        try:
            return self._cache[value_type]
        except KeyError:
            pass
        members = tuple(self._enumerator.members(value_type))
        self._cache[value_type] = members
        return members

    def clear(self) -> None:
        self._cache.clear()
