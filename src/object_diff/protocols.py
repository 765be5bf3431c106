"""Structural protocols for the two object-diff extension points.

- ``MemberEnumerator``   : the introspection collaborator that lists the
  comparable members of a type.
- ``ComparisonStrategy`` : an algorithm that compares one shape of value.

Custom implementations do not inherit from anything: any class with the
conformant attributes passes ``isinstance`` checks.

Example::

    from object_diff.protocols import Capability, ComparisonStrategy
    from object_diff.tree import State

    class CaseInsensitiveStrings:
        capability = Capability.PRIMITIVE

        def accepts(self, value_type: type) -> bool:
            return issubclass(value_type, str)

        def compare(self, node, working, base, engine):
            return State.UNTOUCHED if working.lower() == base.lower() else State.CHANGED

    assert isinstance(CaseInsensitiveStrings(), ComparisonStrategy)  # True
"""

from __future__ import annotations

from enum import StrEnum, auto
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from object_diff.engine.traversal import TraversalEngine
    from object_diff.introspection import Member
    from object_diff.tree.nodes import DiffNode, State

__all__ = ["Capability", "ComparisonStrategy", "MemberEnumerator"]


class Capability(StrEnum):
    """The shape of value a strategy knows how to compare.

    - PRIMITIVE -> "primitive" : leaf value equality
    - MEMBER    -> "member"    : member-by-member (bean-style) recursion
    - SEQUENCE  -> "sequence"  : ordered sequences
    - MAPPING   -> "mapping"   : keyed mappings
    - SET       -> "set"       : unordered sets (membership only)
    """

    PRIMITIVE = auto()
    MEMBER = auto()
    SEQUENCE = auto()
    MAPPING = auto()
    SET = auto()


@runtime_checkable
class MemberEnumerator(Protocol):
    """Structural protocol for the introspection collaborator.

    ``members`` must return the comparable members of ``value_type`` in a
    stable order.  An empty tuple means the type has no members and cannot be
    compared member by member.
    """

    def members(self, value_type: type) -> tuple[Member, ...]: ...


@runtime_checkable
class ComparisonStrategy(Protocol):
    """Structural protocol for comparison strategies.

    ``compare`` is only called when both sides are present.  A leaf strategy
    returns ``State.CHANGED`` or ``State.UNTOUCHED`` directly.  A composite
    strategy adds children through ``engine.compare_child`` and returns
    ``None``; the engine then derives the node state from the children.
    """

    capability: Capability

    def accepts(self, value_type: type) -> bool: ...

    def compare(
        self,
        node: DiffNode,
        working: Any,
        base: Any,
        engine: TraversalEngine,
    ) -> State | None: ...
