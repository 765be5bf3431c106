"""MemberStrategy: bean-style, member-by-member comparison.

The comparable members of the dispatch type are obtained from the
introspection collaborator (any ``MemberEnumerator``).  Each member becomes a
child node addressed by ``PropertyElement(member.name)``; the node's own
state is then aggregated from those children by the traversal engine.

Types the collaborator finds no members for are still compared when they are
records (dataclasses) or their instances carry a ``__dict__``:

- the public instance attributes of both values become the members, working
  side first (``self.items = []`` set in a parameterless ``__init__``);
- with no attributes either (an empty marker dataclass), the two values are
  compared as opaque leaves by equality.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any

from object_diff.equality import values_equal
from object_diff.protocols import Capability
from object_diff.tree.nodes import State
from object_diff.tree.path import PropertyElement

if TYPE_CHECKING:
    from object_diff.engine.traversal import TraversalEngine
    from object_diff.protocols import MemberEnumerator
    from object_diff.tree.nodes import DiffNode

__all__ = ["MemberStrategy"]


class MemberStrategy:
    """Recurses into every member the enumerator reports for the type."""

    capability = Capability.MEMBER

    def __init__(self, enumerator: MemberEnumerator) -> None:
        self._enumerator = enumerator

    def accepts(self, value_type: type) -> bool:
        if self._enumerator.members(value_type):
            return True
        # Class objects are values here, not records.
        if issubclass(value_type, type):
            return False
        return dataclasses.is_dataclass(value_type) or _has_instance_dict(value_type)

    def compare(
        self,
        node: DiffNode,
        working: Any,
        base: Any,
        engine: TraversalEngine,
    ) -> State | None:
        members = self._enumerator.members(node.value_type)
        if members:
            for member in members:
                engine.compare_child(
                    node,
                    PropertyElement(member.name),
                    member.read(working),
                    member.read(base),
                )
            return None

        names = _instance_attributes(working, base)
        if not names:
            return State.UNTOUCHED if values_equal(working, base) else State.CHANGED
        for name in names:
            engine.compare_child(
                node,
                PropertyElement(name),
                getattr(working, name, None),
                getattr(base, name, None),
            )
        return None


def _has_instance_dict(value_type: type) -> bool:
    return any("__dict__" in vars(cls) for cls in value_type.__mro__)


def _instance_attributes(*instances: Any) -> list[str]:
    names: dict[str, None] = {}
    for instance in instances:
        for name in getattr(instance, "__dict__", {}):
            if not name.startswith("_"):
                names.setdefault(name, None)
    return list(names)
