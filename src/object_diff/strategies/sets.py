"""SetStrategy: unordered-set comparison by membership.

Sets have no internal structure to recurse into beyond membership:

- element only in working -> child ADDED
- element only in base    -> child REMOVED
- element in both         -> UNTOUCHED leaf child (never recursed into)

Children are addressed by ``CollectionElement(element)``.
"""

from __future__ import annotations

from collections.abc import Set
from typing import TYPE_CHECKING, Any

from object_diff.protocols import Capability
from object_diff.tree.nodes import State
from object_diff.tree.path import CollectionElement

if TYPE_CHECKING:
    from object_diff.engine.traversal import TraversalEngine
    from object_diff.tree.nodes import DiffNode

__all__ = ["SetStrategy"]


class SetStrategy:
    capability = Capability.SET

    def accepts(self, value_type: type) -> bool:
        return issubclass(value_type, Set)

    def compare(
        self,
        node: DiffNode,
        working: Set[Any],
        base: Set[Any],
        engine: TraversalEngine,
    ) -> State | None:
        for item in working:
            element = CollectionElement(item)
            if item in base:
                engine.record_child(node, element, State.UNTOUCHED, type(item))
            else:
                engine.compare_child(node, element, item, None)
        for item in base:
            if item not in working:
                engine.compare_child(node, CollectionElement(item), None, item)
        return None
