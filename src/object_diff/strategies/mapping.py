"""MappingStrategy: keyed-mapping comparison aligned by key equality.

Children are addressed by ``CollectionElement(key)``:

- key only in working -> child ADDED
- key only in base    -> child REMOVED
- key in both         -> recurse on the two values

Working keys come first, in working order, followed by base-only keys in base
order.  A key mapped to ``None`` is indistinguishable from a missing key.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from object_diff.protocols import Capability
from object_diff.tree.path import CollectionElement

if TYPE_CHECKING:
    from object_diff.engine.traversal import TraversalEngine
    from object_diff.tree.nodes import DiffNode, State

__all__ = ["MappingStrategy"]


class MappingStrategy:
    capability = Capability.MAPPING

    def accepts(self, value_type: type) -> bool:
        return issubclass(value_type, Mapping)

    def compare(
        self,
        node: DiffNode,
        working: Mapping[Any, Any],
        base: Mapping[Any, Any],
        engine: TraversalEngine,
    ) -> State | None:
        for key, value in working.items():
            engine.compare_child(node, CollectionElement(key), value, base.get(key))
        for key, value in base.items():
            if key not in working:
                engine.compare_child(node, CollectionElement(key), None, value)
        return None
