"""SequenceStrategy: ordered-sequence comparison.

Elements are aligned in one of two ways:

- Positional: index i of working pairs with index i of base.  Only used when
  the sequences are *index-stable*: equal lengths and pairwise distinct
  working elements (so every position gets its own child).
- Equality: elements are paired one-to-one by value equality through
  ``match_by_equality`` (optimal assignment, relative order preferred).
  Unmatched working elements become ADDED children, unmatched base elements
  REMOVED children.

``SequenceAlignment.AUTO`` picks positional alignment when any element is a
composite (something the primitive strategy does not handle) and equality
matching for sequences of primitives.

Children are addressed by ``CollectionElement(item)`` where ``item`` is the
working element (the base element for REMOVED children).  Equal duplicate
elements collapse into a single child.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from object_diff.engine.config import SequenceAlignment
from object_diff.engine.matcher import match_by_equality
from object_diff.protocols import Capability
from object_diff.tree.path import CollectionElement

if TYPE_CHECKING:
    from object_diff.engine.traversal import TraversalEngine
    from object_diff.tree.nodes import DiffNode, State

__all__ = ["SequenceStrategy"]

_TEXT_TYPES = (str, bytes, bytearray, memoryview)


class SequenceStrategy:
    """Aligns two sequences and recurses into the aligned element pairs."""

    capability = Capability.SEQUENCE

    def __init__(self, alignment: SequenceAlignment = SequenceAlignment.AUTO) -> None:
        self._alignment = SequenceAlignment(alignment)

    @property
    def alignment(self) -> SequenceAlignment:
        return self._alignment

    def accepts(self, value_type: type) -> bool:
        if issubclass(value_type, _TEXT_TYPES):
            return False
        # Named tuples are records, compared member by member.
        if issubclass(value_type, tuple) and hasattr(value_type, "_fields"):
            return False
        return issubclass(value_type, Sequence)

    def compare(
        self,
        node: DiffNode,
        working: Sequence[Any],
        base: Sequence[Any],
        engine: TraversalEngine,
    ) -> State | None:
        working_items = list(working)
        base_items = list(base)

        if self._use_positional(working_items, base_items, engine):
            for w, b in zip(working_items, base_items, strict=True):
                engine.compare_child(node, CollectionElement(w), w, b)
            return None

        pairs = dict(match_by_equality(working_items, base_items))
        matched_base = set(pairs.values())
        for i, w in enumerate(working_items):
            b = base_items[pairs[i]] if i in pairs else None
            engine.compare_child(node, CollectionElement(w), w, b)
        for j, b in enumerate(base_items):
            if j not in matched_base:
                engine.compare_child(node, CollectionElement(b), None, b)
        return None

    def _use_positional(
        self,
        working_items: list[Any],
        base_items: list[Any],
        engine: TraversalEngine,
    ) -> bool:
        if self._alignment is SequenceAlignment.EQUALITY:
            return False
        if len(working_items) != len(base_items) or not _pairwise_distinct(
            working_items
        ):
            return False
        if self._alignment is SequenceAlignment.POSITIONAL:
            return True
        return any(
            not engine.is_primitive(item) for item in (*working_items, *base_items)
        )


def _pairwise_distinct(items: list[Any]) -> bool:
    return len({CollectionElement(item) for item in items}) == len(items)
