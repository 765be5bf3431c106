"""NodePath and its element types: the addressing scheme for object graphs.

A ``NodePath`` identifies a location in an object graph independently of which
graph instance is being addressed, so the same path can be resolved against
the working graph, the base graph, or any other graph of the same shape.

Paths are immutable tuples of elements.  Element kinds form a closed set:

- ``PropertyElement(name)``       : a named member of an object.
- ``CollectionElement(reference)`` : a collection member or mapping key,
  matched by *equality* of the carried reference value, never by identity.

Paths compare structurally and are partially ordered by the prefix relation::

    NodePath.of("a") < NodePath.of("a", "b")    # proper prefix
    NodePath.root() <= NodePath.of("a")          # root prefixes everything
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from object_diff.equality import safe_hash, values_equal

__all__ = [
    "CollectionElement",
    "Element",
    "NodePath",
    "PathBuilder",
    "PropertyElement",
]

# Shared hash bucket for unhashable or cyclic references (lists, eq-dataclasses, ...).
# Keeps hash consistent with __eq__ at the cost of bucket collisions.
_UNHASHABLE_BUCKET = hash("object_diff.CollectionElement.unhashable")


@dataclass(frozen=True, slots=True)
class PropertyElement:
    """A named member of an object (attribute, field, or property)."""

    name: str

    def __str__(self) -> str:
        return f"/{self.name}"


@dataclass(frozen=True, slots=True, eq=False)
class CollectionElement:
    """A member of a collection, or a mapping key, identified by value.

    Equality is the equality of the carried ``reference``, so an element built
    from a working-side item matches the equal base-side item even when the
    two are different instances.
    """

    reference: Any

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CollectionElement):
            return NotImplemented
        return values_equal(self.reference, other.reference)

    def __hash__(self) -> int:
        return safe_hash(self.reference, _UNHASHABLE_BUCKET)

    def __str__(self) -> str:
        return f"[{self.reference!r}]"


Element = PropertyElement | CollectionElement


@dataclass(frozen=True, slots=True)
class NodePath:
    """Immutable, structurally-compared sequence of path elements.

    Attributes:
        elements: The element tuple from the comparison root to the addressed
            location.  The empty tuple is the root path.
    """

    elements: tuple[Element, ...] = ()

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def root(cls) -> NodePath:
        """Return the root path (empty element sequence)."""
        return _ROOT

    @classmethod
    def of(cls, *names: str) -> NodePath:
        """Return a path made of property elements, e.g. ``of("a", "b")``."""
        return cls(tuple(PropertyElement(name) for name in names))

    @classmethod
    def builder(cls) -> PathBuilder:
        """Return an append-only builder starting at the root."""
        return PathBuilder()

    def child(self, element: Element) -> NodePath:
        """Return a new path one element longer than this one."""
        return NodePath((*self.elements, element))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def parent(self) -> NodePath:
        """This path minus its last element.  The root is its own parent."""
        if not self.elements:
            return self
        return NodePath(self.elements[:-1])

    @property
    def last_element(self) -> Element | None:
        return self.elements[-1] if self.elements else None

    @property
    def depth(self) -> int:
        return len(self.elements)

    def is_root(self) -> bool:
        return not self.elements

    def is_parent_of(self, other: NodePath) -> bool:
        """True if this path is a proper prefix of ``other``."""
        return self < other

    def is_child_of(self, other: NodePath) -> bool:
        """True if ``other`` is a proper prefix of this path."""
        return other < self

    # ------------------------------------------------------------------
    # Partial order: "is a prefix of"
    # ------------------------------------------------------------------

    def __le__(self, other: object) -> bool:
        if not isinstance(other, NodePath):
            return NotImplemented
        n = len(self.elements)
        return n <= len(other.elements) and other.elements[:n] == self.elements

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, NodePath):
            return NotImplemented
        return len(self.elements) < len(other.elements) and self <= other

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, NodePath):
            return NotImplemented
        return other <= self

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, NodePath):
            return NotImplemented
        return other < self

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[Element]:
        return iter(self.elements)

    def __str__(self) -> str:
        if not self.elements:
            return "/"
        text = "".join(str(element) for element in self.elements)
        return text if text.startswith("/") else f"/{text}"


_ROOT = NodePath()


class PathBuilder:
    """Append-only builder yielding immutable ``NodePath`` instances.

    Example::

        path = NodePath.builder().property("items").collection("x").build()
        str(path)   # "/items['x']"
    """

    def __init__(self, start: NodePath | None = None) -> None:
        self._elements: list[Element] = list(start.elements) if start is not None else []

    def property(self, name: str) -> PathBuilder:
        self._elements.append(PropertyElement(name))
        return self

    def collection(self, reference: Any) -> PathBuilder:
        self._elements.append(CollectionElement(reference))
        return self

    def element(self, element: Element) -> PathBuilder:
        if not isinstance(element, (PropertyElement, CollectionElement)):
            msg = f"Unsupported path element: {element!r}"
            raise TypeError(msg)
        self._elements.append(element)
        return self

    def build(self) -> NodePath:
        """Return an immutable path; the builder stays usable for appending."""
        return NodePath(tuple(self._elements))
