"""Shared fixtures for the object-diff test suite.

Provides:
- ``linked``: factory for singly linked object chains, optionally closed into
  a ring, built from ``ObjectWithCircularReference`` instances
- ``differ``: a default-configured ``ObjectDiffer``
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from object_diff import ObjectDiffer


class ObjectWithCircularReference:
    """Plain annotated class (not a dataclass, so ``==``/``repr`` never recurse)."""

    id: str
    reference: ObjectWithCircularReference | None

    def __init__(
        self, id: str, reference: ObjectWithCircularReference | None = None
    ) -> None:
        self.id = id
        self.reference = reference

    def __repr__(self) -> str:
        return f"ObjectWithCircularReference(id={self.id!r})"


@pytest.fixture
def linked() -> Callable[..., ObjectWithCircularReference]:
    """Return ``build(*ids, close=False)`` -> head of the chain ``ids[0] -> ids[1] -> ...``.

    With ``close=True`` the last object references the head again.
    """

    def _build(*ids: str, close: bool = False) -> ObjectWithCircularReference:
        objects = [ObjectWithCircularReference(i) for i in ids]
        for current, following in zip(objects, objects[1:]):
            current.reference = following
        if close:
            objects[-1].reference = objects[0]
        return objects[0]

    return _build


@pytest.fixture
def differ() -> ObjectDiffer:
    return ObjectDiffer()
