"""Exceptions raised by object-diff.

Circular references are never errors: they become CIRCULAR nodes.
Configuration mistakes surface as ``ValueError`` from the frozen config
dataclasses at construction time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from object_diff.tree.path import NodePath

__all__ = ["ObjectDiffError", "UnsupportedTypeError"]


class ObjectDiffError(Exception):
    """Base class for object-diff errors."""


class UnsupportedTypeError(ObjectDiffError, TypeError):
    """No comparison strategy can handle a value.

    Raised out of ``compare`` for the whole call; no partial tree is returned.

    Attributes:
        value_type: The runtime type that could not be dispatched.
        path:       Path of the node being compared.
    """

    def __init__(self, value_type: type, path: NodePath, reason: str = "") -> None:
        self.value_type = value_type
        self.path = path
        detail = f": {reason}" if reason else ""
        super().__init__(
            f"Cannot compare values of type {value_type.__qualname__!r} "
            f"at path {path}{detail}"
        )
