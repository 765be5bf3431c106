"""Object diff - structural, path-addressable differences between object graphs."""

from __future__ import annotations

from object_diff.api import compare
from object_diff.differ import ObjectDiffer
from object_diff.engine.config import DiffConfig, SequenceAlignment
from object_diff.engine.returnable import ReturnablePolicy
from object_diff.errors import ObjectDiffError, UnsupportedTypeError
from object_diff.tree.nodes import DiffNode, State
from object_diff.tree.path import CollectionElement, NodePath, PropertyElement

__version__: str = "0.1.0"
__all__: list[str] = [
    "CollectionElement",
    "DiffConfig",
    "DiffNode",
    "NodePath",
    "ObjectDiffError",
    "ObjectDiffer",
    "PropertyElement",
    "ReturnablePolicy",
    "SequenceAlignment",
    "State",
    "UnsupportedTypeError",
    "compare",
]
