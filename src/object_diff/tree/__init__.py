"""Tree subpackage: result-tree and addressing primitives.

Re-exports the public API for the tree module:
- NodePath, PathBuilder: immutable path addressing and its append-only builder
- PropertyElement, CollectionElement: the two path element kinds
- DiffNode, State: the comparison result tree and its node states
- Visit, NodeCollector, PathFinder, ReturnableOnlyVisitor, NodePrinter: visitors
"""

from object_diff.tree.nodes import DiffNode, State
from object_diff.tree.path import (
    CollectionElement,
    Element,
    NodePath,
    PathBuilder,
    PropertyElement,
)
from object_diff.tree.visitors import (
    NodeCollector,
    NodePrinter,
    PathFinder,
    ReturnableOnlyVisitor,
    Visit,
)

__all__ = [
    "CollectionElement",
    "DiffNode",
    "Element",
    "NodeCollector",
    "NodePath",
    "NodePrinter",
    "PathBuilder",
    "PathFinder",
    "PropertyElement",
    "ReturnableOnlyVisitor",
    "State",
    "Visit",
]
