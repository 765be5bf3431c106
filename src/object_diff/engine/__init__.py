"""engine subpackage: the traversal engine and its collaborators.

Import from this module (not from sub-modules directly) to stay on the
stable public interface.

Example::

    from object_diff.engine import DiffConfig, SequenceAlignment, ReturnablePolicy
    from object_diff.tree import NodePath, State

    config = DiffConfig(
        sequence_alignment=SequenceAlignment.EQUALITY,
        returnable=ReturnablePolicy().returning(State.UNTOUCHED),
    ).ignoring(NodePath.of("updated_at"))
"""

from __future__ import annotations

from object_diff.engine.config import DiffConfig, PathOverrides, SequenceAlignment
from object_diff.engine.returnable import ReturnablePolicy, ReturnableResolver
from object_diff.engine.tracker import InstanceTracker
from object_diff.engine.traversal import TraversalEngine

__all__ = [
    "DiffConfig",
    "InstanceTracker",
    "PathOverrides",
    "ReturnablePolicy",
    "ReturnableResolver",
    "SequenceAlignment",
    "TraversalEngine",
]
