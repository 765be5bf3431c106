"""InstanceTracker: the chain of working-side instances currently being compared.

The traversal engine pushes the working value of every composite node before
descending into it and pops it on the way back.  A value that is already on
the chain when the engine is about to descend closes a cycle: the engine
records a CIRCULAR node instead of recursing.

Identity is instance identity (``is``), never equality.  Only the working side
is tracked because base graphs may legitimately alias differently.  Entries
keep a strong reference to the instance so that an ``id()`` can never be
recycled while it is on the chain.

A tracker belongs to exactly one top-level ``compare`` call and must not be
shared between concurrent comparisons.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from object_diff.tree.path import NodePath

__all__ = ["InstanceTracker"]


class InstanceTracker:
    """Stack of (instance, path) pairs on the active descent chain."""

    def __init__(self) -> None:
        self._chain: list[tuple[Any, NodePath]] = []
        self._paths_by_id: dict[int, NodePath] = {}

    def push(self, instance: Any, path: NodePath) -> None:
        if id(instance) in self._paths_by_id:
            pushed_at = self._paths_by_id[id(instance)]
            msg = f"Instance at {path} is already on the chain (pushed at {pushed_at})"
            raise ValueError(msg)
        self._chain.append((instance, path))
        self._paths_by_id[id(instance)] = path

    def pop(self) -> Any:
        """Remove and return the most recently pushed instance."""
        if not self._chain:
            msg = "pop() on an empty instance chain"
            raise IndexError(msg)
        instance, _ = self._chain.pop()
        del self._paths_by_id[id(instance)]
        return instance

    def contains(self, instance: Any) -> bool:
        return id(instance) in self._paths_by_id

    def start_path_of(self, instance: Any) -> NodePath | None:
        """Path of the node where ``instance`` was pushed, if it is on the chain."""
        return self._paths_by_id.get(id(instance))

    @contextmanager
    def tracking(self, instance: Any, path: NodePath) -> Iterator[None]:
        """Push ``instance`` for the duration of the block; pop on every exit."""
        self.push(instance, path)
        try:
            yield
        finally:
            self.pop()

    def __contains__(self, instance: object) -> bool:
        return self.contains(instance)

    def __len__(self) -> int:
        return len(self._chain)
