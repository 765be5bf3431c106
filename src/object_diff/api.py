"""Public API function for object-diff.

``compare`` creates a fresh ``ObjectDiffer`` per call to guarantee zero
shared state between calls.  Reuse an ``ObjectDiffer`` directly when many
graphs of the same types are compared, so its member cache stays warm.
"""

from __future__ import annotations

from typing import Any

from object_diff.differ import ObjectDiffer
from object_diff.engine.config import DiffConfig
from object_diff.tree.nodes import DiffNode

__all__ = ["compare"]


def compare(
    working: Any,
    base: Any,
    config: DiffConfig | None = None,
) -> DiffNode:
    """Compare two object graphs and return the root of the difference tree.

    Args:
        working: The modified ("working") version of the graph.
        base:    The reference ("base") version of the graph.
        config:  Comparison configuration.  Defaults to ``DiffConfig()``.

    Returns:
        The frozen root ``DiffNode``.  ``compare(x, None)`` yields an ADDED root,
        ``compare(None, x)`` a REMOVED root and ``compare(None, None)`` an
        UNTOUCHED root.
    """
    return ObjectDiffer(config=config).compare(working, base)
