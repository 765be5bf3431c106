"""Value equality shared by path elements, sequence matching and leaf comparison.

User-defined ``__eq__`` implementations (the generated dataclass one
included) recurse through their fields, so two graphs containing a cycle can
compare forever.  ``values_equal`` treats a comparison that exhausts the
recursion limit as *unequal*: a cycle is never equal to anything but itself,
which is also how the traversal engine reports it (CIRCULAR counts as a
change).

Example::

    @dataclass
    class Ring:
        id: str
        ref: Ring | None = None

    a = Ring("a"); a.ref = a
    b = Ring("a"); b.ref = b
    values_equal(a, a)   # True (identity)
    values_equal(a, b)   # False, instead of RecursionError
"""

from __future__ import annotations

from typing import Any

__all__ = ["safe_hash", "values_equal"]


def values_equal(a: Any, b: Any) -> bool:
    """Identity-or-equality test that terminates on cyclic values."""
    if a is b:
        return True
    try:
        return bool(a == b)
    except RecursionError:
        return False


def safe_hash(value: Any, fallback: int) -> int:
    """``hash(value)``, or ``fallback`` for unhashable or cyclic values."""
    try:
        return hash(value)
    except (TypeError, RecursionError):
        return fallback
