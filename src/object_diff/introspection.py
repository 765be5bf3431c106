"""IntrospectionEnumerator: lists the comparable members of a Python type.

This is the default introspection collaborator consumed by the member
strategy.  It satisfies the ``MemberEnumerator`` Protocol structurally.

Members are discovered per *type*, never per instance, in this order:

1. Dataclasses: ``dataclasses.fields()`` (fields declared with
   ``compare=False`` are skipped).
2. Named tuples: ``_fields``.
3. Everything else, walking the MRO from the most generic base down:
   annotated class attributes (``ClassVar`` excluded), ``__slots__`` entries,
   parameters of ``__init__`` signatures, and public ``property`` objects.

Names starting with an underscore are never members.  A member an instance
does not actually carry reads as absent (``None``).
"""

from __future__ import annotations

import dataclasses
import inspect
import operator
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar, get_origin

__all__ = ["IntrospectionEnumerator", "Member"]

_SKIPPED_PARAMETERS = frozenset({"self", "cls", "args", "kwargs"})


@dataclass(frozen=True, slots=True)
class Member:
    """A named, readable (and optionally writable) member of a type.

    Attributes:
        name:   Member name; becomes a ``PropertyElement`` in node paths.
        getter: ``getter(instance) -> value``.
        setter: ``setter(instance, value)`` or ``None`` for read-only members.
    """

    name: str
    getter: Callable[[Any], Any]
    setter: Callable[[Any, Any], None] | None = None

    def read(self, instance: Any) -> Any:
        try:
            return self.getter(instance)
        except AttributeError:
            return None

    @property
    def is_writable(self) -> bool:
        return self.setter is not None


class IntrospectionEnumerator:
    """Default ``MemberEnumerator`` based on standard-library introspection.

    Example::

        @dataclass
        class User:
            name: str
            email: str

        [m.name for m in IntrospectionEnumerator().members(User)]
        # ["name", "email"]
    """

    def members(self, value_type: type) -> tuple[Member, ...]:
        if dataclasses.is_dataclass(value_type):
            return self._dataclass_members(value_type)
        if issubclass(value_type, tuple) and hasattr(value_type, "_fields"):
            return tuple(
                Member(name, operator.attrgetter(name))
                for name in value_type._fields
                if not name.startswith("_")
            )
        return self._declared_members(value_type)

    # ------------------------------------------------------------------
    # Discovery strategies
    # ------------------------------------------------------------------

    def _dataclass_members(self, value_type: type) -> tuple[Member, ...]:
        params = getattr(value_type, "__dataclass_params__", None)
        frozen = bool(params is not None and params.frozen)
        return tuple(
            Member(
                f.name,
                operator.attrgetter(f.name),
                None if frozen else _attribute_setter(f.name),
            )
            for f in dataclasses.fields(value_type)
            if f.compare and not f.name.startswith("_")
        )

    def _declared_members(self, value_type: type) -> tuple[Member, ...]:
        names: dict[str, None] = {}
        hierarchy = [cls for cls in reversed(value_type.__mro__) if cls is not object]

        for cls in hierarchy:
            for name, annotation in inspect.get_annotations(cls).items():
                if not _is_class_var(annotation):
                    names.setdefault(name, None)
            slots = cls.__dict__.get("__slots__", ())
            for name in (slots,) if isinstance(slots, str) else slots:
                names.setdefault(name, None)

        for name in _init_parameters(hierarchy):
            names.setdefault(name, None)

        properties: dict[str, property] = {}
        for cls in hierarchy:
            for name, attr in vars(cls).items():
                if isinstance(attr, property):
                    properties[name] = attr
                    names.setdefault(name, None)

        members: list[Member] = []
        for name in names:
            if name.startswith("_") or name in _SKIPPED_PARAMETERS:
                continue
            prop = properties.get(name)
            if prop is not None:
                setter = _property_setter(prop.fset) if prop.fset is not None else None
                members.append(Member(name, operator.attrgetter(name), setter))
                continue
            if callable(inspect.getattr_static(value_type, name, None)):
                continue
            members.append(
                Member(name, operator.attrgetter(name), _attribute_setter(name))
            )
        return tuple(members)


def _init_parameters(hierarchy: list[type]) -> list[str]:
    found: list[str] = []
    for cls in hierarchy:
        init = cls.__dict__.get("__init__")
        if init is None:
            continue
        try:
            signature = inspect.signature(init)
        except (TypeError, ValueError):
            continue
        for name, param in signature.parameters.items():
            if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                continue
            if name not in found:
                found.append(name)
    return found


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def _attribute_setter(name: str) -> Callable[[Any, Any], None]:
    def _set(instance: Any, value: Any) -> None:
        setattr(instance, name, value)

    return _set


def _property_setter(fset: Callable[[Any, Any], None]) -> Callable[[Any, Any], None]:
    def _set(instance: Any, value: Any) -> None:
        fset(instance, value)

    return _set
