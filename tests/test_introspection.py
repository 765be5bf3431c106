"""Tests for IntrospectionEnumerator and Member.

Covers:
- Dataclasses: declared fields in order, compare=False and private fields
  skipped, frozen dataclasses are read-only
- Named tuples: _fields
- Plain classes: annotations across the MRO (ClassVar excluded),
  __slots__, __init__ parameters, public properties; methods skipped
- Member.read treats missing attributes as absent; setters write through
- Conformance to the MemberEnumerator protocol
"""

from __future__ import annotations

from collections import namedtuple
from dataclasses import dataclass, field
from typing import ClassVar

import pytest

from object_diff.introspection import IntrospectionEnumerator, Member
from object_diff.protocols import MemberEnumerator


@dataclass
class Invoice:
    number: str
    total: int
    cache_key: str = field(default="", compare=False)
    _internal: int = 0


@dataclass(frozen=True)
class Point:
    x: int
    y: int


Pair = namedtuple("Pair", "left right")


class Account:
    kind: ClassVar[str] = "account"
    owner: str

    def __init__(self, owner: str, balance: int = 0, *args: object, **kwargs: object) -> None:
        self.owner = owner
        self.balance = balance
        self._secret = "s"

    @property
    def summary(self) -> str:
        return f"{self.owner}:{self.balance}"

    @property
    def label(self) -> str:
        return self.owner

    @label.setter
    def label(self, value: str) -> None:
        self.owner = value

    def close(self) -> None:
        self.balance = 0


class Slotted:
    __slots__ = ("a", "b")

    def __init__(self, a: int, b: int) -> None:
        self.a = a
        self.b = b


class Base:
    created: str


class Derived(Base):
    updated: str


def _names(value_type: type) -> list[str]:
    return [m.name for m in IntrospectionEnumerator().members(value_type)]


class TestDataclasses:
    def test_fields_in_declaration_order(self) -> None:
        assert _names(Invoice) == ["number", "total"]

    def test_mutable_dataclass_members_are_writable(self) -> None:
        members = IntrospectionEnumerator().members(Invoice)
        invoice = Invoice("A", 1)
        assert all(m.is_writable for m in members)
        members[1].setter(invoice, 5)  # type: ignore[misc]
        assert invoice.total == 5

    def test_frozen_dataclass_members_are_read_only(self) -> None:
        members = IntrospectionEnumerator().members(Point)
        assert [m.name for m in members] == ["x", "y"]
        assert not any(m.is_writable for m in members)


class TestNamedTuples:
    def test_fields(self) -> None:
        assert _names(Pair) == ["left", "right"]
        left = IntrospectionEnumerator().members(Pair)[0]
        assert left.read(Pair(1, 2)) == 1


class TestPlainClasses:
    def test_annotations_init_parameters_and_properties(self) -> None:
        assert _names(Account) == ["owner", "balance", "summary", "label"]

    def test_property_setters(self) -> None:
        members = {m.name: m for m in IntrospectionEnumerator().members(Account)}
        assert not members["summary"].is_writable
        assert members["label"].is_writable
        account = Account("ada")
        members["label"].setter(account, "bob")  # type: ignore[misc]
        assert account.owner == "bob"

    def test_slots(self) -> None:
        assert _names(Slotted) == ["a", "b"]

    def test_annotations_across_the_mro_base_first(self) -> None:
        assert _names(Derived) == ["created", "updated"]

    def test_memberless_types(self) -> None:
        class Empty:
            pass

        assert IntrospectionEnumerator().members(Empty) == ()
        assert IntrospectionEnumerator().members(object) == ()


class TestMember:
    def test_read_missing_attribute_is_absent(self) -> None:
        member = Member("updated", lambda instance: instance.updated)
        assert member.read(Derived()) is None

    def test_read_present_attribute(self) -> None:
        derived = Derived()
        derived.updated = "today"
        member = IntrospectionEnumerator().members(Derived)[1]
        assert member.read(derived) == "today"

    def test_is_frozen(self) -> None:
        member = Member("x", lambda instance: instance)
        with pytest.raises(AttributeError):
            member.name = "y"  # type: ignore[misc]


class TestProtocol:
    def test_conforms_to_member_enumerator(self) -> None:
        assert isinstance(IntrospectionEnumerator(), MemberEnumerator)
