"""DiffConfig and SequenceAlignment for comparison configuration.

DiffConfig is a frozen (immutable) dataclass holding every per-path and
per-type override the traversal engine consults.  SequenceAlignment selects
how ordered sequences are aligned: positionally, by value equality, or
auto-detected from the element types.

Builder helpers return new configs, leaving the original untouched::

    config = (
        DiffConfig()
        .ignoring(NodePath.of("updated_at"))
        .ignoring_properties("etag")
        .comparing_by_equality(Money)
    )
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import StrEnum, auto
from types import MappingProxyType

from object_diff.engine.returnable import ReturnablePolicy
from object_diff.protocols import ComparisonStrategy
from object_diff.tree.path import NodePath, PropertyElement

__all__ = ["DiffConfig", "PathOverrides", "SequenceAlignment"]


class SequenceAlignment(StrEnum):
    """How to align the elements of two ordered sequences.

    - POSITIONAL: Pair index i with index i (only when index-stable, i.e. equal
                  lengths and pairwise distinct working elements; otherwise
                  falls back to EQUALITY).
    - EQUALITY:   Match elements one-to-one by value equality.
    - AUTO:       Positional for composite elements, equality for primitives.
    """

    POSITIONAL = auto()
    EQUALITY = auto()
    AUTO = auto()


@dataclass(frozen=True, slots=True)
class PathOverrides:
    """Overrides that apply to a single path.

    Attributes:
        strategy:   Forced comparison strategy, or ``None`` for type dispatch.
        ignored:    When True the node is IGNORED and not compared.
        returnable: Visibility policy for the node at this path.
    """

    strategy: ComparisonStrategy | None
    ignored: bool
    returnable: ReturnablePolicy


@dataclass(frozen=True, slots=True)
class DiffConfig:
    """Immutable configuration for a comparison.

    Attributes:
        sequence_alignment: How ordered sequences are aligned.
        ignored_paths: Paths whose nodes are IGNORED (descendants are never
            created since an IGNORED node is not recursed into).
        ignored_properties: Property names IGNORED wherever they appear.
        strategy_overrides: Forced strategy per path; wins over type dispatch.
        equals_only_types: Types compared by ``==`` only, never recursed into.
        returnable: Default visibility policy.
        returnable_overrides: Visibility policy per path.
        max_member_cache_size: Number of types whose member lists are cached
            by the default introspection enumerator (>= 1).
    """

    sequence_alignment: SequenceAlignment = SequenceAlignment.AUTO
    ignored_paths: frozenset[NodePath] = frozenset()
    ignored_properties: frozenset[str] = frozenset()
    strategy_overrides: Mapping[NodePath, ComparisonStrategy] = field(
        default_factory=dict
    )
    equals_only_types: frozenset[type] = frozenset()
    returnable: ReturnablePolicy = field(default_factory=ReturnablePolicy)
    returnable_overrides: Mapping[NodePath, ReturnablePolicy] = field(
        default_factory=dict
    )
    max_member_cache_size: int = 256

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "sequence_alignment", SequenceAlignment(self.sequence_alignment)
        )
        object.__setattr__(self, "ignored_paths", frozenset(self.ignored_paths))
        object.__setattr__(
            self, "ignored_properties", frozenset(self.ignored_properties)
        )
        object.__setattr__(self, "equals_only_types", frozenset(self.equals_only_types))

        for path in (
            *self.ignored_paths,
            *self.strategy_overrides,
            *self.returnable_overrides,
        ):
            if not isinstance(path, NodePath):
                msg = f"Configured paths must be NodePath instances, got {path!r}"
                raise ValueError(msg)
        for path, strategy in self.strategy_overrides.items():
            if not isinstance(strategy, ComparisonStrategy):
                msg = (
                    f"Strategy override at {path} is not a ComparisonStrategy: "
                    f"{strategy!r}"
                )
                raise ValueError(msg)
        for path, policy in self.returnable_overrides.items():
            if not isinstance(policy, ReturnablePolicy):
                msg = (
                    f"Returnable override at {path} is not a ReturnablePolicy: "
                    f"{policy!r}"
                )
                raise ValueError(msg)
        for value_type in self.equals_only_types:
            if not isinstance(value_type, type):
                msg = f"equals_only_types must contain types, got {value_type!r}"
                raise ValueError(msg)
        if not isinstance(self.returnable, ReturnablePolicy):
            msg = f"returnable must be a ReturnablePolicy, got {self.returnable!r}"
            raise ValueError(msg)
        if self.max_member_cache_size < 1:
            msg = (
                "max_member_cache_size must be >= 1, "
                f"got {self.max_member_cache_size}"
            )
            raise ValueError(msg)

        object.__setattr__(
            self, "strategy_overrides", MappingProxyType(dict(self.strategy_overrides))
        )
        object.__setattr__(
            self,
            "returnable_overrides",
            MappingProxyType(dict(self.returnable_overrides)),
        )

    # ------------------------------------------------------------------
    # Per-path lookup
    # ------------------------------------------------------------------

    def is_ignored(self, path: NodePath) -> bool:
        if path in self.ignored_paths:
            return True
        element = path.last_element
        return (
            isinstance(element, PropertyElement)
            and element.name in self.ignored_properties
        )

    def overrides_for(self, path: NodePath) -> PathOverrides:
        """Return every override configured for ``path``."""
        return PathOverrides(
            strategy=self.strategy_overrides.get(path),
            ignored=self.is_ignored(path),
            returnable=self.returnable_overrides.get(path, self.returnable),
        )

    # ------------------------------------------------------------------
    # Builder helpers (each returns a new DiffConfig)
    # ------------------------------------------------------------------

    def ignoring(self, *paths: NodePath) -> DiffConfig:
        return replace(self, ignored_paths=self.ignored_paths | frozenset(paths))

    def ignoring_properties(self, *names: str) -> DiffConfig:
        return replace(
            self, ignored_properties=self.ignored_properties | frozenset(names)
        )

    def with_strategy(self, path: NodePath, strategy: ComparisonStrategy) -> DiffConfig:
        return replace(
            self, strategy_overrides={**self.strategy_overrides, path: strategy}
        )

    def comparing_by_equality(self, *types: type) -> DiffConfig:
        return replace(
            self, equals_only_types=self.equals_only_types | frozenset(types)
        )

    def aligning_sequences(self, alignment: SequenceAlignment) -> DiffConfig:
        return replace(self, sequence_alignment=alignment)

    def with_returnable(self, policy: ReturnablePolicy) -> DiffConfig:
        return replace(self, returnable=policy)

    def with_returnable_at(self, path: NodePath, policy: ReturnablePolicy) -> DiffConfig:
        return replace(
            self, returnable_overrides={**self.returnable_overrides, path: policy}
        )
