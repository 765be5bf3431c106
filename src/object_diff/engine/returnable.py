"""Returnable-node policy: which nodes are exposed to queries and visitors.

The policy is an immutable state -> bool table built once and passed to the
resolver; there is no process-wide default table to mutate.  Builder methods
return new policies::

    policy = ReturnablePolicy().returning(State.UNTOUCHED).omitting(State.CIRCULAR)

Filtering only affects visibility.  It never alters the node tree.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING

from object_diff.tree.nodes import State

if TYPE_CHECKING:
    from object_diff.engine.config import DiffConfig
    from object_diff.tree.nodes import DiffNode

__all__ = ["DEFAULT_RETURNABLE_STATES", "ReturnablePolicy", "ReturnableResolver"]

DEFAULT_RETURNABLE_STATES: Mapping[State, bool] = MappingProxyType(
    {
        State.IGNORED: False,
        State.UNTOUCHED: False,
        State.CIRCULAR: True,
        State.ADDED: True,
        State.REMOVED: True,
        State.CHANGED: True,
    }
)


@dataclass(frozen=True, slots=True)
class ReturnablePolicy:
    """Immutable per-state visibility table.

    Attributes:
        states: Mapping from every ``State`` to whether nodes in that state are
            returnable.  A table missing any state is a programming error and
            is rejected at construction.
    """

    states: Mapping[State, bool] = field(
        default_factory=lambda: dict(DEFAULT_RETURNABLE_STATES)
    )

    def __post_init__(self) -> None:
        missing = [s.value for s in State if s not in self.states]
        if missing:
            msg = f"Missing returnable default for states: {missing}"
            raise ValueError(msg)
        object.__setattr__(
            self, "states", MappingProxyType({s: bool(self.states[s]) for s in State})
        )

    def allows(self, state: State) -> bool:
        return self.states[state]

    def with_state(self, state: State, enabled: bool) -> ReturnablePolicy:
        return replace(self, states={**self.states, state: enabled})

    def returning(self, state: State) -> ReturnablePolicy:
        return self.with_state(state, True)

    def omitting(self, state: State) -> ReturnablePolicy:
        return self.with_state(state, False)


class ReturnableResolver:
    """Decides ``is_returnable`` for nodes under a configuration.

    Rules, in order:

    1. The root node is always returnable.
    2. An UNTOUCHED node with children is returnable.  Strict aggregation makes
       such a parent CHANGED today; the rule keeps containers reachable should a
       strategy ever report UNTOUCHED over non-untouched children.
    3. Otherwise the policy table decides: a per-path policy from the
       configuration if one is set for the node's path, else the default one.
    """

    def __init__(self, config: DiffConfig | None = None) -> None:
        self._config = config

    def policy_for(self, node: DiffNode) -> ReturnablePolicy:
        if self._config is None:
            return _DEFAULT_POLICY
        return self._config.overrides_for(node.path).returnable

    def is_returnable(self, node: DiffNode) -> bool:
        if node.is_root():
            return True
        if node.is_untouched() and node.has_children():
            return True
        return self.policy_for(node).allows(node.state)


_DEFAULT_POLICY = ReturnablePolicy()
