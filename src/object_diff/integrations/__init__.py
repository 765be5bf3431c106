"""Integrations subpackage for object-diff.

Contains integration adapters for external frameworks:
- pytest plugin (auto-discovered via the pytest11 entry point) providing the
  ``assert_node`` fixture and the ``NodeAssertion`` helper it returns.
"""

from __future__ import annotations

from object_diff.integrations.assertions import NodeAssertion, assert_node

__all__ = ["NodeAssertion", "assert_node"]
