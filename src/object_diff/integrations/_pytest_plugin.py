"""pytest plugin for object-diff.

Registered through the pytest11 entry point in pyproject.toml, so any environment
with object-diff installed (editable installs included) gets the ``assert_node``
fixture without touching conftest.py.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from object_diff.integrations.assertions import assert_node as _assert_node


@pytest.fixture(scope="session")
def assert_node() -> Any:
    """Fixture that returns the ``assert_node`` selector.

    Session-scoped because the returned callable is stateless.

    Usage in tests::

        def test_cycle(assert_node):
            root = compare(working_a, base_a)
            assert_node(root, "reference", "reference").is_circular()

    Returns:
        ``assert_node(root, *selector) -> NodeAssertion``.
    """
    return _assert_node
