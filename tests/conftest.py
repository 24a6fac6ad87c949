"""Pytest configuration.

Run pytest from this project's root. pythonpath in pyproject.toml puts src/
and the project root on sys.path, so tests import typesafe_lint directly and
shared helpers as tests.unit.checker_test_utils.
"""

from collections.abc import Iterator

import pytest

from typesafe_lint.infrastructure.di.container import TypesafeContainer


@pytest.fixture(autouse=True)
def reset_container() -> Iterator[None]:
    """The plugin entry point caches a container; never leak one between tests."""
    TypesafeContainer.reset()
    yield
    TypesafeContainer.reset()
