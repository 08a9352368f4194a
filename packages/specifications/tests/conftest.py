"""Shared fixtures for specifications tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from queryspec_specifications.operators_memory import build_default_registry
from queryspec_specifications.soft_delete import SoftDeleteFilterBuilder


@pytest.fixture
def registry():
    """Default in-memory operator registry for building specs."""
    return build_default_registry()


@pytest.fixture(autouse=True)
def _fresh_soft_delete_cache() -> Iterator[None]:
    """Test-local entity classes must not leak between tests via the cache."""
    SoftDeleteFilterBuilder.clear_cache()
    yield
    SoftDeleteFilterBuilder.clear_cache()
