"""
In-memory operator implementations.

Provides concrete MemoryOperator subclasses for each SpecificationOperator
leaf and a factory function to create registries.

Usage::

    from queryspec_specifications.operators_memory import build_default_registry

    registry = build_default_registry()
    result = registry.evaluate(SpecificationOperator.EQ, actual, expected)
"""

from __future__ import annotations

from ..strategy import MemoryOperatorRegistry
from .null import IsNotNullOperator, IsNullOperator
from .set import BetweenOperator, InOperator, NotInOperator
from .standard import (
    EqualOperator,
    GreaterEqualOperator,
    GreaterThanOperator,
    LessEqualOperator,
    LessThanOperator,
    NotEqualOperator,
)
from .string import (
    ContainsOperator,
    IContainsOperator,
    IStartsWithOperator,
    StartsWithOperator,
)


def build_default_registry() -> MemoryOperatorRegistry:
    """
    Create a registry with all built-in operators.

    Example:
        >>> registry = build_default_registry()
        >>> registry.evaluate(SpecificationOperator.EQ, "active", "active")
        True
    """
    registry = MemoryOperatorRegistry()
    registry.register_all(
        # Standard comparison
        EqualOperator(),
        NotEqualOperator(),
        GreaterThanOperator(),
        LessThanOperator(),
        GreaterEqualOperator(),
        LessEqualOperator(),
        # Set
        InOperator(),
        NotInOperator(),
        BetweenOperator(),
        # String
        ContainsOperator(),
        IContainsOperator(),
        StartsWithOperator(),
        IStartsWithOperator(),
        # Null
        IsNullOperator(),
        IsNotNullOperator(),
    )
    return registry


DEFAULT_MEMORY_REGISTRY = build_default_registry()

__all__ = [
    "DEFAULT_MEMORY_REGISTRY",
    "build_default_registry",
    "MemoryOperatorRegistry",
]
