"""Primitives: exceptions."""

from __future__ import annotations

from .exceptions import (
    DomainError,
    EntityNotFoundError,
    InfrastructureError,
    InvariantViolationError,
    NotFoundError,
    PersistenceError,
    QuerySourceError,
    QuerySpecError,
    ValidationError,
)

__all__ = [
    "DomainError",
    "EntityNotFoundError",
    "InfrastructureError",
    "InvariantViolationError",
    "NotFoundError",
    "PersistenceError",
    "QuerySourceError",
    "QuerySpecError",
    "ValidationError",
]
