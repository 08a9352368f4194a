"""queryspec-core — Foundation package for the query specification toolkit.

Entities and the auditable capability, result envelopes, the query-source
port and an in-memory source. Depends only on pydantic.
"""

from __future__ import annotations

# ── Adapters ────────────────────────────────────────────────────
from .adapters.memory import InMemoryQuerySource, InMemoryRepository

# ── Domain ───────────────────────────────────────────────────────
from .domain import (
    AuditableEntity,
    AuditableMixin,
    Entity,
    IAuditableEntity,
    ISpecification,
    is_auditable,
    soft_delete_field,
)

# ── Ports ────────────────────────────────────────────────────────
from .ports import (
    ExpansionPath,
    IConsistentQuerySource,
    IQuerySource,
    supports_consistent_read,
)

# ── Primitives ──────────────────────────────────────────────────
from .primitives import (
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

# ── Results ─────────────────────────────────────────────────────
from .results import PaginatedResult, Result

__all__: list[str] = [
    # Domain
    "AuditableEntity",
    "AuditableMixin",
    "Entity",
    "IAuditableEntity",
    "ISpecification",
    "is_auditable",
    "soft_delete_field",
    # Ports
    "ExpansionPath",
    "IConsistentQuerySource",
    "IQuerySource",
    "supports_consistent_read",
    # Adapters
    "InMemoryQuerySource",
    "InMemoryRepository",
    # Results
    "PaginatedResult",
    "Result",
    # Primitives
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
