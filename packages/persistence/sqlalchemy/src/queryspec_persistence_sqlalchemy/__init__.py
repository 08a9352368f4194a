"""SQLAlchemy query source adapter."""

from __future__ import annotations

from .core.query_source import SQLAlchemyQuerySource
from .core.session import SQLAlchemyReadSession
from .exceptions import (
    QueryExecutionError,
    SessionManagementError,
    SQLAlchemyPersistenceError,
)
from .mixins import AuditableModelMixin
from .specifications import (
    DEFAULT_SQLA_REGISTRY,
    SQLAlchemyOperator,
    SQLAlchemyOperatorRegistry,
    build_default_sqla_registry,
    build_sqla_filter,
)

__all__ = [
    # Core
    "SQLAlchemyQuerySource",
    "SQLAlchemyReadSession",
    "AuditableModelMixin",
    # Specifications / Compiler
    "build_sqla_filter",
    "build_default_sqla_registry",
    "DEFAULT_SQLA_REGISTRY",
    "SQLAlchemyOperator",
    "SQLAlchemyOperatorRegistry",
    # Exceptions
    "SQLAlchemyPersistenceError",
    "SessionManagementError",
    "QueryExecutionError",
]
