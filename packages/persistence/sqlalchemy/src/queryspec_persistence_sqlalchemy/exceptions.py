"""Exceptions for the SQLAlchemy persistence layer."""

from __future__ import annotations

from queryspec_core.primitives.exceptions import QuerySourceError


class SQLAlchemyPersistenceError(QuerySourceError):
    """Base exception for all SQLAlchemy-specific persistence errors."""


class SessionManagementError(SQLAlchemyPersistenceError):
    """Raised when session creation or management fails."""


class QueryExecutionError(SQLAlchemyPersistenceError):
    """Raised when counting or fetching rows fails in the database."""


__all__: list[str] = [
    "QueryExecutionError",
    "SessionManagementError",
    "SQLAlchemyPersistenceError",
]
