"""Domain and infrastructure exceptions for queryspec-core."""

from __future__ import annotations


class QuerySpecError(Exception):
    """Root exception for the entire queryspec toolkit."""


class DomainError(QuerySpecError):
    """Base class for all domain-related errors."""


class NotFoundError(DomainError):
    """Raised when an entity or resource is not found."""


class EntityNotFoundError(NotFoundError):
    """Raised when a specific entity cannot be found by ID."""

    def __init__(self, entity_type: str, entity_id: object) -> None:
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id={entity_id!r} not found")


class InvariantViolationError(DomainError):
    """Raised when a domain invariant is violated."""


class ValidationError(QuerySpecError):
    """Raised when caller input cannot be normalised into a valid query.

    Carries structured errors: ``{field: [messages]}``.
    """

    def __init__(self, errors: dict[str, list[str]] | str | None = None) -> None:
        if isinstance(errors, str):
            self.errors: dict[str, list[str]] = {"__root__": [errors]}
        elif errors is None:
            self.errors = {}
        else:
            self.errors = errors
        super().__init__(str(self.errors))

    @property
    def messages(self) -> list[str]:
        """Flatten the structured errors into display messages."""
        flattened: list[str] = []
        for field_name, field_messages in self.errors.items():
            for message in field_messages:
                if field_name == "__root__":
                    flattened.append(message)
                else:
                    flattened.append(f"{field_name}: {message}")
        return flattened


class InfrastructureError(QuerySpecError):
    """Base class for all infrastructure-related errors."""


class PersistenceError(InfrastructureError):
    """Base class for all persistence-related errors."""


class QuerySourceError(PersistenceError):
    """Raised when a storage collaborator fails to count or fetch rows."""
