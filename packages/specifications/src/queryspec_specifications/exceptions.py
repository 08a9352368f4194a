"""
Specification exception hierarchy with fuzzy-match suggestions.

All exceptions inherit from ``SpecificationError`` and provide
``to_dict()`` for API-friendly error responses. Query execution turns
them into failed envelopes rather than letting them escape.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class SpecificationError(Exception):
    """Base exception for all specification errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class ValidationError(SpecificationError):
    """Specification structure validation failed."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "VALIDATION_ERROR",
            "message": self.message,
            "path": self.path,
        }


class OperatorNotFoundError(SpecificationError):
    """
    Unknown operator specified.

    Provides fuzzy-matched suggestions for likely intended operators.
    """

    def __init__(self, operator: str, valid_operators: list[str]) -> None:
        self.operator = operator
        self.valid_operators = valid_operators
        self.suggestions = get_close_matches(operator, valid_operators, n=3, cutoff=0.6)

        message = f"Unknown operator: '{operator}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "OPERATOR_NOT_FOUND",
            "operator": self.operator,
            "suggestions": self.suggestions,
            "valid_operators": sorted(self.valid_operators),
        }


class FieldNotFoundError(SpecificationError):
    """
    Unknown field (sort key, filter attribute) with helpful suggestions.

    Example error message::

        Invalid field 'nmae' on 'Category'.
        Did you mean one of these?
          • name

        Available fields: active, id, name, parent_id, ...
    """

    def __init__(
        self,
        invalid_field: str,
        model_name: str,
        available_fields: list[str],
        cutoff: float = 0.6,
    ) -> None:
        self.invalid_field = invalid_field
        self.model_name = model_name
        self.available_fields = available_fields
        self.suggestions = get_close_matches(
            invalid_field, available_fields, n=5, cutoff=cutoff
        )
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        lines = [f"Invalid field '{self.invalid_field}' on '{self.model_name}'."]
        if self.suggestions:
            lines.append("Did you mean one of these?")
            for s in self.suggestions:
                lines.append(f"  • {s}")

        sorted_fields = sorted(self.available_fields)
        preview = ", ".join(sorted_fields[:15])
        if len(sorted_fields) > 15:
            preview += ", ..."
        lines.append(f"Available fields: {preview}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "FIELD_NOT_FOUND",
            "field": self.invalid_field,
            "model": self.model_name,
            "suggestions": self.suggestions,
            "available_fields": sorted(self.available_fields),
        }


class RelationshipTraversalError(ValidationError):
    """
    An expansion path names something that is not a relationship.

    Happens when a path like ``name.something`` is registered but ``name``
    is a scalar column, not a relationship to another model.
    """

    def __init__(self, field: str, model_name: str, full_path: str) -> None:
        self.field = field
        self.model_name = model_name
        self.full_path = full_path
        super().__init__(
            f"Cannot expand '{field}' on '{model_name}': "
            f"it is not a relationship. Full path: '{full_path}'",
            path=full_path,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "RELATIONSHIP_TRAVERSAL_ERROR",
            "field": self.field,
            "model": self.model_name,
            "full_path": self.full_path,
        }


class UnsupportedPredicateError(SpecificationError):
    """
    A predicate cannot be translated by the storage collaborator.

    Raised when a closure-based predicate (``LambdaSpecification``) reaches
    a collaborator that compiles predicates into native queries.
    """

    def __init__(self, predicate: str, backend: str) -> None:
        self.predicate = predicate
        self.backend = backend
        super().__init__(
            f"Closure predicate '{predicate}' cannot be compiled for {backend}; "
            f"express it with attribute specifications instead"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNSUPPORTED_PREDICATE",
            "predicate": self.predicate,
            "backend": self.backend,
        }
