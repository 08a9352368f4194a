"""Filtering package exceptions."""

from __future__ import annotations

from queryspec_core.primitives.exceptions import ValidationError


class FilterParseError(ValidationError):
    """Raised when a query-string value cannot be coerced."""


class FieldNotAllowedError(ValidationError):
    """Raised when a field is not in the whitelist or operator is disallowed."""
