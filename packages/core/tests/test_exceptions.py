"""Tests for the core exception hierarchy."""

from __future__ import annotations

from queryspec_core.primitives.exceptions import (
    EntityNotFoundError,
    InfrastructureError,
    PersistenceError,
    QuerySourceError,
    QuerySpecError,
    ValidationError,
)


def test_validation_error_from_string() -> None:
    exc = ValidationError("bad input")

    assert exc.errors == {"__root__": ["bad input"]}
    assert exc.messages == ["bad input"]


def test_validation_error_messages_prefix_field() -> None:
    exc = ValidationError({"pageSize": ["not an int"], "__root__": ["oops"]})

    assert exc.messages == ["pageSize: not an int", "oops"]


def test_validation_error_empty() -> None:
    assert ValidationError().messages == []


def test_query_source_error_is_infrastructure() -> None:
    exc = QuerySourceError("down")

    assert isinstance(exc, PersistenceError)
    assert isinstance(exc, InfrastructureError)
    assert isinstance(exc, QuerySpecError)


def test_entity_not_found_message() -> None:
    exc = EntityNotFoundError("Category", "c1")

    assert str(exc) == "Category with id='c1' not found"
