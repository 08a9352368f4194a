"""Tests for exceptions module."""

from __future__ import annotations

from queryspec_specifications.exceptions import (
    FieldNotFoundError,
    OperatorNotFoundError,
    RelationshipTraversalError,
    SpecificationError,
    UnsupportedPredicateError,
    ValidationError,
)

# -- OperatorNotFoundError ---------------------------------------------------


def test_operator_not_found_fuzzy_suggestion():
    err = OperatorNotFoundError("contians", ["contains", "icontains", "startswith"])
    assert "contians" in str(err)
    assert "contains" in str(err)


def test_operator_not_found_to_dict():
    d = OperatorNotFoundError("zzzzz", ["=", ">", "<"]).to_dict()
    assert d["error"] == "OPERATOR_NOT_FOUND"
    assert d["operator"] == "zzzzz"
    assert d["suggestions"] == []


# -- FieldNotFoundError ------------------------------------------------------


def test_field_not_found_fuzzy():
    err = FieldNotFoundError(
        invalid_field="nmae",
        model_name="Category",
        available_fields=["name", "parent_id", "featured"],
    )
    assert "nmae" in str(err)
    assert "Category" in str(err)
    assert err.suggestions == ["name"]


def test_field_not_found_preview_is_truncated():
    fields = [f"field_{i:02d}" for i in range(20)]
    err = FieldNotFoundError("zzz", "Wide", fields)
    assert str(err).endswith(", ...")


def test_field_not_found_to_dict():
    d = FieldNotFoundError("emial", "User", ["email", "name"]).to_dict()
    assert d["error"] == "FIELD_NOT_FOUND"
    assert d["field"] == "emial"
    assert "email" in d["suggestions"]
    assert d["available_fields"] == ["email", "name"]


# -- ValidationError ---------------------------------------------------------


def test_validation_error_with_path():
    err = ValidationError("Missing 'attr'", path="<root>.conditions[0]")
    assert err.to_dict() == {
        "error": "VALIDATION_ERROR",
        "message": "Missing 'attr'",
        "path": "<root>.conditions[0]",
    }


# -- RelationshipTraversalError -----------------------------------------------


def test_relationship_traversal_error():
    err = RelationshipTraversalError(
        field="name",
        model_name="Category",
        full_path="name.images",
    )
    assert "not a relationship" in str(err)
    assert err.path == "name.images"
    assert err.to_dict()["full_path"] == "name.images"


# -- UnsupportedPredicateError ------------------------------------------------


def test_unsupported_predicate():
    err = UnsupportedPredicateError("is_owner", "SQLAlchemy")
    assert "is_owner" in str(err)
    assert err.to_dict() == {
        "error": "UNSUPPORTED_PREDICATE",
        "predicate": "is_owner",
        "backend": "SQLAlchemy",
    }


# -- Hierarchy ---------------------------------------------------------------


def test_all_inherit_from_specification_error():
    assert issubclass(ValidationError, SpecificationError)
    assert issubclass(OperatorNotFoundError, SpecificationError)
    assert issubclass(FieldNotFoundError, SpecificationError)
    assert issubclass(RelationshipTraversalError, ValidationError)
    assert issubclass(UnsupportedPredicateError, SpecificationError)
