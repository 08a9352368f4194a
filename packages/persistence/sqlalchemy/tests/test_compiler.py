"""Tests for predicate-to-SQLAlchemy compilation."""

from __future__ import annotations

import pytest
from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from queryspec_persistence_sqlalchemy import (
    SQLAlchemyOperatorRegistry,
    build_default_sqla_registry,
    build_sqla_filter,
)
from queryspec_persistence_sqlalchemy.specifications.operators.standard import (
    EqualOperator,
)
from queryspec_specifications import (
    AttributeSpecification,
    FieldNotFoundError,
    LambdaSpecification,
    OperatorNotFoundError,
    SearchSpecification,
    SpecificationBuilder,
    SpecificationOperator,
    UnsupportedPredicateError,
)


class Base(DeclarativeBase):
    pass


class UserRecord(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    status: Mapped[str] = mapped_column(String(20))
    active: Mapped[bool] = mapped_column(Boolean, default=True)
    posts: Mapped[list[PostRecord]] = relationship(back_populates="user")


class PostRecord(Base):
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(200))
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"))
    user: Mapped[UserRecord] = relationship(back_populates="posts")


def _sql(expr) -> str:
    return str(expr.compile())


def test_equality():
    expr = build_sqla_filter(UserRecord, {"op": "=", "attr": "status", "val": "active"})
    assert _sql(expr) == "users.status = :status_1"


def test_and_of_conditions():
    spec = (
        SpecificationBuilder()
        .where("status", "=", "active")
        .where("name", "istartswith", "jo")
        .build()
    )
    assert spec is not None
    compiled = _sql(build_sqla_filter(UserRecord, spec.to_dict()))

    assert "users.status = :status_1" in compiled
    assert " AND " in compiled
    assert "lower(users.name) LIKE lower(:name_1)" in compiled


def test_not():
    spec = ~AttributeSpecification("status", "in", ["banned", "archived"])
    compiled = _sql(build_sqla_filter(UserRecord, spec.to_dict()))
    assert "NOT IN" in compiled or "NOT (users.status IN" in compiled


def test_null_checks_and_between():
    assert "IS NULL" in _sql(
        build_sqla_filter(UserRecord, {"op": "is_null", "attr": "name"})
    )
    assert "IS NOT NULL" in _sql(
        build_sqla_filter(UserRecord, {"op": "is_not_null", "attr": "name"})
    )
    assert "BETWEEN" in _sql(
        build_sqla_filter(UserRecord, {"op": "between", "attr": "id", "val": [1, 9]})
    )


def test_search_is_or_of_case_insensitive_contains():
    spec = SearchSpecification(("name", "status"), " Jo ")
    compiled = _sql(build_sqla_filter(UserRecord, spec.to_dict()))

    assert " OR " in compiled
    assert "lower(users.name) LIKE" in compiled
    assert "lower(users.status) LIKE" in compiled


def test_search_without_attributes_matches_nothing():
    expr = build_sqla_filter(UserRecord, {"op": "search", "attrs": [], "val": "x"})
    assert _sql(expr) in ("false", "0 = 1")


def test_relationship_any():
    expr = build_sqla_filter(
        UserRecord, {"op": "icontains", "attr": "posts.title", "val": "python"}
    )
    compiled = _sql(expr)
    assert "EXISTS" in compiled
    assert "posts.title" in compiled


def test_relationship_has():
    expr = build_sqla_filter(
        PostRecord, {"op": "=", "attr": "user.name", "val": "John Doe"}
    )
    compiled = _sql(expr)
    assert "EXISTS" in compiled
    assert "users.name" in compiled


def test_lambda_cannot_be_compiled():
    spec = LambdaSpecification(lambda u: u.name.isupper(), description="shouting")
    with pytest.raises(UnsupportedPredicateError) as exc_info:
        build_sqla_filter(UserRecord, spec.to_dict())
    assert exc_info.value.predicate == "shouting"
    assert exc_info.value.backend == "SQLAlchemy"


def test_lambda_nested_in_and_cannot_be_compiled():
    spec = AttributeSpecification("status", "=", "x") & LambdaSpecification(
        lambda u: True
    )
    with pytest.raises(UnsupportedPredicateError):
        build_sqla_filter(UserRecord, spec.to_dict())


def test_unknown_field():
    with pytest.raises(FieldNotFoundError) as exc_info:
        build_sqla_filter(UserRecord, {"op": "=", "attr": "stauts", "val": 1})
    assert "status" in exc_info.value.suggestions


def test_dotted_path_over_column():
    with pytest.raises(FieldNotFoundError):
        build_sqla_filter(UserRecord, {"op": "=", "attr": "name.first", "val": 1})


def test_unknown_operator():
    with pytest.raises(OperatorNotFoundError):
        build_sqla_filter(UserRecord, {"op": "resembles", "attr": "name", "val": 1})


def test_missing_attr():
    with pytest.raises(ValueError):
        build_sqla_filter(UserRecord, {"op": "=", "val": 1})


def test_custom_registry():
    registry = SQLAlchemyOperatorRegistry()
    registry.register(EqualOperator())
    assert registry.supported_operators == {SpecificationOperator.EQ}

    build_sqla_filter(UserRecord, {"op": "=", "attr": "id", "val": 1}, registry=registry)
    with pytest.raises(OperatorNotFoundError):
        build_sqla_filter(
            UserRecord, {"op": ">", "attr": "id", "val": 1}, registry=registry
        )


def test_default_registry_covers_leaf_operators():
    logical = {
        SpecificationOperator.AND,
        SpecificationOperator.NOT,
        SpecificationOperator.SEARCH,
    }
    assert build_default_sqla_registry().supported_operators == (
        set(SpecificationOperator) - logical
    )
