"""
Compile a predicate dictionary (AST) into a SQLAlchemy filter expression.

Uses the strategy pattern: each operator is an isolated class in
``operators/``, registered in a ``SQLAlchemyOperatorRegistry``.
The ``build_sqla_filter`` function walks the AST tree and delegates
leaf-node compilation to the registry.

Node kinds understood:

- ``and`` / ``not`` with ``conditions``
- ``search`` with ``attrs`` and ``val`` (case-insensitive, any attribute)
- leaves with ``attr`` / ``op`` / ``val``; dotted ``attr`` paths traverse
  relationships with ``any()`` / ``has()``

Closure predicates (``op == "lambda"``) cannot be compiled and raise
:class:`~queryspec_specifications.exceptions.UnsupportedPredicateError`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import ColumnElement, and_, false, not_, or_
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import RelationshipProperty

from queryspec_specifications.exceptions import (
    FieldNotFoundError,
    OperatorNotFoundError,
    UnsupportedPredicateError,
)
from queryspec_specifications.operators import SpecificationOperator

from .operators import DEFAULT_SQLA_REGISTRY

if TYPE_CHECKING:
    from .strategy import SQLAlchemyOperatorRegistry

BACKEND_NAME = "SQLAlchemy"

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_sqla_filter(
    model: type[Any],
    data: dict[str, Any],
    *,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> ColumnElement[bool]:
    """
    Build a SQLAlchemy filter expression from a predicate dictionary.

    Args:
        model: The SQLAlchemy model class.
        data: Predicate dictionary (JSON AST produced by ``spec.to_dict()``).
        registry: Optional custom operator registry.  Falls back to
            ``DEFAULT_SQLA_REGISTRY``.

    Raises:
        UnsupportedPredicateError: For closure predicates.
        FieldNotFoundError: If an attribute does not exist on the model.
        OperatorNotFoundError: If the operator is unknown.
    """
    reg = registry or DEFAULT_SQLA_REGISTRY
    return _compile_node(model, data, reg)


def mapped_attribute_names(model: type[Any]) -> list[str]:
    """Column and relationship names of a mapped class."""
    return [attr.key for attr in sa_inspect(model).attrs]


# ---------------------------------------------------------------------------
# Internal compilation
# ---------------------------------------------------------------------------


def _compile_node(
    model: type[Any],
    data: dict[str, Any],
    registry: SQLAlchemyOperatorRegistry,
) -> ColumnElement[bool]:
    op_str = str(data.get("op", "")).lower()

    if op_str == SpecificationOperator.AND:
        return and_(
            *(_compile_node(model, c, registry) for c in data.get("conditions", []))
        )
    if op_str == SpecificationOperator.NOT:
        (inner,) = data["conditions"]
        return not_(_compile_node(model, inner, registry))
    if op_str == SpecificationOperator.SEARCH:
        return _compile_search(model, data, registry)
    if op_str == "lambda":
        raise UnsupportedPredicateError(str(data.get("name", "lambda")), BACKEND_NAME)

    return _compile_leaf_node(model, data, registry, op_str)


def _compile_search(
    model: type[Any],
    data: dict[str, Any],
    registry: SQLAlchemyOperatorRegistry,
) -> ColumnElement[bool]:
    text = str(data.get("val") or "").strip()
    clauses = [
        _compile_leaf_node(
            model,
            {"attr": attr, "val": text},
            registry,
            SpecificationOperator.ICONTAINS.value,
        )
        for attr in data.get("attrs", [])
    ]
    if not clauses:
        return false()
    return or_(*clauses)


def _compile_leaf_node(
    model: type[Any],
    data: dict[str, Any],
    registry: SQLAlchemyOperatorRegistry,
    op_str: str,
) -> ColumnElement[bool]:
    """Compile leaf node (attribute-based conditions)."""
    attr: str | None = data.get("attr")
    val = data.get("val")

    if not attr:
        raise ValueError(f"Predicate missing 'attr': {data}")

    try:
        op = SpecificationOperator(op_str)
    except ValueError:
        raise OperatorNotFoundError(
            op_str, [m.value for m in SpecificationOperator]
        ) from None

    # Relationship traversal (e.g. "subcategories.name")
    if "." in attr:
        rel_name, nested_attr = attr.split(".", 1)
        rel_attr = _model_attribute(model, rel_name)
        prop = getattr(rel_attr, "property", None)
        if not isinstance(prop, RelationshipProperty):
            raise FieldNotFoundError(
                attr, model.__name__, mapped_attribute_names(model)
            )

        target_model = prop.mapper.class_
        nested_data = {"op": op_str, "attr": nested_attr, "val": val}
        inner_expr = _compile_node(target_model, nested_data, registry)

        if prop.uselist:
            return cast("ColumnElement[bool]", rel_attr.any(inner_expr))
        return cast("ColumnElement[bool]", rel_attr.has(inner_expr))

    return registry.apply(op, _model_attribute(model, attr), val)


def _model_attribute(model: type[Any], name: str) -> Any:
    if name not in mapped_attribute_names(model):
        raise FieldNotFoundError(name, model.__name__, mapped_attribute_names(model))
    return getattr(model, name)
