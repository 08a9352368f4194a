"""
Predicate-to-SQLAlchemy compilation.

Public API:
    - ``build_sqla_filter(model, data)`` — compile a predicate dict to a
      ``ColumnElement[bool]``
    - ``DEFAULT_SQLA_REGISTRY`` — the default operator registry
    - ``SQLAlchemyOperator`` / ``SQLAlchemyOperatorRegistry`` — extension
      points for custom operators
"""

from .compiler import build_sqla_filter, mapped_attribute_names
from .operators import DEFAULT_SQLA_REGISTRY, build_default_sqla_registry
from .strategy import SQLAlchemyOperator, SQLAlchemyOperatorRegistry

__all__ = [
    "DEFAULT_SQLA_REGISTRY",
    "SQLAlchemyOperator",
    "SQLAlchemyOperatorRegistry",
    "build_default_sqla_registry",
    "build_sqla_filter",
    "mapped_attribute_names",
]
