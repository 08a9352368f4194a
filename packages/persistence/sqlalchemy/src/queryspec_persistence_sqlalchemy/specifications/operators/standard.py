"""Standard comparison operators for SQLAlchemy."""

from __future__ import annotations

import operator as op_module
from typing import TYPE_CHECKING, Any, ClassVar, cast

from queryspec_specifications.operators import SpecificationOperator

from ..strategy import SQLAlchemyOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement


class _ComparisonOperator(SQLAlchemyOperator):
    """Binary comparison built from a Python ``operator`` function."""

    operator_name: ClassVar[SpecificationOperator]
    compare: ClassVar[Any]

    @property
    def name(self) -> SpecificationOperator:
        return self.operator_name

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", type(self).compare(column, value))


class EqualOperator(_ComparisonOperator):
    operator_name = SpecificationOperator.EQ
    compare = op_module.eq


class NotEqualOperator(_ComparisonOperator):
    operator_name = SpecificationOperator.NE
    compare = op_module.ne


class GreaterThanOperator(_ComparisonOperator):
    operator_name = SpecificationOperator.GT
    compare = op_module.gt


class LessThanOperator(_ComparisonOperator):
    operator_name = SpecificationOperator.LT
    compare = op_module.lt


class GreaterEqualOperator(_ComparisonOperator):
    operator_name = SpecificationOperator.GE
    compare = op_module.ge


class LessEqualOperator(_ComparisonOperator):
    operator_name = SpecificationOperator.LE
    compare = op_module.le
