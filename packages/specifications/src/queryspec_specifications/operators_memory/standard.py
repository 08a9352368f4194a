"""Standard comparison operators: =, !=, >, <, >=, <=."""

from __future__ import annotations

import operator as op_module
from typing import Any, ClassVar

from ..operators import SpecificationOperator
from ..strategy import MemoryOperator


class EqualOperator(MemoryOperator):
    @property
    def name(self) -> SpecificationOperator:
        return SpecificationOperator.EQ

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return bool(field_value == condition_value)


class NotEqualOperator(MemoryOperator):
    @property
    def name(self) -> SpecificationOperator:
        return SpecificationOperator.NE

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return bool(field_value != condition_value)


class _OrderingOperator(MemoryOperator):
    """Ordering comparison; a missing value on either side never matches."""

    operator_name: ClassVar[SpecificationOperator]
    compare: ClassVar[Any]

    @property
    def name(self) -> SpecificationOperator:
        return self.operator_name

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None or condition_value is None:
            return False
        return bool(type(self).compare(field_value, condition_value))


class GreaterThanOperator(_OrderingOperator):
    operator_name = SpecificationOperator.GT
    compare = op_module.gt


class LessThanOperator(_OrderingOperator):
    operator_name = SpecificationOperator.LT
    compare = op_module.lt


class GreaterEqualOperator(_OrderingOperator):
    operator_name = SpecificationOperator.GE
    compare = op_module.ge


class LessEqualOperator(_OrderingOperator):
    operator_name = SpecificationOperator.LE
    compare = op_module.le
