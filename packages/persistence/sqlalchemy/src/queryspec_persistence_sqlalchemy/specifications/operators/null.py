"""``IS NULL`` / ``IS NOT NULL`` for SQLAlchemy columns."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from queryspec_specifications.operators import SpecificationOperator

from ..strategy import SQLAlchemyOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement


class NullCheckOperator(SQLAlchemyOperator):
    """Compares a column against ``NULL``; the predicate value is ignored."""

    def __init__(self, *, negate: bool = False) -> None:
        self._negate = negate

    @property
    def name(self) -> SpecificationOperator:
        if self._negate:
            return SpecificationOperator.IS_NOT_NULL
        return SpecificationOperator.IS_NULL

    def apply(self, column: Any, _value: Any) -> ColumnElement[bool]:
        return column.is_not(None) if self._negate else column.is_(None)
