"""
SQLAlchemyQuerySource — ``IQuerySource`` over an ``AsyncSession``.

Each shaping call returns a new source; the ``SELECT`` is built only when
``count()`` or ``materialize()`` runs::

    source = SQLAlchemyQuerySource(session, CategoryModel)
    page = await PaginationExecutor().execute(source, spec, 1, 10)

Predicates are compiled from their ``to_dict()`` form as soon as they are
added, so a predicate that cannot be compiled fails while the query is
being described rather than on the database.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import RelationshipProperty, selectinload

from queryspec_specifications.exceptions import (
    FieldNotFoundError,
    RelationshipTraversalError,
)

from ..exceptions import QueryExecutionError
from ..specifications.compiler import build_sqla_filter, mapped_attribute_names

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement
    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.orm.strategy_options import _AbstractLoad

    from queryspec_core.domain.specification import ISpecification
    from queryspec_core.ports.query_source import ExpansionPath

    from ..specifications.strategy import SQLAlchemyOperatorRegistry

T = TypeVar("T")

logger = logging.getLogger("queryspec.sqlalchemy")


@dataclass(frozen=True)
class SQLAlchemyQuerySource(Generic[T]):
    """
    Lazily evaluated source of mapped ``model`` rows.

    Rows are ordered by the requested keys, then by primary key, so equal
    sort keys still page deterministically.
    """

    session: AsyncSession
    model: type[T]
    registry: SQLAlchemyOperatorRegistry | None = None
    predicates: tuple[dict[str, Any], ...] = ()
    expansions: tuple[ExpansionPath, ...] = ()
    ordering: tuple[tuple[str, bool], ...] = ()
    offset: int | None = None
    limit: int | None = None
    _clauses: tuple[ColumnElement[bool], ...] = field(
        default=(), compare=False, repr=False
    )
    _loaders: tuple[_AbstractLoad, ...] = field(default=(), compare=False, repr=False)

    @property
    def entity_type(self) -> type[Any]:
        return self.model

    # -- shaping ------------------------------------------------------------

    def filter(self, predicate: ISpecification[Any]) -> SQLAlchemyQuerySource[T]:
        data = predicate.to_dict()
        clause = build_sqla_filter(self.model, data, registry=self.registry)
        return replace(
            self,
            predicates=(*self.predicates, data),
            _clauses=(*self._clauses, clause),
        )

    def expand(self, path: ExpansionPath) -> SQLAlchemyQuerySource[T]:
        path = tuple(path)
        if path in self.expansions:
            return self
        return replace(
            self,
            expansions=(*self.expansions, path),
            _loaders=(*self._loaders, self._loader_for(path)),
        )

    def order_by(
        self, key: str, *, descending: bool = False
    ) -> SQLAlchemyQuerySource[T]:
        self._column(key)
        return replace(self, ordering=(*self.ordering, (key, descending)))

    def skip(self, count: int) -> SQLAlchemyQuerySource[T]:
        return replace(self, offset=max(0, count))

    def take(self, count: int) -> SQLAlchemyQuerySource[T]:
        return replace(self, limit=max(0, count))

    # -- execution ----------------------------------------------------------

    async def count(self) -> int:
        stmt = select(func.count()).select_from(self._base_statement().subquery())
        try:
            total = await self.session.scalar(stmt)
        except SQLAlchemyError as exc:
            raise QueryExecutionError(
                f"Counting {self.model.__name__} rows failed: {exc}"
            ) from exc
        return int(total or 0)

    async def materialize(self) -> list[T]:
        stmt = self._ordered_statement().options(*self._loaders)
        if self.offset:
            stmt = stmt.offset(self.offset)
        if self.limit is not None:
            stmt = stmt.limit(self.limit)
        try:
            result = await self.session.scalars(stmt)
        except SQLAlchemyError as exc:
            raise QueryExecutionError(
                f"Fetching {self.model.__name__} rows failed: {exc}"
            ) from exc
        rows = list(result.all())
        logger.debug("Fetched %d %s row(s)", len(rows), self.model.__name__)
        return rows

    @asynccontextmanager
    async def consistent_read(self) -> AsyncIterator[SQLAlchemyQuerySource[T]]:
        """
        Run the enclosed ``count()`` and ``materialize()`` in one transaction.

        An already open transaction is reused. A transaction begun here is
        left open for the session owner to end, so fetched rows are not
        expired on exit.
        """
        if not self.session.in_transaction():
            await self.session.begin()
        yield self

    def describe(self) -> dict[str, Any]:
        return {
            "entity": self.model.__name__,
            "filter": list(self.predicates),
            "expand": [".".join(path) for path in self.expansions],
            "order_by": [
                f"-{key}" if descending else key for key, descending in self.ordering
            ],
            "offset": self.offset,
            "limit": self.limit,
        }

    # -- internals ----------------------------------------------------------

    def _base_statement(self) -> Select[Any]:
        stmt = select(self.model)
        if self._clauses:
            stmt = stmt.where(*self._clauses)
        return stmt

    def _ordered_statement(self) -> Select[Any]:
        clauses: list[Any] = []
        for key, descending in self.ordering:
            column = self._column(key)
            clauses.append(column.desc() if descending else column.asc())
        clauses.extend(sa_inspect(self.model).primary_key)
        return self._base_statement().order_by(*clauses)

    def _column(self, key: str) -> Any:
        mapper = sa_inspect(self.model)
        if key not in mapper.column_attrs:
            raise FieldNotFoundError(
                key, self.model.__name__, [c.key for c in mapper.column_attrs]
            )
        return getattr(self.model, key)

    def _loader_for(self, path: ExpansionPath) -> _AbstractLoad:
        current: type[Any] = self.model
        loader: Any = None
        for segment in path:
            if segment not in mapped_attribute_names(current):
                raise FieldNotFoundError(
                    segment, current.__name__, mapped_attribute_names(current)
                )
            attr = getattr(current, segment)
            prop = attr.property
            if not isinstance(prop, RelationshipProperty):
                raise RelationshipTraversalError(
                    segment, current.__name__, ".".join(path)
                )
            loader = selectinload(attr) if loader is None else loader.selectinload(attr)
            current = prop.mapper.class_
        return loader  # type: ignore[no-any-return]
