"""
ReadRepository — envelope-returning read surface over a query source.

Every method evaluates a :class:`Specification` against a fresh source and
wraps the outcome in a :class:`~queryspec_core.results.Result` (or a
:class:`~queryspec_core.results.PaginatedResult` for ``page``), turning
invalid specifications and storage errors into failures.

Usage::

    repo = ReadRepository(store.query)
    categories = await repo.list(ActiveCategoriesSpecification())
    first = await repo.first_or_default(spec)
    page = await repo.page(spec, page_number=1, page_size=25)
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Generic, TypeVar

from queryspec_core.primitives.exceptions import ValidationError as InputError
from queryspec_core.results import PaginatedResult, Result

from .evaluator import SpecificationEvaluator
from .exceptions import SpecificationError
from .pagination import PaginationExecutor
from .specification import Specification

if TYPE_CHECKING:
    from queryspec_core.ports.query_source import IQuerySource

    from .config import PaginationSettings

T = TypeVar("T")
R = TypeVar("R")

logger = logging.getLogger("queryspec.repository")


class ReadRepository(Generic[T]):
    """
    Read-only repository over any ``IQuerySource`` factory.

    Args:
        query: Zero-argument callable returning a fresh source, e.g.
            ``InMemoryRepository.query`` or a bound SQLAlchemy source factory.
        settings: Pagination settings shared with the executor.
        evaluator: Evaluator used for every read.
    """

    def __init__(
        self,
        query: Callable[[], IQuerySource[T]],
        settings: PaginationSettings | None = None,
        evaluator: SpecificationEvaluator | None = None,
    ) -> None:
        self._query = query
        self._evaluator = evaluator or SpecificationEvaluator()
        self._executor = PaginationExecutor(settings, self._evaluator)

    async def list(self, spec: Specification[T] | None = None) -> Result[list[T]]:
        """All rows selected by *spec* (paging hints honoured)."""

        async def run() -> list[T]:
            return await self._shaped(spec).materialize()

        return await self._guard("list", run)

    async def first_or_default(
        self, spec: Specification[T] | None = None
    ) -> Result[T | None]:
        """The first row selected by *spec*, or ``None`` data if there is none."""

        async def run() -> T | None:
            rows = await self._shaped(spec).take(1).materialize()
            return rows[0] if rows else None

        return await self._guard("first_or_default", run)

    async def count(self, spec: Specification[T] | None = None) -> Result[int]:
        async def run() -> int:
            return await self._shaped(spec).count()

        return await self._guard("count", run)

    async def exists(self, spec: Specification[T] | None = None) -> Result[bool]:
        async def run() -> bool:
            rows = await self._shaped(spec).take(1).materialize()
            return bool(rows)

        return await self._guard("exists", run)

    async def page(
        self,
        spec: Specification[T] | None,
        page_number: int,
        page_size: int,
    ) -> PaginatedResult[T]:
        """One page of the rows selected by *spec*; see :class:`PaginationExecutor`."""
        return await self._executor.execute(
            self._query(), spec or Specification(), page_number, page_size
        )

    # -- internals -----------------------------------------------------------

    def _shaped(self, spec: Specification[T] | None) -> IQuerySource[T]:
        return self._evaluator.get_query(self._query(), spec or Specification())

    async def _guard(
        self, operation: str, run: Callable[[], Awaitable[R]]
    ) -> Result[R]:
        try:
            data = await run()
        except SpecificationError as exc:
            logger.warning("%s rejected: %s", operation, exc)
            return Result.failure([str(exc)])
        except InputError as exc:
            logger.warning("%s rejected: %s", operation, exc.messages)
            return Result.failure(exc.messages)
        except Exception:
            logger.exception("%s failed", operation)
            return Result.failure(["An error occurred while reading data."])
        return Result.success(data)
