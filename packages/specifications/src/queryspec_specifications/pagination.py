"""
PaginationExecutor — count, slice and wrap one page.

Works against any :class:`~queryspec_core.ports.query_source.IQuerySource`
through the same ``count``/``skip``/``take``/``materialize`` contract, so an
in-memory list and a lazy SQL query are paged identically.

Failures never escape as exceptions: invalid specifications and storage
errors both come back as ``PaginatedResult.failure(messages)``. The one
exception is cancellation, which propagates unchanged.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import AbstractAsyncContextManager, nullcontext
from typing import TYPE_CHECKING, Any, TypeVar

from queryspec_core.ports.query_source import supports_consistent_read
from queryspec_core.primitives.exceptions import ValidationError as InputError
from queryspec_core.results import PaginatedResult

from .config import PaginationSettings
from .evaluator import SpecificationEvaluator
from .exceptions import SpecificationError

if TYPE_CHECKING:
    from queryspec_core.ports.query_source import IQuerySource

    from .specification import Specification

T = TypeVar("T")

logger = logging.getLogger("queryspec.pagination")


def consistent_read(source: Any) -> AbstractAsyncContextManager[Any]:
    """The source's ``consistent_read()`` if it has one, else a no-op."""
    if supports_consistent_read(source):
        return source.consistent_read()
    return nullcontext()


class PaginationExecutor:
    """
    Executes a specification as one page.

    Usage::

        executor = PaginationExecutor()
        page = await executor.execute(repo.query(), spec, page_number=2, page_size=10)
        if page.succeeded:
            ...
    """

    def __init__(
        self,
        settings: PaginationSettings | None = None,
        evaluator: SpecificationEvaluator | None = None,
    ) -> None:
        self._settings = settings or PaginationSettings()
        self._evaluator = evaluator or SpecificationEvaluator()

    @property
    def settings(self) -> PaginationSettings:
        return self._settings

    def normalize(self, page_number: int, page_size: int) -> tuple[int, int]:
        """Clamp paging inputs to valid values; never rejects them."""
        if page_number <= 0:
            logger.warning("page_number=%d clamped to 1", page_number)
            page_number = 1
        if page_size <= 0:
            logger.warning(
                "page_size=%d replaced by default %d",
                page_size,
                self._settings.default_page_size,
            )
            page_size = self._settings.default_page_size
        max_size = self._settings.max_page_size
        if max_size is not None and page_size > max_size:
            logger.warning("page_size=%d clamped to %d", page_size, max_size)
            page_size = max_size
        return page_number, page_size

    async def execute(
        self,
        source: IQuerySource[T],
        spec: Specification[T],
        page_number: int,
        page_size: int,
    ) -> PaginatedResult[T]:
        """
        Return page ``page_number`` of the rows *spec* selects from *source*.

        ``total_count`` is counted before slicing; a page past the end has
        no items but correct totals.
        """
        page_number, page_size = self.normalize(page_number, page_size)
        try:
            if self._settings.timeout is not None:
                return await asyncio.wait_for(
                    self._run(source, spec, page_number, page_size),
                    timeout=self._settings.timeout,
                )
            return await self._run(source, spec, page_number, page_size)
        except SpecificationError as exc:
            logger.warning("Invalid specification: %s", exc)
            return PaginatedResult.failure([str(exc)])
        except InputError as exc:
            logger.warning("Invalid query input: %s", exc.messages)
            return PaginatedResult.failure(exc.messages)
        except asyncio.TimeoutError:
            logger.error(
                "Paging %s timed out after %ss",
                source.entity_type.__name__,
                self._settings.timeout,
            )
            return PaginatedResult.failure(
                [f"The query timed out after {self._settings.timeout} seconds."]
            )
        except Exception:
            logger.exception("Paging %s failed", source.entity_type.__name__)
            return PaginatedResult.failure(
                ["An error occurred while retrieving the requested page."]
            )

    async def _run(
        self,
        source: IQuerySource[T],
        spec: Specification[T],
        page_number: int,
        page_size: int,
    ) -> PaginatedResult[T]:
        # Paging hints on the spec are superseded by the explicit page
        evaluated = self._evaluator.get_query(source, spec.unpaged())
        skip = (page_number - 1) * page_size

        async with consistent_read(evaluated):
            total_count = await evaluated.count()
            items = await evaluated.skip(skip).take(page_size).materialize()

        logger.debug(
            "Page %d/%d of %s: %d item(s), total %d",
            page_number,
            page_size,
            source.entity_type.__name__,
            len(items),
            total_count,
        )
        return PaginatedResult.success(items, total_count, page_number, page_size)
