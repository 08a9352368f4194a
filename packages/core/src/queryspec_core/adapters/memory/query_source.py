"""InMemoryQuerySource — list-backed IQuerySource for tests and caches."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ...utils import resolve_attribute

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ...domain.specification import ISpecification
    from ...ports.query_source import ExpansionPath

T = TypeVar("T")

logger = logging.getLogger("queryspec.memory")


def _sort_key(key: str) -> Any:
    def extract(item: Any) -> tuple[bool, Any]:
        value = resolve_attribute(item, key)
        # None first, as SQL engines do for ascending order
        return (value is not None, value)

    return extract


@dataclass(frozen=True)
class InMemoryQuerySource(Generic[T]):
    """
    In-memory implementation of ``IQuerySource[T]``.

    Holds a snapshot of row membership: rows added to or removed from the
    backing store later are not seen. The rows themselves are shared, so an
    in-place change such as ``soft_delete()`` is visible to the next
    ``count()`` or ``materialize()``.
    Relationships are already attached to in-memory rows; ``expand`` only
    records the requested paths in the description.
    """

    rows: tuple[T, ...]
    entity_cls: type[Any]
    predicates: tuple[ISpecification[Any], ...] = ()
    expansions: tuple[ExpansionPath, ...] = ()
    ordering: tuple[tuple[str, bool], ...] = ()
    offset: int | None = None
    limit: int | None = None
    _round_trips: list[str] = field(default_factory=list, compare=False, repr=False)

    @classmethod
    def of(cls, entity_cls: type[Any], rows: Sequence[T]) -> InMemoryQuerySource[T]:
        """Create a source over the rows currently in *rows*."""
        return cls(rows=tuple(rows), entity_cls=entity_cls)

    @property
    def entity_type(self) -> type[Any]:
        return self.entity_cls

    @property
    def round_trips(self) -> list[str]:
        """Names of the I/O operations performed so far (``count``/``fetch``)."""
        return self._round_trips

    # -- shaping ------------------------------------------------------------

    def filter(self, predicate: ISpecification[Any]) -> InMemoryQuerySource[T]:
        return replace(self, predicates=(*self.predicates, predicate))

    def expand(self, path: ExpansionPath) -> InMemoryQuerySource[T]:
        if path in self.expansions:
            return self
        return replace(self, expansions=(*self.expansions, tuple(path)))

    def order_by(
        self, key: str, *, descending: bool = False
    ) -> InMemoryQuerySource[T]:
        return replace(self, ordering=(*self.ordering, (key, descending)))

    def skip(self, count: int) -> InMemoryQuerySource[T]:
        return replace(self, offset=max(0, count))

    def take(self, count: int) -> InMemoryQuerySource[T]:
        return replace(self, limit=max(0, count))

    # -- execution ----------------------------------------------------------

    def _matching(self) -> list[T]:
        items = [
            row
            for row in self.rows
            if all(p.is_satisfied_by(row) for p in self.predicates)
        ]
        # Stable sorts applied last-key-first give a multi-key ordering
        for key, descending in reversed(self.ordering):
            items.sort(key=_sort_key(key), reverse=descending)
        return items

    async def count(self) -> int:
        self._round_trips.append("count")
        return len(self._matching())

    async def materialize(self) -> list[T]:
        self._round_trips.append("fetch")
        items = self._matching()
        start = self.offset or 0
        end = start + self.limit if self.limit is not None else None
        result = items[start:end]
        logger.debug(
            "Materialized %d of %d %s rows",
            len(result),
            len(items),
            self.entity_cls.__name__,
        )
        return result

    def describe(self) -> dict[str, Any]:
        return {
            "entity": self.entity_cls.__name__,
            "filter": [p.to_dict() for p in self.predicates],
            "expand": [".".join(path) for path in self.expansions],
            "order_by": [
                f"-{key}" if descending else key for key, descending in self.ordering
            ],
            "offset": self.offset,
            "limit": self.limit,
        }
