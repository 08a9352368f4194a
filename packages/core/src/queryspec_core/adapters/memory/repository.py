"""InMemoryRepository — dict-backed entity store for unit tests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ...primitives.exceptions import EntityNotFoundError
from .query_source import InMemoryQuerySource

if TYPE_CHECKING:
    import builtins
    from collections.abc import Iterable

T = TypeVar("T")


class InMemoryRepository(Generic[T]):
    """In-memory entity store keyed by each entity's ``id``.

    ``query()`` hands out an :class:`InMemoryQuerySource` over the rows
    present at that moment, in insertion order. Rows are shared, not copied.
    """

    def __init__(self, entity_cls: type[T], entities: Iterable[T] = ()) -> None:
        self.entity_cls = entity_cls
        self._store: dict[Any, T] = {}
        for entity in entities:
            self._store[self._id_of(entity)] = entity

    @staticmethod
    def _id_of(entity: Any) -> Any:
        return entity.id

    async def add(self, entity: T) -> Any:
        entity_id = self._id_of(entity)
        self._store[entity_id] = entity
        return entity_id

    async def add_range(self, entities: Iterable[T]) -> None:
        for entity in entities:
            await self.add(entity)

    async def get(self, entity_id: Any) -> T | None:
        return self._store.get(entity_id)

    async def soft_delete(self, entity_id: Any) -> T:
        """Flag the entity as deleted without removing it from the store."""
        entity = self._store.get(entity_id)
        if entity is None:
            raise EntityNotFoundError(self.entity_cls.__name__, entity_id)
        entity.soft_delete()  # type: ignore[attr-defined]
        return entity

    async def delete(self, entity_id: Any) -> Any:
        self._store.pop(entity_id, None)
        return entity_id

    async def list_all(self) -> builtins.list[T]:
        return list(self._store.values())

    def query(self) -> InMemoryQuerySource[T]:
        """Return a lazily evaluated source over the current row membership."""
        return InMemoryQuerySource.of(self.entity_cls, list(self._store.values()))

    # ── Test helpers ─────────────────────────────────────────────

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)
