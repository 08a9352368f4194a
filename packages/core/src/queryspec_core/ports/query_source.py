"""
IQuerySource — the storage collaborator contract.

A query source is an immutable, not-yet-materialized description of a
query over entities of type ``T``. Every shaping call (``filter``,
``expand``, ``order_by``, ``skip``, ``take``) returns a *new* source;
only ``count()`` and ``materialize()`` perform I/O::

    source = (
        repo.query()
        .filter(spec)
        .expand(("subcategories", "images"))
        .order_by("name")
    )
    total = await source.count()
    page = await source.skip(20).take(10).materialize()

Sources that can run both round trips against one consistent snapshot
expose ``consistent_read()``; see :func:`supports_consistent_read`.
"""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    Protocol,
    TypeGuard,
    TypeVar,
    runtime_checkable,
)

if TYPE_CHECKING:
    from contextlib import AbstractAsyncContextManager

    from ..domain.specification import ISpecification

T = TypeVar("T")

ExpansionPath = tuple[str, ...]


@runtime_checkable
class IQuerySource(Protocol[T]):
    """Abstract, lazily evaluated data source of ``T``."""

    @property
    def entity_type(self) -> type[Any]:
        """The entity type this source yields."""
        ...

    def filter(self, predicate: ISpecification[Any]) -> IQuerySource[T]:
        """Return a source restricted to rows satisfying *predicate*.

        Successive calls are AND-ed.
        """
        ...

    def expand(self, path: ExpansionPath) -> IQuerySource[T]:
        """Return a source that eagerly attaches the related rows on *path*.

        *path* is a chain of relationship names, each one off the previous.
        """
        ...

    def order_by(self, key: str, *, descending: bool = False) -> IQuerySource[T]:
        """Return a source ordered by *key*."""
        ...

    def skip(self, count: int) -> IQuerySource[T]: ...

    def take(self, count: int) -> IQuerySource[T]: ...

    async def count(self) -> int:
        """Count matching rows, ignoring ``skip``/``take``."""
        ...

    async def materialize(self) -> list[T]:
        """Fetch the rows this source describes, in order."""
        ...

    def describe(self) -> dict[str, Any]:
        """Return the (filter, expansion, order, slice) description."""
        ...


@runtime_checkable
class IConsistentQuerySource(IQuerySource[T], Protocol[T]):
    """Source able to pin ``count()`` and ``materialize()`` to one snapshot."""

    def consistent_read(self) -> AbstractAsyncContextManager[Any]: ...


def supports_consistent_read(source: Any) -> TypeGuard[IConsistentQuerySource[Any]]:
    """True if *source* is a query source offering ``consistent_read()``."""
    return isinstance(source, IConsistentQuerySource)
