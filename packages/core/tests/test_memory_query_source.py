"""Tests for InMemoryQuerySource."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import pytest

from queryspec_core.adapters.memory.query_source import InMemoryQuerySource
from queryspec_core.domain.entity import Entity
from queryspec_core.ports.query_source import (
    IConsistentQuerySource,
    IQuerySource,
    supports_consistent_read,
)


class Product(Entity[int]):
    name: str
    price: int | None = None


class MinPrice:
    """Minimal ISpecification implementation."""

    def __init__(self, minimum: int) -> None:
        self.minimum = minimum

    def is_satisfied_by(self, candidate: Product) -> bool:
        return candidate.price is not None and candidate.price >= self.minimum

    def to_dict(self) -> dict[str, Any]:
        return {"op": ">=", "attr": "price", "val": self.minimum}


class PinnedSource(InMemoryQuerySource[Product]):
    @asynccontextmanager
    async def consistent_read(self):
        yield self


class LooseReader:
    @asynccontextmanager
    async def consistent_read(self):
        yield self


@pytest.fixture
def source() -> InMemoryQuerySource[Product]:
    rows = [
        Product(id=1, name="b", price=30),
        Product(id=2, name="a", price=10),
        Product(id=3, name="c", price=None),
        Product(id=4, name="a", price=20),
    ]
    return InMemoryQuerySource.of(Product, rows)


def test_satisfies_query_source_protocol(source: InMemoryQuerySource[Product]) -> None:
    assert isinstance(source, IQuerySource)
    assert supports_consistent_read(source) is False


def test_consistent_read_capability() -> None:
    pinned = PinnedSource.of(Product, [])

    assert isinstance(pinned, IConsistentQuerySource)
    assert supports_consistent_read(pinned) is True


def test_consistent_read_requires_a_query_source() -> None:
    assert supports_consistent_read(LooseReader()) is False


def test_shaping_returns_new_sources(source: InMemoryQuerySource[Product]) -> None:
    filtered = source.filter(MinPrice(15))

    assert filtered is not source
    assert source.predicates == ()


@pytest.mark.asyncio
async def test_filter_and_count(source: InMemoryQuerySource[Product]) -> None:
    assert await source.filter(MinPrice(15)).count() == 2


@pytest.mark.asyncio
async def test_successive_filters_are_anded(
    source: InMemoryQuerySource[Product],
) -> None:
    shaped = source.filter(MinPrice(15)).filter(MinPrice(25))

    assert [p.id for p in await shaped.materialize()] == [1]


@pytest.mark.asyncio
async def test_order_by_multiple_keys(source: InMemoryQuerySource[Product]) -> None:
    shaped = source.order_by("name").order_by("price", descending=True)

    assert [p.id for p in await shaped.materialize()] == [4, 2, 1, 3]


@pytest.mark.asyncio
async def test_none_sorts_first_ascending(
    source: InMemoryQuerySource[Product],
) -> None:
    shaped = source.order_by("price")

    assert [p.id for p in await shaped.materialize()] == [3, 2, 4, 1]


@pytest.mark.asyncio
async def test_skip_take(source: InMemoryQuerySource[Product]) -> None:
    shaped = source.order_by("id").skip(1).take(2)

    assert [p.id for p in await shaped.materialize()] == [2, 3]


@pytest.mark.asyncio
async def test_count_ignores_slice(source: InMemoryQuerySource[Product]) -> None:
    assert await source.skip(3).take(1).count() == 4


@pytest.mark.asyncio
async def test_skip_past_end_is_empty(source: InMemoryQuerySource[Product]) -> None:
    assert await source.skip(10).take(5).materialize() == []


@pytest.mark.asyncio
async def test_round_trips_are_recorded(
    source: InMemoryQuerySource[Product],
) -> None:
    shaped = source.filter(MinPrice(0))
    await shaped.count()
    await shaped.take(1).materialize()

    assert source.round_trips == ["count", "fetch"]


def test_expand_is_idempotent(source: InMemoryQuerySource[Product]) -> None:
    shaped = source.expand(("images",)).expand(("images",))

    assert shaped.expansions == (("images",),)


def test_describe_is_deterministic(source: InMemoryQuerySource[Product]) -> None:
    def build() -> InMemoryQuerySource[Product]:
        return (
            source.filter(MinPrice(15))
            .expand(("images", "image"))
            .order_by("name", descending=True)
            .skip(0)
            .take(10)
        )

    assert build().describe() == build().describe()
    assert build().describe() == {
        "entity": "Product",
        "filter": [{"op": ">=", "attr": "price", "val": 15}],
        "expand": ["images.image"],
        "order_by": ["-name"],
        "offset": 0,
        "limit": 10,
    }
