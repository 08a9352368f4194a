"""Tests for the category listing specification."""

from __future__ import annotations

import pytest

from queryspec_core.adapters.memory import InMemoryRepository
from queryspec_core.domain.entity import Entity
from queryspec_core.domain.mixins import AuditableEntity
from queryspec_filtering import (
    CATEGORY_WHITELIST,
    CategoryPageParameters,
    FieldNotAllowedError,
    FieldWhitelist,
    PageParametersParser,
    category_page,
    category_page_specification,
)
from queryspec_specifications import OrderBy, ReadRepository


class Image(Entity[str]):
    url: str


class CategoryImage(Entity[str]):
    image: Image


class Category(AuditableEntity[str]):
    name: str
    description: str | None = None
    parent_id: str | None = None
    featured: bool = False
    active: bool = True
    display_order: int = 0
    images: list[CategoryImage] = []
    subcategories: list[Category] = []


@pytest.fixture
async def repo() -> ReadRepository[Category]:
    store = InMemoryRepository(Category)
    await store.add_range(
        [
            Category(id="1", name="Chairs", parent_id="A", display_order=3),
            Category(
                id="2",
                name="Tables",
                parent_id="A",
                featured=True,
                display_order=1,
                description="Dining and garden tables",
            ),
            Category(id="3", name="Lamps", parent_id="A", display_order=2),
            Category(id="4", name="Boots", parent_id="B"),
            Category(id="5", name="Hats", parent_id="B", featured=True),
            Category(id="6", name="Stools", parent_id="A", active=False),
            Category(id="7", name="Benches", parent_id="A"),
        ]
    )
    await store.soft_delete("7")
    return ReadRepository(store.query)


def _params(**query: str) -> CategoryPageParameters:
    return PageParametersParser().parse(query, model=CategoryPageParameters)


async def test_filter_by_parent(repo) -> None:
    spec = category_page_specification(_params(parentId="A"))
    page = await repo.page(spec, 1, 10)

    assert page.succeeded
    assert len(page.items) == 3
    assert {c.id for c in page.items} == {"1", "2", "3"}


async def test_absent_filters_add_no_clause(repo) -> None:
    page = await repo.page(category_page_specification(_params()), 1, 10)
    assert page.total_count == 5


async def test_featured_and_search(repo) -> None:
    featured = await repo.page(
        category_page_specification(_params(featured="true")), 1, 10
    )
    assert {c.id for c in featured.items} == {"2", "5"}

    searched = await repo.page(
        category_page_specification(_params(searchText="GARDEN")), 1, 10
    )
    assert [c.id for c in searched.items] == ["2"]


async def test_inactive_listing(repo) -> None:
    page = await repo.page(category_page_specification(_params(active="false")), 1, 10)
    assert [c.id for c in page.items] == ["6"]


async def test_category_id(repo) -> None:
    page = await repo.page(category_page_specification(_params(categoryId="4")), 1, 10)
    assert [c.name for c in page.items] == ["Boots"]


async def test_order(repo) -> None:
    spec = category_page_specification(
        _params(parentId="A", orderBy="-display_order")
    )
    page = await repo.page(spec, 1, 10)
    assert [c.id for c in page.items] == ["1", "3", "2"]


def test_includes() -> None:
    spec = category_page_specification(_params())
    assert spec.includes == (
        ("subcategories",),
        ("images", "image"),
        ("subcategories", "images", "image"),
    )
    assert spec.order_by == OrderBy("id")

    without_images = category_page_specification(_params(includeImages="false"))
    assert without_images.includes == (("subcategories",),)


def test_sort_field_must_be_whitelisted() -> None:
    with pytest.raises(FieldNotAllowedError):
        category_page_specification(_params(orderBy="description"))


def test_filter_must_be_whitelisted() -> None:
    whitelist = FieldWhitelist(
        filterable_fields={"active": {"eq"}},
        sortable_fields=CATEGORY_WHITELIST.sortable_fields,
    )
    with pytest.raises(FieldNotAllowedError) as exc_info:
        category_page_specification(_params(parentId="A"), whitelist=whitelist)
    assert "parent_id" in exc_info.value.errors


async def test_category_page_serves_requested_page(repo) -> None:
    page = await category_page(
        repo, _params(parentId="A", orderBy="display_order", pageSize="2")
    )

    assert page.succeeded
    assert [c.id for c in page.items] == ["2", "3"]
    assert page.total_count == 3
    assert page.total_pages == 2


async def test_category_page_unknown_sort_field_is_a_failed_page(repo) -> None:
    page = await category_page(repo, _params(orderBy="bogus"))

    assert not page.succeeded
    assert page.items == ()
    assert page.messages == ("bogus: Field is not sortable",)
