"""Category listing: page parameters → :class:`Specification` → page."""

from __future__ import annotations

import logging
from typing import Any

from queryspec_core.primitives.exceptions import ValidationError
from queryspec_core.results import PaginatedResult
from queryspec_specifications.builder import SpecificationBuilder
from queryspec_specifications.repository import ReadRepository
from queryspec_specifications.specification import Specification

from .parameters import CategoryPageParameters
from .whitelist import FieldWhitelist

logger = logging.getLogger("queryspec.filtering")

CATEGORY_SEARCH_FIELDS = ("name", "description")

CATEGORY_WHITELIST = FieldWhitelist(
    filterable_fields={
        "parent_id": {"eq"},
        "id": {"eq"},
        "featured": {"eq"},
        "active": {"eq"},
    },
    sortable_fields={"id", "name", "created_at", "display_order"},
)


def category_page_specification(
    params: CategoryPageParameters,
    *,
    whitelist: FieldWhitelist = CATEGORY_WHITELIST,
) -> Specification[Any]:
    """
    Translate category page parameters into a specification.

    Absent values add no clause; present ones are AND-ed. Sub-categories
    are always expanded, images only when ``include_images`` is set.

    Raises:
        FieldNotAllowedError: If ``order_by`` is not a sortable field, or a
            filter is not allowed by *whitelist*.
    """
    filters = {
        "active": params.active,
        "parent_id": params.parent_id,
        "id": params.category_id,
        "featured": params.featured,
    }
    for field, value in filters.items():
        if value is not None:
            whitelist.allow_filter(field, "=")

    criteria = (
        SpecificationBuilder()
        .where("active", "=", params.active)
        .where_present("parent_id", "=", params.parent_id)
        .where_present("id", "=", params.category_id)
        .where_present("featured", "=", params.featured)
        .search(CATEGORY_SEARCH_FIELDS, params.search_text)
        .build()
    )
    order = whitelist.to_order_by(params.order_by)

    spec: Specification[Any] = (
        Specification()
        .where(criteria)
        .include("subcategories")
        .ordered_by(order.key, descending=order.descending)
    )
    if params.include_images:
        spec = spec.include("images.image", "subcategories.images.image")
    return spec


async def category_page(
    repo: ReadRepository[Any],
    params: CategoryPageParameters,
    *,
    whitelist: FieldWhitelist = CATEGORY_WHITELIST,
) -> PaginatedResult[Any]:
    """
    Serve one page of categories for *params*.

    Input the whitelist rejects (an unsortable ``order_by``, a disallowed
    filter) comes back as a failed page carrying the messages; it is never
    raised to the caller.
    """
    try:
        spec = category_page_specification(params, whitelist=whitelist)
    except ValidationError as exc:
        logger.warning("category page rejected: %s", exc.messages)
        return PaginatedResult.failure(exc.messages)
    return await repo.page(spec, params.page_number, params.page_size)
