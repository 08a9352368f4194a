"""
Page parameters: the raw paging/filtering input of a list endpoint.

Pure data. Call sites translate them into criteria (see
:mod:`queryspec_filtering.catalog`); the executor clamps the paging values.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PageParameters(BaseModel):
    """Common paging input, accepted in camelCase or snake_case."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    page_number: int = 1
    page_size: int = 10
    order_by: str = "id"
    search_text: str | None = None
    active: bool = True


class CategoryPageParameters(PageParameters):
    """Paging input of the category listing endpoint."""

    parent_id: str | None = None
    category_id: str | None = None
    featured: bool | None = None
    include_images: bool = Field(default=True)
