"""Pagination settings."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PAGE_SIZE = 10


class PaginationSettings(BaseModel):
    """
    Immutable knobs shared by the executor and the read repository.

    Attributes:
        default_page_size: Used when the caller asks for a non-positive size.
        max_page_size: Upper bound for the page size; ``None`` disables it.
        timeout: Seconds allowed for count plus fetch; ``None`` disables it.
    """

    model_config = ConfigDict(frozen=True)

    default_page_size: int = Field(default=DEFAULT_PAGE_SIZE, gt=0)
    max_page_size: int | None = Field(default=None, gt=0)
    timeout: float | None = Field(default=None, gt=0)
