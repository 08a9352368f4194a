"""Result envelopes returned by read operations.

``Result[T]`` wraps a single payload; ``PaginatedResult[T]`` wraps one page
of items together with the page metadata. Both are immutable and are only
ever built through their ``success`` / ``failure`` factories, which is the
sole place ``succeeded`` is decided.

Serialised form (``to_dict()``) uses camelCase keys::

    {
        "items": [...],
        "pageNumber": 1,
        "pageSize": 10,
        "totalCount": 25,
        "totalPages": 3,
        "succeeded": true,
        "messages": []
    }
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, PrivateAttr, computed_field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


def _as_messages(messages: str | Iterable[str] | None) -> tuple[str, ...]:
    if messages is None:
        return ()
    if isinstance(messages, str):
        return (messages,)
    return tuple(messages)


class Result(BaseModel, Generic[T]):
    """Success/failure wrapper around a single payload."""

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    data: T | None = None
    messages: tuple[str, ...] = ()
    _succeeded: bool = PrivateAttr(default=False)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def succeeded(self) -> bool:
        return self._succeeded

    # ── Factory methods ──────────────────────────────────────────

    @classmethod
    def success(
        cls,
        data: T | None = None,
        messages: str | Iterable[str] | None = None,
    ) -> Result[T]:
        result = cls(data=data, messages=_as_messages(messages))
        result._succeeded = True
        return result

    @classmethod
    def failure(cls, messages: str | Iterable[str] | None = None) -> Result[T]:
        return cls(messages=_as_messages(messages))

    def __bool__(self) -> bool:
        return self._succeeded


class PaginatedResult(BaseModel, Generic[T]):
    """
    One page of ``T`` plus page metadata.

    ``total_pages`` is derived: ``ceil(total_count / page_size)``, ``0``
    when there is nothing to page. Items are held in a tuple owned by this
    envelope alone.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    items: tuple[T, ...] = ()
    page_number: int = 0
    page_size: int = 0
    total_count: int = 0
    messages: tuple[str, ...] = ()
    _succeeded: bool = PrivateAttr(default=False)

    @computed_field(alias="totalPages")  # type: ignore[prop-decorator]
    @property
    def total_pages(self) -> int:
        if self.total_count <= 0 or self.page_size <= 0:
            return 0
        return math.ceil(self.total_count / self.page_size)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def succeeded(self) -> bool:
        return self._succeeded

    @property
    def has_previous_page(self) -> bool:
        return self.page_number > 1

    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.total_pages

    # ── Factory methods ──────────────────────────────────────────

    @classmethod
    def success(
        cls,
        items: Iterable[T],
        total_count: int,
        page_number: int,
        page_size: int,
    ) -> PaginatedResult[T]:
        result = cls(
            items=tuple(items),
            total_count=total_count,
            page_number=page_number,
            page_size=page_size,
        )
        result._succeeded = True
        return result

    @classmethod
    def failure(
        cls, messages: str | Iterable[str] | None = None
    ) -> PaginatedResult[T]:
        return cls(messages=_as_messages(messages))

    # ── Serialisation ────────────────────────────────────────────

    def to_dict(
        self, item_serializer: Callable[[T], Any] | None = None
    ) -> dict[str, Any]:
        """Return the camelCase wire form.

        Args:
            item_serializer: Optional per-item converter. Pydantic items are
                dumped with ``model_dump()`` when no serializer is given.
        """
        return {
            "items": [self._dump_item(item, item_serializer) for item in self.items],
            "pageNumber": self.page_number,
            "pageSize": self.page_size,
            "totalCount": self.total_count,
            "totalPages": self.total_pages,
            "succeeded": self.succeeded,
            "messages": list(self.messages),
        }

    @staticmethod
    def _dump_item(item: T, serializer: Callable[[T], Any] | None) -> Any:
        if serializer is not None:
            return serializer(item)
        if isinstance(item, BaseModel):
            return item.model_dump(mode="json")
        return item

    def __bool__(self) -> bool:
        return self._succeeded
