"""Entity base class with Generic ID support."""

from __future__ import annotations

from typing import Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict

ID = TypeVar("ID", str, int, UUID)


class Entity(BaseModel, Generic[ID]):
    """Base class for all queryable entities.

    Generic over ``ID`` to support UUID, int, or str primary keys.
    Related entities are plain attributes (single object or list) so that
    expansion paths such as ``subcategories.images`` can be resolved
    against materialized rows.

    Usage::

        class Category(AuditableEntity[str]):
            name: str
            parent_id: str | None = None
            subcategories: list[Category] = []
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: ID

    @classmethod
    def field_names(cls) -> list[str]:
        """Names of the declared model fields (used for sort validation)."""
        return list(cls.model_fields.keys())
