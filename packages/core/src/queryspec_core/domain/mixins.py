"""Reusable domain mixins."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Generic

from pydantic import BaseModel, Field

from ..primitives.exceptions import InvariantViolationError
from .entity import ID, Entity


class AuditableMixin(BaseModel):
    """Mixin that adds created_at / updated_at timestamps and a soft-delete flag.

    Rows are never removed by the query layer's callers; ``soft_delete()``
    flips ``is_deleted`` and every specification evaluated against the type
    excludes the row from then on.
    """

    __soft_delete_field__: ClassVar[str] = "is_deleted"

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    is_deleted: bool = False
    deleted_at: datetime | None = None

    def touch(self) -> None:
        """Update the ``updated_at`` timestamp to *now*."""
        object.__setattr__(self, "updated_at", datetime.now(timezone.utc))

    def soft_delete(self) -> None:
        """Mark as deleted. Raises if already deleted."""
        if self.is_deleted:
            raise InvariantViolationError("Already deleted")
        object.__setattr__(self, "is_deleted", True)
        object.__setattr__(self, "deleted_at", datetime.now(timezone.utc))
        self.touch()

    def restore(self) -> None:
        """Clear the deletion flag. Raises if not deleted."""
        if not self.is_deleted:
            raise InvariantViolationError("Not deleted")
        object.__setattr__(self, "is_deleted", False)
        object.__setattr__(self, "deleted_at", None)
        self.touch()


class AuditableEntity(Entity[ID], AuditableMixin, Generic[ID]):
    """Entity base that carries the auditable capability."""
