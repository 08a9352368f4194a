"""
SQLAlchemy column mixins that mirror domain mixins.

Use these to build auditable table models without repeating column
definitions. ``AuditableModelMixin`` declares ``__soft_delete_field__``, so
mapped classes using it carry the auditable capability and are filtered by
the soft-delete predicate automatically.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar

from sqlalchemy import Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditableModelMixin:
    """Adds audit and soft-delete columns. Mirrors domain AuditableMixin."""

    __soft_delete_field__: ClassVar[str] = "is_deleted"

    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=_utcnow, onupdate=_utcnow
    )
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
