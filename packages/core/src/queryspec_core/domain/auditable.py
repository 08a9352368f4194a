"""Auditable capability: the single accessor soft-delete filtering relies on."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from ..utils import declared_fields

SOFT_DELETE_ATTR = "__soft_delete_field__"
DEFAULT_SOFT_DELETE_FIELD = "is_deleted"


@runtime_checkable
class IAuditableEntity(Protocol):
    """
    Protocol for entities that carry a soft-delete flag.

    Any type declaring an ``is_deleted`` field (pydantic model, dataclass or
    SQLAlchemy mapped class) is auditable. Types whose flag has another name
    point at it with ``__soft_delete_field__`` at class level.
    """

    @property
    def is_deleted(self) -> bool: ...


def soft_delete_field(entity_cls: type[Any]) -> str | None:
    """Return the deletion accessor name of *entity_cls*, if it has one."""
    field = getattr(entity_cls, SOFT_DELETE_ATTR, None)
    if isinstance(field, str) and field:
        return field
    if DEFAULT_SOFT_DELETE_FIELD in (declared_fields(entity_cls) or ()):
        return DEFAULT_SOFT_DELETE_FIELD
    return None


def is_auditable(entity_cls: type[Any]) -> bool:
    """True if *entity_cls* carries the auditable capability."""
    return soft_delete_field(entity_cls) is not None
