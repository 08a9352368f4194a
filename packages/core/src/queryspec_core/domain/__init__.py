"""Domain primitives: entities, the auditable capability, specifications."""

from __future__ import annotations

from .auditable import IAuditableEntity, is_auditable, soft_delete_field
from .entity import Entity
from .mixins import AuditableEntity, AuditableMixin
from .specification import ISpecification

__all__: list[str] = [
    "AuditableEntity",
    "AuditableMixin",
    "Entity",
    "IAuditableEntity",
    "ISpecification",
    "is_auditable",
    "soft_delete_field",
]
