"""SQLAlchemy model mixins for audit and soft-delete."""

from .columns import AuditableModelMixin

__all__ = ["AuditableModelMixin"]
