"""Soft-delete predicate, built once per auditable entity type."""

from __future__ import annotations

from typing import Any, ClassVar

from queryspec_core.domain.auditable import soft_delete_field

from .ast import AttributeSpecification
from .operators import SpecificationOperator


class SoftDeleteFilterBuilder:
    """
    Builds the ``<deleted accessor> == False`` predicate for a type.

    The accessor name comes from the type's auditable capability: an
    ``is_deleted`` field, or whatever ``__soft_delete_field__`` names.
    Predicates are cached per type, so every evaluation of the same entity
    type shares one instance.
    """

    _cache: ClassVar[dict[type[Any], AttributeSpecification[Any]]] = {}

    @classmethod
    def build(cls, entity_cls: type[Any]) -> AttributeSpecification[Any]:
        """
        Return the "not deleted" predicate for *entity_cls*.

        Raises:
            TypeError: If *entity_cls* is not auditable.
        """
        cached = cls._cache.get(entity_cls)
        if cached is not None:
            return cached

        field = soft_delete_field(entity_cls)
        if field is None:
            raise TypeError(
                f"{entity_cls.__name__} does not carry a soft-delete flag; "
                f"declare an is_deleted field or __soft_delete_field__"
            )
        # setdefault keeps the first instance if two callers race here
        return cls._cache.setdefault(
            entity_cls,
            AttributeSpecification(field, SpecificationOperator.EQ, False),
        )

    @classmethod
    def clear_cache(cls) -> None:
        cls._cache.clear()
