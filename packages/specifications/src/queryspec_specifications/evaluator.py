"""
SpecificationEvaluator — turns a ``Specification`` into a shaped source.

The evaluator is the single place where a read description meets a data
source. It never performs I/O: it only chains ``filter``/``expand``/
``order_by`` (and paging hints, when enabled) onto the source it is given
and returns the still-unmaterialized result.

Evaluation order:

1. soft-delete predicate (auditable types only)
2. caller criteria, AND-ed with (1)
3. expansions: every root-to-leaf include path, depth-first
4. ordering, validated against the entity's fields
5. paging hints, when ``is_paging_enabled``
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from queryspec_core.domain.auditable import is_auditable
from queryspec_core.utils import declared_fields

from .base import and_
from .exceptions import FieldNotFoundError
from .include import IncludeTree
from .soft_delete import SoftDeleteFilterBuilder

if TYPE_CHECKING:
    from queryspec_core.ports.query_source import IQuerySource

    from .specification import Specification

T = TypeVar("T")

logger = logging.getLogger("queryspec.evaluator")


def available_fields(entity_cls: type[Any]) -> list[str] | None:
    """
    Names usable as sort keys on *entity_cls*.

    Understands pydantic models, SQLAlchemy mapped classes and dataclasses.
    Returns ``None`` when the type exposes no field metadata.
    """
    return declared_fields(entity_cls)


class SpecificationEvaluator:
    """Applies a :class:`Specification` to an :class:`IQuerySource`."""

    def __init__(self, *, validate_order_by: bool = True) -> None:
        self._validate_order_by = validate_order_by

    def get_query(
        self, source: IQuerySource[T], spec: Specification[T]
    ) -> IQuerySource[T]:
        """
        Return *source* shaped by *spec*; no I/O is performed.

        Raises:
            FieldNotFoundError: If the order key is not a field of the entity.
        """
        entity_cls = source.entity_type

        soft_delete = (
            SoftDeleteFilterBuilder.build(entity_cls)
            if is_auditable(entity_cls)
            else None
        )
        predicate = and_(soft_delete, spec.criteria)
        if predicate is not None:
            source = source.filter(predicate)

        if spec.includes:
            for path in IncludeTree.from_paths(spec.includes).leaf_paths():
                source = source.expand(path)

        if spec.order_by is not None:
            if self._validate_order_by:
                self._check_order_key(entity_cls, spec.order_by.key)
            source = source.order_by(
                spec.order_by.key, descending=spec.order_by.descending
            )

        if spec.is_paging_enabled:
            if spec.skip is not None:
                source = source.skip(spec.skip)
            if spec.take is not None:
                source = source.take(spec.take)

        logger.debug(
            "Evaluated specification for %s (soft-delete=%s, includes=%d)",
            entity_cls.__name__,
            soft_delete is not None,
            len(spec.includes),
        )
        return source

    @staticmethod
    def _check_order_key(entity_cls: type[Any], key: str) -> None:
        fields = available_fields(entity_cls)
        if fields is None:
            return
        root = key.split(".", 1)[0]
        if root not in fields:
            raise FieldNotFoundError(root, entity_cls.__name__, fields)
