from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from queryspec_core.domain.specification import ISpecification

T = TypeVar("T", contravariant=True)


class BaseSpecification(Generic[T], ISpecification[T]):
    """Base class for predicates with logic operator support."""

    def __and__(self, other: ISpecification[T]) -> ISpecification[T]:
        return and_(self, other)  # type: ignore[return-value]

    def __invert__(self) -> NotSpecification[T]:
        return NotSpecification(self)

    def merge(self, other: ISpecification[T] | None) -> ISpecification[T]:
        """Merge with another predicate using logical AND."""
        return and_(self, other)  # type: ignore[return-value]


class AndSpecification(BaseSpecification[T]):
    """Logical AND composite predicate."""

    def __init__(self, *specifications: ISpecification[T]) -> None:
        self.specifications = specifications

    def is_satisfied_by(self, candidate: T) -> bool:
        return all(spec.is_satisfied_by(candidate) for spec in self.specifications)

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "and",
            "conditions": [spec.to_dict() for spec in self.specifications],
        }


class NotSpecification(BaseSpecification[T]):
    """Logical NOT composite predicate."""

    def __init__(self, specification: ISpecification[T]) -> None:
        self.specification = specification

    def is_satisfied_by(self, candidate: T) -> bool:
        return not self.specification.is_satisfied_by(candidate)

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "not",
            "conditions": [self.specification.to_dict()],
        }


class LambdaSpecification(BaseSpecification[T]):
    """
    Ad-hoc predicate backed by a closure.

    Only in-memory sources can evaluate it; compiling collaborators raise
    :class:`~queryspec_specifications.exceptions.UnsupportedPredicateError`.

    Usage::

        spec = LambdaSpecification(lambda c: c.entity_id == entity_id)
    """

    def __init__(
        self, predicate: Callable[[T], bool], description: str | None = None
    ) -> None:
        self.predicate = predicate
        self.description = description or getattr(predicate, "__name__", "lambda")

    def is_satisfied_by(self, candidate: T) -> bool:
        return bool(self.predicate(candidate))

    def to_dict(self) -> dict[str, Any]:
        return {"op": "lambda", "name": self.description}


def and_(*predicates: ISpecification[Any] | None) -> ISpecification[Any] | None:
    """
    Conjoin first-class predicate values.

    ``None`` operands (absent filters) are dropped and nested AND nodes are
    flattened. No operands left means "match everything" and yields ``None``;
    a single operand is returned unchanged.
    """
    flat: list[ISpecification[Any]] = []
    for predicate in predicates:
        if predicate is None:
            continue
        if isinstance(predicate, AndSpecification):
            flat.extend(predicate.specifications)
        else:
            flat.append(predicate)
    if not flat:
        return None
    if len(flat) == 1:
        return flat[0]
    return AndSpecification(*flat)
