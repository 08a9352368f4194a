"""Specification pattern primitives."""

from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T", contravariant=True)


@runtime_checkable
class ISpecification(Protocol[T]):
    """
    Protocol for the Specification pattern.
    Used to encapsulate a filter predicate over entities.
    """

    def is_satisfied_by(self, candidate: T) -> bool:
        """
        Check whether *candidate* matches the predicate.
        Used by in-memory query sources.
        """
        ...

    def to_dict(self) -> dict[str, Any]:
        """
        Return a dictionary representation of the predicate.
        Storage collaborators compile this tree into native filters.
        """
        ...
