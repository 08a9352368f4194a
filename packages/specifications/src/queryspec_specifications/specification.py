"""
Specification: the immutable description of one read.

``Specification`` bundles *what* to fetch (``criteria``), which related
data to attach (``includes``), the ordering, and paging hints. It never
touches a data source; :class:`~queryspec_specifications.evaluator.SpecificationEvaluator`
turns it into a shaped query source.

Copy-on-write helpers make it safe to share one instance across
concurrent evaluations::

    spec = (
        Specification[Category]()
        .where(AttributeSpecification("active", "=", True))
        .include("subcategories.images.image")
        .ordered_by("name")
    )
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .base import and_
from .include import IncludeLike, IncludePath, parse_include

if TYPE_CHECKING:
    from queryspec_core.domain.specification import ISpecification

T = TypeVar("T")


@dataclass(frozen=True)
class OrderBy:
    """Sort key plus direction."""

    key: str
    descending: bool = False

    @classmethod
    def parse(cls, value: str) -> OrderBy:
        """Parse ``"name"`` / ``"-name"`` into an ``OrderBy``."""
        text = value.strip()
        if text.startswith("-"):
            return cls(key=text[1:].strip(), descending=True)
        return cls(key=text)

    def __str__(self) -> str:
        return f"-{self.key}" if self.descending else self.key


@dataclass(frozen=True)
class Specification(Generic[T]):
    """
    Immutable container for criteria, includes, ordering and paging hints.

    Attributes:
        criteria: Filter predicate; ``None`` matches every row.
        includes: De-duplicated expansion paths, in registration order.
        order_by: Optional ordering.
        is_paging_enabled: Whether ``skip``/``take`` should be honoured.
        skip: Rows to skip when paging is enabled.
        take: Rows to return when paging is enabled.
    """

    criteria: ISpecification[T] | None = None
    includes: tuple[IncludePath, ...] = field(default=())
    order_by: OrderBy | None = None
    is_paging_enabled: bool = False
    skip: int | None = None
    take: int | None = None

    def where(self, predicate: ISpecification[T] | None) -> Specification[T]:
        """Return a copy whose criteria are AND-ed with ``predicate``."""
        return replace(self, criteria=and_(self.criteria, predicate))

    def include(self, *paths: IncludeLike) -> Specification[T]:
        """Return a copy with additional expansion paths (idempotent)."""
        includes = list(self.includes)
        for path in paths:
            parsed = parse_include(path)
            if parsed not in includes:
                includes.append(parsed)
        if len(includes) == len(self.includes):
            return self
        return replace(self, includes=tuple(includes))

    def ordered_by(self, key: str, *, descending: bool = False) -> Specification[T]:
        """Return a copy ordered by ``key`` (``"-key"`` means descending)."""
        order = OrderBy.parse(key)
        if descending:
            order = OrderBy(order.key, descending=True)
        return replace(self, order_by=order)

    def paged(self, skip: int, take: int) -> Specification[T]:
        """Return a copy with paging enabled."""
        return replace(self, is_paging_enabled=True, skip=skip, take=take)

    def unpaged(self) -> Specification[T]:
        """Return a copy with paging hints cleared."""
        return replace(self, is_paging_enabled=False, skip=None, take=None)

    def merge(self, other: Specification[T]) -> Specification[T]:
        """
        Merge two specifications.

        - Criteria are combined with AND.
        - Includes are concatenated (``other`` appended, de-duplicated).
        - ``other``'s ordering and paging override ``self``'s if set.
        """
        merged = replace(self, criteria=and_(self.criteria, other.criteria))
        merged = merged.include(*other.includes)
        if other.order_by is not None:
            merged = replace(merged, order_by=other.order_by)
        if other.is_paging_enabled:
            merged = replace(
                merged, is_paging_enabled=True, skip=other.skip, take=other.take
            )
        return merged

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a JSON-compatible dictionary."""
        result: dict[str, Any] = {}
        if self.criteria is not None:
            result["criteria"] = self.criteria.to_dict()
        if self.includes:
            result["includes"] = [".".join(p) for p in self.includes]
        if self.order_by is not None:
            result["order_by"] = str(self.order_by)
        if self.is_paging_enabled:
            result["skip"] = self.skip
            result["take"] = self.take
        return result
