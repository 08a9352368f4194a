"""
Fluent builder for constructing predicate trees.

Example::

    criteria = (
        SpecificationBuilder()
        .where("active", "=", True)
        .where_present("parent_id", "=", request.parent_id)
        .not_group()
            .where("featured", "=", True)
        .end_group()
        .build()
    )
    # → AND(active == True, parent_id == ..., NOT(featured == True))
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .ast import AttributeSpecification, SearchSpecification
from .base import NotSpecification, and_

if TYPE_CHECKING:
    from collections.abc import Sequence

    from queryspec_core.domain.specification import ISpecification

    from .operators import SpecificationOperator
    from .strategy import MemoryOperatorRegistry


class SpecificationBuilder:
    """
    Fluent builder for composing predicate trees.

    Conditions added at the same level are combined with AND. Use
    ``and_group()`` / ``not_group()`` for explicit grouping, and
    ``end_group()`` to close the current group.
    """

    def __init__(
        self,
        registry: MemoryOperatorRegistry | None = None,
    ) -> None:
        self._registry = registry
        self._specs: list[ISpecification[Any]] = []
        self._stack: list[tuple[str, list[ISpecification[Any]]]] = []

    # -- leaf conditions -----------------------------------------------------

    def where(
        self,
        attr: str,
        op: SpecificationOperator | str,
        val: Any = None,
    ) -> SpecificationBuilder:
        """Add a single attribute condition to the current group."""
        self._current_list().append(
            AttributeSpecification(attr, op, val, registry=self._registry)
        )
        return self

    def where_present(
        self,
        attr: str,
        op: SpecificationOperator | str,
        val: Any,
    ) -> SpecificationBuilder:
        """Like :meth:`where`, but skipped when ``val`` is ``None`` or blank."""
        if val is None or (isinstance(val, str) and not val.strip()):
            return self
        return self.where(attr, op, val)

    def search(self, attrs: Sequence[str], text: str | None) -> SpecificationBuilder:
        """Add a free-text match over ``attrs``; skipped for empty text."""
        if text is None or not text.strip():
            return self
        self._current_list().append(SearchSpecification(attrs, text))
        return self

    def add(self, spec: ISpecification[Any] | None) -> SpecificationBuilder:
        """Add an already-constructed predicate; ``None`` is ignored."""
        if spec is not None:
            self._current_list().append(spec)
        return self

    # -- grouping ------------------------------------------------------------

    def and_group(self) -> SpecificationBuilder:
        """Open a new AND group.  Close with ``end_group()``."""
        self._stack.append(("and", []))
        return self

    def not_group(self) -> SpecificationBuilder:
        """Open a new NOT group (single child).  Close with ``end_group()``."""
        self._stack.append(("not", []))
        return self

    def end_group(self) -> SpecificationBuilder:
        """Close the current group and add it to the parent."""
        if not self._stack:
            raise ValueError("No open group to close")
        group_op, specs = self._stack.pop()
        composite = _combine(group_op, specs)
        if composite is not None:
            self._current_list().append(composite)
        return self

    # -- build ---------------------------------------------------------------

    def build(self) -> ISpecification[Any] | None:
        """
        Finalise and return the composed predicate.

        Returns ``None`` when no condition was added, meaning "match
        everything". A single condition is returned directly.

        Raises:
            ValueError: If groups are still open.
        """
        if self._stack:
            raise ValueError(
                f"{len(self._stack)} group(s) still open, "
                f"call end_group() before build()"
            )
        return _combine("and", self._specs)

    def reset(self) -> SpecificationBuilder:
        """Clear all conditions and return ``self`` for reuse."""
        self._specs.clear()
        self._stack.clear()
        return self

    # -- internals -----------------------------------------------------------

    def _current_list(self) -> list[ISpecification[Any]]:
        if self._stack:
            return self._stack[-1][1]
        return self._specs


def _combine(op: str, specs: list[ISpecification[Any]]) -> ISpecification[Any] | None:
    if op == "and":
        return and_(*specs)
    if op == "not":
        if len(specs) != 1:
            raise ValueError("NOT group must contain exactly one condition")
        return NotSpecification(specs[0])
    raise ValueError(f"Unknown group operator: {op}")
