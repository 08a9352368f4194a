from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from queryspec_core.utils import resolve_attribute

from .base import AndSpecification, BaseSpecification, NotSpecification
from .exceptions import OperatorNotFoundError, ValidationError
from .operators import SpecificationOperator
from .operators_memory import DEFAULT_MEMORY_REGISTRY

if TYPE_CHECKING:
    from collections.abc import Sequence

    from queryspec_core.domain.specification import ISpecification

    from .strategy import MemoryOperatorRegistry

T = TypeVar("T", contravariant=True)

# Pre-compute valid operator values for validation
_VALID_OPERATORS: frozenset[str] = frozenset(m.value for m in SpecificationOperator)
_LOGICAL_OPERATORS: frozenset[str] = frozenset(
    {SpecificationOperator.AND, SpecificationOperator.NOT}
)


class AttributeSpecification(BaseSpecification[T]):
    """
    Predicate that checks a single attribute value.

    This is the leaf of the tagged expression tree: storage collaborators
    compile ``to_dict()`` into native filters, while in-memory sources
    delegate to a :class:`MemoryOperatorRegistry` (strategy pattern).
    """

    def __init__(
        self,
        attr: str,
        op: SpecificationOperator | str,
        val: Any = None,
        *,
        registry: MemoryOperatorRegistry | None = None,
    ) -> None:
        self.attr = attr
        if isinstance(op, str):
            try:
                op = SpecificationOperator(op)
            except ValueError:
                raise OperatorNotFoundError(
                    op, [member.value for member in SpecificationOperator]
                ) from None
        self.op = op
        self.val = val
        self._registry = registry if registry is not None else DEFAULT_MEMORY_REGISTRY

    def is_satisfied_by(self, candidate: T) -> bool:
        actual_val = resolve_attribute(candidate, self.attr)
        return self._registry.evaluate(self.op, actual_val, self.val)

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": self.op.value,
            "attr": self.attr,
            "val": self.val,
        }

    def __repr__(self) -> str:
        return f"AttributeSpecification({self.attr!r} {self.op.value} {self.val!r})"


class SearchSpecification(BaseSpecification[T]):
    """
    Case-insensitive free-text match over several attributes.

    A candidate matches when *any* of ``attrs`` contains ``text``. It is a
    single leaf (not an OR of caller filters) so collaborators can compile
    it in one place.
    """

    def __init__(self, attrs: Sequence[str], text: str) -> None:
        if not attrs:
            raise ValueError("SearchSpecification needs at least one attribute")
        self.attrs = tuple(attrs)
        self.text = text.strip()

    def is_satisfied_by(self, candidate: T) -> bool:
        needle = self.text.lower()
        for attr in self.attrs:
            value = resolve_attribute(candidate, attr)
            if value is not None and needle in str(value).lower():
                return True
        return False

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": SpecificationOperator.SEARCH.value,
            "attrs": list(self.attrs),
            "val": self.text,
        }


class SpecificationFactory(Generic[T]):
    """
    Factory for creating predicates from dictionary / JSON representations.

    Supports:
    - ``from_dict(data)`` — parse a nested dict tree
    - ``from_json(text)`` — parse a JSON string
    """

    @staticmethod
    def from_dict(
        data: dict[str, Any],
        *,
        allowed_fields: Sequence[str] | None = None,
        registry: MemoryOperatorRegistry | None = None,
    ) -> ISpecification[T]:
        """
        Create a predicate tree from a dictionary.

        Parameters
        ----------
        data:
            The predicate dictionary (potentially nested).
        allowed_fields:
            Optional whitelist of valid attribute names.  If provided, any
            ``attr`` not in this list raises :class:`ValidationError`.
        registry:
            Optional :class:`MemoryOperatorRegistry` injected into every
            :class:`AttributeSpecification` leaf.
        """
        SpecificationFactory._validate_node(data, allowed_fields=allowed_fields)
        return SpecificationFactory._build(data, registry=registry)

    @staticmethod
    def from_json(
        text: str,
        *,
        allowed_fields: Sequence[str] | None = None,
        registry: MemoryOperatorRegistry | None = None,
    ) -> ISpecification[T]:
        """Parse a JSON string and build a predicate tree."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValidationError(f"Invalid JSON: {exc}", path="<root>") from exc

        if not isinstance(data, dict):
            raise ValidationError(
                "Top-level JSON value must be an object", path="<root>"
            )

        return SpecificationFactory.from_dict(
            data, allowed_fields=allowed_fields, registry=registry
        )

    # -- build ---------------------------------------------------------------

    @staticmethod
    def _build(
        data: dict[str, Any], *, registry: MemoryOperatorRegistry | None
    ) -> ISpecification[T]:
        op_str = data["op"].lower()

        if op_str == SpecificationOperator.AND:
            return AndSpecification(
                *(
                    SpecificationFactory._build(c, registry=registry)
                    for c in data["conditions"]
                )
            )
        if op_str == SpecificationOperator.NOT:
            return NotSpecification(
                SpecificationFactory._build(data["conditions"][0], registry=registry)
            )
        if op_str == SpecificationOperator.SEARCH:
            return SearchSpecification(data["attrs"], str(data.get("val") or ""))

        return AttributeSpecification(
            data["attr"], op_str, data.get("val"), registry=registry
        )

    # -- validation ----------------------------------------------------------

    @staticmethod
    def _validate_node(
        data: Any,
        *,
        path: str = "<root>",
        allowed_fields: Sequence[str] | None = None,
    ) -> None:
        """Raise on first validation error (fail-fast)."""
        if not isinstance(data, dict):
            raise ValidationError(
                f"Expected a dict, got {type(data).__name__}", path=path
            )

        op_str = data.get("op")
        if not op_str or not isinstance(op_str, str):
            raise ValidationError("Missing or empty 'op' key", path=path)

        op_lower = op_str.lower()
        if op_lower in _LOGICAL_OPERATORS:
            conditions = data.get("conditions")
            if not conditions or not isinstance(conditions, list):
                raise ValidationError(
                    f"Logical operator '{op_str}' requires a 'conditions' list",
                    path=path,
                )
            if op_lower == SpecificationOperator.NOT and len(conditions) != 1:
                raise ValidationError(
                    "'not' takes exactly one condition", path=path
                )
            for idx, child in enumerate(conditions):
                SpecificationFactory._validate_node(
                    child,
                    path=f"{path}.conditions[{idx}]",
                    allowed_fields=allowed_fields,
                )
            return

        if op_lower not in _VALID_OPERATORS:
            raise OperatorNotFoundError(
                op_lower, [m.value for m in SpecificationOperator]
            )

        attrs = data.get("attrs") if op_lower == SpecificationOperator.SEARCH else [
            data.get("attr")
        ]
        if not attrs or not all(isinstance(a, str) and a for a in attrs):
            raise ValidationError(f"Leaf missing 'attr': {data}", path=path)
        if allowed_fields is not None:
            for attr in attrs:
                if attr not in allowed_fields:
                    raise ValidationError(
                        f"Field '{attr}' is not in the allowed fields list",
                        path=path,
                    )
