"""FieldWhitelist — per-resource filterable/sortable fields."""

from __future__ import annotations

from queryspec_specifications.specification import OrderBy

from .exceptions import FieldNotAllowedError


class FieldWhitelist:
    """Per-resource allowed fields and operators."""

    def __init__(
        self,
        *,
        filterable_fields: dict[str, set[str]] | None = None,
        sortable_fields: set[str] | None = None,
    ) -> None:
        self.filterable_fields = filterable_fields or {}
        self.sortable_fields = sortable_fields or set()

    def allow_filter(self, field: str, op: str) -> None:
        """Raise FieldNotAllowedError if field or operator is not allowed."""
        if field not in self.filterable_fields:
            raise FieldNotAllowedError({field: ["Field is not filterable"]})
        allowed_ops = self.filterable_fields[field]
        op_normalized = _OP_TO_ALIAS.get(op, op)
        if op_normalized not in allowed_ops and op not in allowed_ops:
            raise FieldNotAllowedError(
                {field: [f"Operator {op!r} is not allowed"]}
            )

    def allow_sort(self, field: str) -> None:
        if field not in self.sortable_fields:
            raise FieldNotAllowedError({field: ["Field is not sortable"]})

    def to_order_by(self, raw: str) -> OrderBy:
        """Parse ``"name"`` / ``"-name"`` and check the key is sortable."""
        order = OrderBy.parse(raw)
        self.allow_sort(order.key)
        return order


_OP_TO_ALIAS = {"=": "eq", "!=": "ne", ">": "gt", ">=": "gte", "<": "lt", "<=": "lte"}
