"""String operators: contains, icontains, startswith, istartswith."""

from __future__ import annotations

from typing import Any

from ..operators import SpecificationOperator
from ..strategy import MemoryOperator


class _TextOperator(MemoryOperator):
    """Compares the string forms of both values; ``None`` never matches."""

    case_insensitive = False

    def _normalise(self, value: Any) -> str:
        text = str(value)
        return text.lower() if self.case_insensitive else text

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None or condition_value is None:
            return False
        return self.match(
            self._normalise(field_value), self._normalise(condition_value)
        )

    def match(self, text: str, fragment: str) -> bool:
        raise NotImplementedError


class ContainsOperator(_TextOperator):
    @property
    def name(self) -> SpecificationOperator:
        return SpecificationOperator.CONTAINS

    def match(self, text: str, fragment: str) -> bool:
        return fragment in text


class IContainsOperator(ContainsOperator):
    case_insensitive = True

    @property
    def name(self) -> SpecificationOperator:
        return SpecificationOperator.ICONTAINS


class StartsWithOperator(_TextOperator):
    @property
    def name(self) -> SpecificationOperator:
        return SpecificationOperator.STARTSWITH

    def match(self, text: str, fragment: str) -> bool:
        return text.startswith(fragment)


class IStartsWithOperator(StartsWithOperator):
    case_insensitive = True

    @property
    def name(self) -> SpecificationOperator:
        return SpecificationOperator.ISTARTSWITH
