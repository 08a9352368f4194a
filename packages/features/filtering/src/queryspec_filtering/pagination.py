"""PageParametersParser — page parameters from raw query params."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import ValidationError as PydanticValidationError

from .exceptions import FilterParseError
from .parameters import PageParameters

P = TypeVar("P", bound=PageParameters)


class PageParametersParser:
    """
    Parse ``pageNumber``/``pageSize``/``orderBy``/... into a parameters model.

    Values are coerced, not clamped: out-of-range paging values are left for
    the executor to normalise. Blank values count as absent.

    Usage::

        parser = PageParametersParser(default_page_size=25)
        params = parser.parse(request.query_params, model=CategoryPageParameters)
    """

    def __init__(
        self,
        *,
        default_page_size: int | None = None,
        max_page_size: int | None = None,
    ) -> None:
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    def parse(
        self,
        query_params: dict[str, Any],
        model: type[P] = PageParameters,  # type: ignore[assignment]
    ) -> P:
        """
        Build *model* from *query_params*.

        Raises:
            FilterParseError: If a value cannot be coerced to its field type.
        """
        data = {
            key: value
            for key, value in query_params.items()
            if value is not None and not (isinstance(value, str) and not value.strip())
        }
        if self.default_page_size is not None and not _has_key(data, "page_size"):
            data["pageSize"] = self.default_page_size

        try:
            params = model.model_validate(data)
        except PydanticValidationError as exc:
            raise FilterParseError(_errors_by_field(exc)) from exc

        if self.max_page_size is not None and params.page_size > self.max_page_size:
            params = params.model_copy(update={"page_size": self.max_page_size})
        return params


def _has_key(data: dict[str, Any], field: str) -> bool:
    camel = field.split("_")[0] + "".join(p.title() for p in field.split("_")[1:])
    return field in data or camel in data


def _errors_by_field(exc: PydanticValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "__root__"
        errors.setdefault(field, []).append(error["msg"])
    return errors
