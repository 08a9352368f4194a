"""API query parsing — page parameters, sort whitelist, category listing."""

from __future__ import annotations

from .catalog import (
    CATEGORY_WHITELIST,
    category_page,
    category_page_specification,
)
from .exceptions import FieldNotAllowedError, FilterParseError
from .pagination import PageParametersParser
from .parameters import CategoryPageParameters, PageParameters
from .whitelist import FieldWhitelist

__all__ = [
    "CATEGORY_WHITELIST",
    "CategoryPageParameters",
    "FieldNotAllowedError",
    "FieldWhitelist",
    "FilterParseError",
    "PageParameters",
    "PageParametersParser",
    "category_page",
    "category_page_specification",
]
