"""Tests for FieldWhitelist."""

from __future__ import annotations

import pytest

from queryspec_filtering import FieldNotAllowedError, FieldWhitelist
from queryspec_specifications import OrderBy


@pytest.fixture
def whitelist() -> FieldWhitelist:
    return FieldWhitelist(
        filterable_fields={"status": {"eq", "in"}, "amount": {"gte"}},
        sortable_fields={"created_at", "name"},
    )


def test_allow_filter(whitelist: FieldWhitelist) -> None:
    whitelist.allow_filter("status", "eq")
    whitelist.allow_filter("status", "=")
    whitelist.allow_filter("amount", ">=")


def test_filter_field_not_allowed(whitelist: FieldWhitelist) -> None:
    with pytest.raises(FieldNotAllowedError) as exc_info:
        whitelist.allow_filter("secret", "eq")
    assert exc_info.value.errors == {"secret": ["Field is not filterable"]}


def test_filter_operator_not_allowed(whitelist: FieldWhitelist) -> None:
    with pytest.raises(FieldNotAllowedError, match="not allowed"):
        whitelist.allow_filter("amount", "<")


def test_to_order_by(whitelist: FieldWhitelist) -> None:
    assert whitelist.to_order_by("-created_at") == OrderBy(
        "created_at", descending=True
    )
    assert whitelist.to_order_by("name") == OrderBy("name")


def test_sort_not_allowed(whitelist: FieldWhitelist) -> None:
    with pytest.raises(FieldNotAllowedError) as exc_info:
        whitelist.to_order_by("-password_hash")
    assert exc_info.value.messages == ["password_hash: Field is not sortable"]
