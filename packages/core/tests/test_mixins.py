"""Tests for the auditable capability and AuditableMixin."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

import pytest
from pydantic import BaseModel

from queryspec_core.domain.auditable import (
    IAuditableEntity,
    is_auditable,
    soft_delete_field,
)
from queryspec_core.domain.entity import Entity
from queryspec_core.domain.mixins import AuditableEntity, AuditableMixin
from queryspec_core.primitives.exceptions import InvariantViolationError


class Category(AuditableEntity[str]):
    name: str = ""


class Tag(Entity[int]):
    label: str = ""


class LegacyRow:
    """Plain class opting in with a custom accessor name."""

    __soft_delete_field__ = "removed"

    def __init__(self, removed: bool = False) -> None:
        self.removed = removed


@dataclass
class Voucher:
    id: str
    is_deleted: bool = False


class Ticket(BaseModel):
    code: str = ""
    is_deleted: bool = False


class TestAuditableMixin:
    """Test AuditableMixin timestamp fields and soft-delete transitions."""

    def test_created_at_defaults_to_current_time(self) -> None:
        before = datetime.now(timezone.utc)
        entity = Category(id="c1", name="Test")
        after = datetime.now(timezone.utc)

        assert before <= entity.created_at <= after
        assert entity.created_at.tzinfo == timezone.utc

    def test_not_deleted_by_default(self) -> None:
        entity = Category(id="c1")

        assert entity.is_deleted is False
        assert entity.deleted_at is None

    def test_soft_delete_sets_flag_and_timestamp(self) -> None:
        entity = Category(id="c1")
        original_updated = entity.updated_at

        entity.soft_delete()

        assert entity.is_deleted is True
        assert entity.deleted_at is not None
        assert entity.updated_at >= original_updated

    def test_soft_delete_twice_raises(self) -> None:
        entity = Category(id="c1")
        entity.soft_delete()

        with pytest.raises(InvariantViolationError, match="Already deleted"):
            entity.soft_delete()

    def test_restore_clears_flag(self) -> None:
        entity = Category(id="c1")
        entity.soft_delete()

        entity.restore()

        assert entity.is_deleted is False
        assert entity.deleted_at is None

    def test_restore_when_not_deleted_raises(self) -> None:
        with pytest.raises(InvariantViolationError, match="Not deleted"):
            Category(id="c1").restore()

    def test_mixin_on_plain_model(self) -> None:
        class Note(AuditableMixin, BaseModel):
            text: str = ""

        assert is_auditable(Note)
        assert Note(text="x").is_deleted is False


class TestAuditableCapability:
    def test_auditable_entity_declares_field(self) -> None:
        assert soft_delete_field(Category) == "is_deleted"
        assert is_auditable(Category) is True

    def test_plain_entity_is_not_auditable(self) -> None:
        assert soft_delete_field(Tag) is None
        assert is_auditable(Tag) is False

    def test_dataclass_with_is_deleted_field(self) -> None:
        assert soft_delete_field(Voucher) == "is_deleted"
        assert is_auditable(Voucher) is True

    def test_pydantic_model_with_is_deleted_field(self) -> None:
        assert soft_delete_field(Ticket) == "is_deleted"

    def test_plain_class_without_metadata(self) -> None:
        assert is_auditable(object) is False

    def test_custom_accessor_name(self) -> None:
        assert soft_delete_field(LegacyRow) == "removed"

    def test_protocol_runtime_check(self) -> None:
        assert isinstance(Category(id="c1"), IAuditableEntity)
        assert not isinstance(Tag(id=1), IAuditableEntity)

    def test_field_names_lists_model_fields(self) -> None:
        names = Category.field_names()

        assert {"id", "name", "is_deleted", "created_at"} <= set(names)
