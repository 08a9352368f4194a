"""Common utility functions and helpers."""

from __future__ import annotations

import dataclasses
from typing import Any


def resolve_attribute(obj: Any, attr_path: str) -> Any:
    """
    Resolve a dot-separated attribute path on *obj*.

    Supports nested attribute access (``parent.name``), dict keys, and
    implicit list traversal (``images.url`` where ``images`` is a list
    returns ``[image.url for image in images]``). Missing links resolve
    to ``None``.
    """
    parts = attr_path.split(".")
    for index, part in enumerate(parts):
        if obj is None:
            return None
        if isinstance(obj, list | tuple):
            rest = ".".join(parts[index:])
            return [resolve_attribute(item, rest) for item in obj]
        obj = obj.get(part) if isinstance(obj, dict) else getattr(obj, part, None)
    return obj


def declared_fields(cls: type[Any]) -> list[str] | None:
    """
    Field names declared by *cls*, or ``None`` when it exposes no metadata.

    Understands ``Entity.field_names()``, pydantic models, SQLAlchemy mapped
    classes and dataclasses, checked in that order.
    """
    field_names = getattr(cls, "field_names", None)
    if callable(field_names):
        return list(field_names())
    model_fields = getattr(cls, "model_fields", None)
    if isinstance(model_fields, dict):
        return list(model_fields.keys())
    mapper = getattr(cls, "__mapper__", None)
    if mapper is not None:
        return [attr.key for attr in mapper.attrs]
    if dataclasses.is_dataclass(cls):
        return [f.name for f in dataclasses.fields(cls)]
    return None
