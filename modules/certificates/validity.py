"""Required-field checks gating certificate generation."""

from __future__ import annotations

from typing import List, Mapping

from .schema import FieldSchema

__all__ = ["is_valid", "missing_required"]


def missing_required(schema: FieldSchema, values: Mapping[str, str]) -> List[str]:
    """Return required keys whose value is empty or whitespace, in catalog order."""

    return [d.key for d in schema.required() if not str(values.get(d.key) or "").strip()]


def is_valid(schema: FieldSchema, values: Mapping[str, str]) -> bool:
    return all(str(values.get(d.key) or "").strip() for d in schema.required())
