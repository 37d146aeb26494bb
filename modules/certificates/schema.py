"""Field catalog for certificate forms.

A :class:`FieldSchema` is the ordered, immutable list of inputs a form offers.
It is read once at startup from a YAML catalog and shared by every other
component (formatting, validation, persistence and preview slots).  The
catalog is validated with :mod:`jsonschema` before any descriptor is built so
that a malformed file fails loudly instead of producing a half-wired window.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Tuple

import yaml
from jsonschema import Draft7Validator

__all__ = [
    "FieldKind",
    "FieldDescriptor",
    "FieldSchema",
    "CatalogError",
    "DISPLAY_PREFIX",
    "display_key",
    "load_schema",
    "schema_from_catalog",
    "DEFAULT_CATALOG",
]


ROOT = Path(__file__).resolve().parents[2]
DEFAULT_CATALOG = ROOT / "data" / "forms" / "birth_certificate.yaml"

DISPLAY_PREFIX = "cert-"


class FieldKind(str, Enum):
    TEXT = "text"
    DATE = "date"
    TIME = "time"


class CatalogError(ValueError):
    """Raised when a field catalog does not describe a usable form."""


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    key: str
    required: bool = False
    kind: FieldKind = FieldKind.TEXT
    label: str = ""

    @property
    def caption(self) -> str:
        return self.label or self.key

    @property
    def display_key(self) -> str:
        return display_key(self.key)


def display_key(key: str) -> str:
    """Return the preview slot name for field ``key``."""

    return f"{DISPLAY_PREFIX}{key}"


class FieldSchema:
    """Ordered, read-only collection of :class:`FieldDescriptor` objects."""

    def __init__(self, descriptors: Iterable[FieldDescriptor], title: str = "") -> None:
        self._descriptors: Tuple[FieldDescriptor, ...] = tuple(descriptors)
        self._by_key: Dict[str, FieldDescriptor] = {}
        for desc in self._descriptors:
            if desc.key in self._by_key:
                raise CatalogError(f"Duplicate field key: {desc.key}")
            self._by_key[desc.key] = desc
        self.title = title

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def get(self, key: str) -> FieldDescriptor | None:
        return self._by_key.get(key)

    def keys(self) -> List[str]:
        return [d.key for d in self._descriptors]

    def required(self) -> List[FieldDescriptor]:
        return [d for d in self._descriptors if d.required]

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"FieldSchema({self.keys()!r})"


# ---------------------------------------------------------------------------
# Catalog loading
# ---------------------------------------------------------------------------

CATALOG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["fields"],
    "properties": {
        "form_id": {"type": "string"},
        "title": {"type": "string"},
        "fields": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "required": ["key"],
                "properties": {
                    "key": {"type": "string", "pattern": r"^[A-Za-z_][A-Za-z0-9_]*$"},
                    "label": {"type": "string"},
                    "required": {"type": "boolean"},
                    "kind": {"enum": [k.value for k in FieldKind]},
                },
                "additionalProperties": False,
            },
        },
    },
}


def schema_from_catalog(catalog: Mapping[str, Any]) -> FieldSchema:
    """Build a :class:`FieldSchema` from an already parsed catalog mapping."""

    validator = Draft7Validator(CATALOG_SCHEMA)
    errors = sorted(validator.iter_errors(catalog), key=lambda e: list(e.path))
    if errors:
        messages = "; ".join(
            f"{'.'.join(str(x) for x in err.path) or '<root>'}: {err.message}" for err in errors
        )
        raise CatalogError(messages)

    descriptors = [
        FieldDescriptor(
            key=entry["key"],
            required=bool(entry.get("required", False)),
            kind=FieldKind(entry.get("kind", FieldKind.TEXT.value)),
            label=entry.get("label", ""),
        )
        for entry in catalog["fields"]
    ]
    return FieldSchema(descriptors, title=catalog.get("title", ""))


def load_schema(path: Path | str | None = None) -> FieldSchema:
    """Read and validate the YAML catalog at ``path``.

    Parameters
    ----------
    path:
        Catalog location.  Defaults to the bundled birth certificate catalog.
    """

    catalog_path = Path(path) if path is not None else DEFAULT_CATALOG
    try:
        with catalog_path.open("r", encoding="utf-8") as f:
            catalog = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise CatalogError(f"Cannot read field catalog {catalog_path}: {exc}") from exc
    if not isinstance(catalog, dict):
        raise CatalogError(f"Field catalog {catalog_path} is not a mapping")
    return schema_from_catalog(catalog)
