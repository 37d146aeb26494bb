from pathlib import Path

import pytest

from modules.certificates.schema import (
    CatalogError,
    FieldDescriptor,
    FieldKind,
    FieldSchema,
    display_key,
    load_schema,
    schema_from_catalog,
)


def test_bundled_catalog(schema):
    assert schema.keys()[0] == "fullName"
    assert "issuingAuthority" in schema
    assert schema.get("dateOfBirth").kind is FieldKind.DATE
    assert schema.get("timeOfBirth").kind is FieldKind.TIME
    assert not schema.get("timeOfBirth").required
    assert {d.key for d in schema.required()} >= {"fullName", "dateOfBirth", "registrationDate"}
    assert schema.title == "Certificate of Birth"


def test_display_key_convention():
    assert display_key("fullName") == "cert-fullName"
    assert FieldDescriptor("motherName").display_key == "cert-motherName"
    assert FieldDescriptor("motherName").caption == "motherName"


def test_catalog_defaults():
    schema = schema_from_catalog({"fields": [{"key": "notes"}]})
    desc = schema.get("notes")
    assert desc.kind is FieldKind.TEXT
    assert desc.required is False


def test_catalog_rejects_unknown_kind():
    with pytest.raises(CatalogError, match="fields.0.kind"):
        schema_from_catalog({"fields": [{"key": "born", "kind": "datetime"}]})


def test_catalog_requires_fields():
    with pytest.raises(CatalogError):
        schema_from_catalog({"title": "Empty"})
    with pytest.raises(CatalogError):
        schema_from_catalog({"fields": [{"label": "No key"}]})


def test_duplicate_keys_rejected():
    with pytest.raises(CatalogError, match="Duplicate"):
        FieldSchema([FieldDescriptor("a"), FieldDescriptor("a")])


def test_load_schema_from_file(tmp_path: Path):
    path = tmp_path / "catalog.yaml"
    path.write_text(
        "title: Test\nfields:\n  - key: name\n    required: true\n  - key: born\n    kind: date\n",
        encoding="utf-8",
    )
    schema = load_schema(path)
    assert schema.keys() == ["name", "born"]
    assert [d.key for d in schema.required()] == ["name"]


def test_load_schema_errors(tmp_path: Path):
    with pytest.raises(CatalogError):
        load_schema(tmp_path / "missing.yaml")
    bad = tmp_path / "bad.yaml"
    bad.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(CatalogError):
        load_schema(bad)
