from __future__ import annotations

import json
from datetime import date
from pathlib import Path

from PySide6.QtCore import QDate
from PySide6.QtWidgets import QApplication, QDateEdit

from modules.certificates.formatter import PLACEHOLDER
from modules.certificates.identifiers import IdentifierGenerator
from modules.certificates.panels.certificate_window import CertificateWindow
from modules.certificates.persistence import STORAGE_KEY, MemoryStorage, PersistenceStore
from utils.app_settings import CertificateSettings

from .conftest import FixedRandom, complete_values


def _ensure_app() -> QApplication:
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


class _Renderer:
    def __init__(self):
        self.calls = []

    def render(self, document):
        self.calls.append(("render", document.title))
        return document

    def print(self, handle):
        self.calls.append(("print", None))

    def close(self, handle):
        self.calls.append(("close", None))


def _window(schema, tmp_path: Path, storage=None):
    _ensure_app()
    storage = storage if storage is not None else MemoryStorage()
    settings = CertificateSettings(storage_file=tmp_path / "state.json", catalog=None, renderer="html",
                                   output_dir=tmp_path)
    renderer = _Renderer()
    win = CertificateWindow(
        schema,
        PersistenceStore(storage, schema),
        settings,
        generator=IdentifierGenerator(rand=FixedRandom(7), today=lambda: date(2024, 3, 7)),
        renderer=renderer,
        schedule=lambda ms, cb: cb(),
    )
    return win, storage, renderer


def _type(win, values):
    for key, text in values.items():
        edit = win.inputs[key]
        if isinstance(edit, QDateEdit):
            edit.setDate(QDate.fromString(text, "yyyy-MM-dd"))
        else:
            edit.setText(text)
            edit.textEdited.emit(edit.text())


def test_generate_with_missing_field_keeps_preview(schema, tmp_path):
    win, _, _ = _window(schema, tmp_path)
    values = complete_values()
    del values["fatherName"]
    _type(win, values)

    assert win.generate() is False
    labels = win.preview_widget.labels
    assert labels["cert-fullName"].text() == PLACEHOLDER
    assert "f56565" in win.inputs["fatherName"].styleSheet()
    assert not win.btn_download.isEnabled()


def test_generate_populates_preview_and_enables_download(schema, tmp_path):
    win, storage, renderer = _window(schema, tmp_path)
    _type(win, complete_values())

    assert win.value("registrationNumber") == "JAD20240007"
    assert win.value("certificateNumber") == "BC20240105007"
    assert win.generate() is True
    labels = win.preview_widget.labels
    assert labels["cert-fullName"].text() == "Jane Ann Doe"
    assert labels["cert-timeOfBirth"].text() == "2:30 PM"
    assert labels["cert-issuingAuthority"].text() == "County Registrar"
    assert win.btn_download.isEnabled()
    assert json.loads(storage.items[STORAGE_KEY])["fullName"] == "Jane Ann Doe"

    win.btn_download.click()
    assert [c[0] for c in renderer.calls] == ["render", "print", "close"]
    assert win.btn_download.text() == "Download PDF"
    assert win.btn_download.isEnabled()


def test_reset_clears_form_and_preview(schema, tmp_path):
    win, _, _ = _window(schema, tmp_path)
    _type(win, complete_values())
    win.generate()

    win.reset()
    assert win.value("fullName") == ""
    assert win.value("dateOfBirth") == ""
    assert win.value("timeOfBirth") == ""
    assert win.value("registrationDate") == date.today().isoformat()
    assert win.preview_widget.labels["cert-fullName"].text() == PLACEHOLDER
    assert win.preview_widget.labels["cert-issuingAuthority"].text() == "Department of Vital Records"
    assert not win.btn_download.isEnabled()


def test_window_restores_saved_values(schema, tmp_path):
    storage = MemoryStorage({STORAGE_KEY: json.dumps(complete_values())})
    win, _, _ = _window(schema, tmp_path, storage=storage)
    assert win.value("motherName") == "Mary Doe"
    assert win.preview_widget.labels["cert-motherName"].text() == "Mary Doe"
    assert win.value("dateOfBirth") == "2024-01-05"
    assert win.value("timeOfBirth") == "14:30"


def test_date_and_time_inputs_are_typed(schema, tmp_path):
    win, storage, _ = _window(schema, tmp_path)
    date_edit = win.inputs["dateOfBirth"]
    assert isinstance(date_edit, QDateEdit)
    assert date_edit.date() == date_edit.minimumDate()
    assert date_edit.specialValueText() == "YYYY-MM-DD"
    assert win.inputs["timeOfBirth"].inputMask() == "99:99;_"
    assert win.value("timeOfBirth") == ""

    _type(win, {"dateOfBirth": "2024-01-05", "timeOfBirth": "09:05"})
    saved = json.loads(storage.items[STORAGE_KEY])
    assert saved["dateOfBirth"] == "2024-01-05"
    assert saved["timeOfBirth"] == "09:05"
    assert win.value("certificateNumber") == "BC20240105007"

    # stepping back to the blank date clears the value
    date_edit.setDate(date_edit.minimumDate())
    assert json.loads(storage.items[STORAGE_KEY])["dateOfBirth"] == ""
