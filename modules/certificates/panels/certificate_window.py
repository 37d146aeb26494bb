from __future__ import annotations

import logging
from typing import Dict, Optional

from PySide6.QtCore import QDate, Qt
from PySide6.QtWidgets import (
    QDateEdit,
    QFormLayout,
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from modules.certificates.dispatcher import CertificateController
from modules.certificates.export import ExportControlState, ExportController, make_renderer, qt_schedule
from modules.certificates.identifiers import IdentifierGenerator
from modules.certificates.persistence import PersistenceStore
from modules.certificates.preview import AUTHORITY_SLOT, ISSUE_DATE_SLOT, PreviewSync
from modules.certificates.schema import FieldKind, FieldSchema, load_schema
from modules.certificates.session import SessionState
from notifications.panels.toast import ToastHost
from notifications.services import Notifier
from utils.app_settings import CertificateSettings, load_settings
from utils.settingsmanager import SettingsManager

logger = logging.getLogger(__name__)

INPUT_HINTS = {
    FieldKind.DATE: "YYYY-MM-DD",
    FieldKind.TIME: "HH:MM",
}
# a date edit sitting on its minimum date reads as empty
BLANK_DATE = QDate(1900, 1, 1)
LAST_DATE = QDate(7999, 12, 31)
TIME_MASK = "99:99;_"
ERROR_STYLE = "border: 1px solid #f56565;"


class LabelRenderTarget:
    """Render target writing into the preview's QLabels."""

    def __init__(self, labels: Dict[str, QLabel]) -> None:
        self.labels = labels

    def has_slot(self, name: str) -> bool:
        return name in self.labels

    def set_text(self, name: str, text: str) -> None:
        label = self.labels.get(name)
        if label is not None:
            label.setText(text)

    def slots(self):
        return list(self.labels)


class CertificatePreview(QFrame):
    """Certificate look-alike holding one QLabel per display slot."""

    def __init__(self, schema: FieldSchema, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("certificatePreview")
        self.setFrameShape(QFrame.Box)
        self.setStyleSheet(
            "#certificatePreview { background: white; border: 3px solid #2d3748; border-radius: 10px; }"
            "QLabel { font-family: 'Times New Roman', serif; color: #1a202c; }"
        )
        self.labels: Dict[str, QLabel] = {}

        root = QVBoxLayout(self)
        root.setContentsMargins(30, 30, 30, 30)

        title = QLabel((schema.title or "Certificate of Birth").upper())
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet("font-size: 22px; font-weight: bold; letter-spacing: 3px;")
        root.addWidget(title)

        grid = QGridLayout()
        row = 0
        for desc in schema:
            if desc.display_key == AUTHORITY_SLOT:
                continue
            caption = QLabel(f"{desc.caption}:")
            caption.setStyleSheet("font-weight: bold;")
            value = self._slot(desc.display_key)
            value.setStyleSheet("border-bottom: 1px solid #2d3748;")
            grid.addWidget(caption, row, 0)
            grid.addWidget(value, row, 1)
            row += 1
        root.addLayout(grid)

        footer = QHBoxLayout()
        footer.addWidget(QLabel("Date Issued:"))
        footer.addWidget(self._slot(ISSUE_DATE_SLOT))
        footer.addStretch()
        root.addLayout(footer)

        authority = self._slot(AUTHORITY_SLOT)
        authority.setAlignment(Qt.AlignCenter)
        authority.setStyleSheet("font-size: 12px; color: #4a5568; border-top: 1px solid #cbd5e0;")
        root.addWidget(authority)

    def _slot(self, name: str) -> QLabel:
        label = QLabel("")
        label.setObjectName(name)
        self.labels[name] = label
        return label


class CertificateWindow(QMainWindow):
    """Form on the left, live certificate preview on the right."""

    def __init__(
        self,
        schema: FieldSchema,
        store: PersistenceStore,
        settings: CertificateSettings,
        notifier: Optional[Notifier] = None,
        generator: Optional[IdentifierGenerator] = None,
        renderer=None,
        schedule=qt_schedule,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Birth Certificate Generator")
        self.schema = schema
        self.notifier = notifier or Notifier(settings.toast_duration_ms)

        central = QWidget()
        self.setCentralWidget(central)
        root = QHBoxLayout(central)

        # Form
        form_box = QVBoxLayout()
        form = QFormLayout()
        self.inputs: Dict[str, QWidget] = {}
        self._loading = False
        for desc in schema:
            edit = self._make_input(desc.key, desc.kind)
            caption = f"{desc.caption} *" if desc.required else desc.caption
            form.addRow(caption, edit)
            self.inputs[desc.key] = edit
        form_box.addLayout(form)

        buttons = QHBoxLayout()
        self.btn_generate = QPushButton("Generate Certificate")
        self.btn_download = QPushButton(ExportController.IDLE_LABEL)
        self.btn_download.setEnabled(False)
        self.btn_reset = QPushButton("Reset")
        for b in (self.btn_generate, self.btn_download, self.btn_reset):
            buttons.addWidget(b)
        form_box.addLayout(buttons)
        form_box.addStretch()
        root.addLayout(form_box, 1)

        # Preview
        self.preview_widget = CertificatePreview(schema)
        root.addWidget(self.preview_widget, 2)

        # Wiring
        session = SessionState.start(schema, store)
        preview = PreviewSync(schema, LabelRenderTarget(self.preview_widget.labels))
        exporter = ExportController(
            renderer or make_renderer(settings.renderer, settings.output_dir, parent=self),
            self.notifier,
            schedule=schedule,
            delay_ms=settings.print_delay_ms,
            on_state=self._apply_export_state,
        )
        self.controller = CertificateController(
            session,
            preview,
            store,
            generator=generator,
            notifier=self.notifier,
            exporter=exporter,
        )
        self.toasts = ToastHost(self.notifier, self)

        self.btn_generate.clicked.connect(self.generate)
        self.btn_download.clicked.connect(self.controller.export)
        self.btn_reset.clicked.connect(self.reset)

        self._load_inputs()
        self.controller.restore()

    # ---- helpers -----------------------------------------------------------
    def _make_input(self, key: str, kind: FieldKind) -> QWidget:
        if kind is FieldKind.DATE:
            edit = QDateEdit()
            edit.setCalendarPopup(True)
            edit.setDisplayFormat("yyyy-MM-dd")
            edit.setSpecialValueText(INPUT_HINTS[kind])
            edit.setDateRange(BLANK_DATE, LAST_DATE)
            edit.setDate(edit.minimumDate())
            edit.dateChanged.connect(lambda _d, key=key: self._on_edited(key, self.value(key)))
        else:
            edit = QLineEdit()
            if kind is FieldKind.TIME:
                edit.setInputMask(TIME_MASK)
            edit.setPlaceholderText(INPUT_HINTS.get(kind, ""))
            edit.textEdited.connect(lambda _t, key=key: self._on_edited(key, self.value(key)))
        edit.setObjectName(key)
        return edit

    def value(self, key: str) -> str:
        """Raw form value for ``key``: ISO date, ``HH:MM`` or plain text; ``""`` when empty."""
        edit = self.inputs[key]
        if isinstance(edit, QDateEdit):
            if edit.date() == edit.minimumDate():
                return ""
            return edit.date().toString("yyyy-MM-dd")
        text = edit.text()
        if edit.inputMask() and not text.replace(":", "").strip():
            return ""
        return text

    def _write(self, key: str, text: str) -> None:
        edit = self.inputs[key]
        if isinstance(edit, QDateEdit):
            parsed = QDate.fromString(text, "yyyy-MM-dd")
            edit.setDate(parsed if parsed.isValid() else edit.minimumDate())
        else:
            edit.setText(text)

    def _load_inputs(self) -> None:
        self._loading = True
        try:
            for key in self.inputs:
                text = self.controller.session.get(key)
                if self.value(key) != text:
                    self._write(key, text)
        finally:
            self._loading = False

    def _on_edited(self, key: str, text: str) -> None:
        if self._loading:
            return
        self.inputs[key].setStyleSheet("")
        self.controller.field_changed(key, text)
        # generated identifiers land in the session; mirror them into the form
        self._load_inputs()

    def _apply_export_state(self, state: ExportControlState) -> None:
        self.btn_download.setText(state.label)
        self.btn_download.setEnabled(state.enabled)

    # ---- actions -----------------------------------------------------------
    def generate(self) -> bool:
        missing = set(self.controller.missing_fields())
        for key, edit in self.inputs.items():
            edit.setStyleSheet(ERROR_STYLE if key in missing else "")
        return self.controller.generate()

    def reset(self) -> None:
        self.controller.reset()
        for edit in self.inputs.values():
            edit.setStyleSheet("")
        self._load_inputs()


def get_certificate_window(settings: CertificateSettings | None = None) -> CertificateWindow:
    settings = settings or load_settings()
    schema = load_schema(settings.catalog)
    store = PersistenceStore(SettingsManager(str(settings.storage_file)), schema)
    return CertificateWindow(schema, store, settings)
