"""Print and export of the certificate preview.

The preview is turned into a :class:`CertificateDocument` and handed to a
*renderer*, an object with three methods:

``render(document) -> handle``
    prepare the output (load markup, lay out a page, ...)
``print(handle)``
    produce it (print dialog, PDF file, HTML file)
``close(handle)``
    release whatever ``render`` allocated

:class:`ExportController` drives a renderer the way the UI needs it: the
download control is disabled while the job runs, printing happens after a
short settle delay, and any failure is reported and leaves the control usable
again.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional, Protocol, Tuple

from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from .formatter import PLACEHOLDER
from .preview import AUTHORITY_SLOT, DEFAULT_AUTHORITY, ISSUE_DATE_SLOT
from .schema import FieldSchema

__all__ = [
    "CertificateDocument",
    "build_document",
    "Renderer",
    "QtPrintRenderer",
    "PdfFileRenderer",
    "HtmlFileRenderer",
    "make_renderer",
    "ExportControlState",
    "ExportController",
    "qt_schedule",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------- document

PRINT_STYLES = """
body { margin: 0; padding: 20px; font-family: 'Times New Roman', serif; background: white; }
.certificate { border: 3px solid #2d3748; border-radius: 10px; padding: 30px;
               max-width: 800px; margin: 0 auto; }
.certificate-header { text-align: center; margin-bottom: 30px; }
.seal { width: 60px; height: 60px; border: 3px solid #2d3748; border-radius: 50%;
        margin: 0 auto 15px; background: #ffd700; text-align: center; font-size: 24px; }
.certificate-header h1 { font-size: 2rem; color: #2d3748; letter-spacing: 3px; font-weight: bold; }
.authority-info p { font-size: 12px; color: #4a5568; margin: 2px 0; letter-spacing: 1px; }
.certificate-body { margin-bottom: 40px; }
.cert-field { margin-bottom: 15px; }
.cert-field .label { font-weight: bold; color: #2d3748; font-size: 14px; }
.cert-field .value { border-bottom: 1px solid #2d3748; font-size: 14px; color: #1a202c; }
.signature-section { margin-bottom: 20px; }
.signature p, .authority-footer p { font-size: 12px; color: #4a5568; margin: 2px 0; }
.seal-placeholder { border: 2px solid #2d3748; background: #ffd700; font-size: 10px;
                    font-weight: bold; text-align: center; }
.authority-footer { text-align: center; border-top: 1px solid #cbd5e0; padding-top: 15px; }
.disclaimer { font-style: italic; }
@media print { body { margin: 0; padding: 0; } .certificate { border-radius: 0; } }
"""


@dataclass
class CertificateDocument:
    title: str
    rows: List[Tuple[str, str]] = field(default_factory=list)
    authority: str = DEFAULT_AUTHORITY
    issue_date: str = ""
    reference: str = ""
    header_lines: Tuple[str, ...] = ("OFFICIAL RECORD", "DEPARTMENT OF VITAL RECORDS")
    disclaimer: str = "This document is a computer-generated rendition of the registered record."

    def body_html(self) -> str:
        esc = html.escape
        rows = "\n".join(
            f'<tr class="cert-field"><td class="label">{esc(label)}:</td>'
            f'<td class="value">{esc(value)}</td></tr>'
            for label, value in self.rows
        )
        header = "".join(f"<p>{esc(line)}</p>" for line in self.header_lines)
        return (
            '<div class="certificate">'
            '<div class="certificate-header">'
            '<div class="seal">&#9733;</div>'
            f"<h1>{esc(self.title.upper())}</h1>"
            f'<div class="authority-info">{header}</div>'
            "</div>"
            f'<table class="certificate-body" width="100%">{rows}</table>'
            '<div class="certificate-footer">'
            '<table class="signature-section" width="100%"><tr>'
            '<td class="signature"><p>______________________</p><p>Registrar</p></td>'
            '<td class="official-seal"><div class="seal-placeholder">OFFICIAL<br/>SEAL</div></td>'
            '<td class="signature"><p>______________________</p><p>Date Issued</p>'
            f"<p>{esc(self.issue_date)}</p></td>"
            "</tr></table>"
            '<div class="authority-footer">'
            f"<p>{esc(self.authority)}</p>"
            f'<p class="disclaimer">{esc(self.disclaimer)}</p>'
            "</div></div></div>"
        )

    def to_html(self) -> str:
        """Return a standalone page with the print styles inlined."""

        return (
            "<!DOCTYPE html><html><head>"
            f"<title>{html.escape(self.title)}</title>"
            f"<style>{PRINT_STYLES}</style>"
            f"</head><body>{self.body_html()}</body></html>"
        )


def build_document(
    schema: FieldSchema,
    preview: Mapping[str, str],
    reference: str = "",
) -> CertificateDocument:
    """Assemble a :class:`CertificateDocument` from the rendered preview."""

    rows = [
        (desc.caption, preview.get(desc.display_key, PLACEHOLDER))
        for desc in schema
        if desc.display_key != AUTHORITY_SLOT
    ]
    return CertificateDocument(
        title=schema.title or "Certificate of Birth",
        rows=rows,
        authority=preview.get(AUTHORITY_SLOT) or DEFAULT_AUTHORITY,
        issue_date=preview.get(ISSUE_DATE_SLOT, ""),
        reference=reference,
    )


# ---------------------------------------------------------------- renderers

class Renderer(Protocol):
    def render(self, document: CertificateDocument) -> Any: ...

    def print(self, handle: Any) -> None: ...

    def close(self, handle: Any) -> None: ...


def _output_path(output_dir: Path, document: CertificateDocument, suffix: str) -> Path:
    stem = document.reference.strip() or datetime.now().strftime("%Y%m%d_%H%M%S")
    safe = "".join(c for c in stem if c.isalnum() or c in "-_")
    return Path(output_dir) / f"birth_certificate_{safe}{suffix}"


class QtPrintRenderer:
    """Native print dialog; the user may pick a printer or "Save as PDF"."""

    def __init__(self, parent=None) -> None:
        self.parent = parent

    def render(self, document: CertificateDocument):
        from PySide6.QtGui import QTextDocument

        doc = QTextDocument()
        doc.setHtml(document.to_html())
        return doc

    def print(self, handle) -> None:
        from PySide6 import QtPrintSupport
        from PySide6.QtWidgets import QDialog

        printer = QtPrintSupport.QPrinter()
        dialog = QtPrintSupport.QPrintDialog(printer, self.parent)
        if dialog.exec() == QDialog.Accepted:
            handle.print_(printer)

    def close(self, handle) -> None:
        handle.clear()


@dataclass
class _FileJob:
    document: CertificateDocument
    path: Path


class PdfFileRenderer:
    """Writes the certificate to a PDF file with reportlab."""

    def __init__(self, output_dir: Path | str) -> None:
        self.output_dir = Path(output_dir)
        self.last_output: Optional[Path] = None

    def render(self, document: CertificateDocument) -> _FileJob:
        return _FileJob(document, _output_path(self.output_dir, document, ".pdf"))

    def print(self, handle: _FileJob) -> None:
        handle.path.parent.mkdir(parents=True, exist_ok=True)
        doc = handle.document
        width, height = letter
        c = canvas.Canvas(str(handle.path), pagesize=letter)
        c.setTitle(doc.title)
        c.setLineWidth(3)
        c.rect(36, 36, width - 72, height - 72)

        y = height - 100
        c.setFont("Times-Bold", 22)
        c.drawCentredString(width / 2, y, doc.title.upper())
        y -= 22
        c.setFont("Times-Roman", 10)
        for line in doc.header_lines:
            c.drawCentredString(width / 2, y, line)
            y -= 14
        y -= 20

        for label, value in doc.rows:
            c.setFont("Times-Bold", 12)
            c.drawString(72, y, f"{label}:")
            c.setFont("Times-Roman", 12)
            c.drawString(220, y, value)
            c.setLineWidth(0.5)
            c.line(218, y - 3, width - 72, y - 3)
            y -= 26
            if y < 180:
                c.showPage()
                y = height - 72

        c.setFont("Times-Roman", 10)
        c.line(72, 140, 222, 140)
        c.drawString(72, 128, "Registrar")
        c.line(width - 222, 140, width - 72, 140)
        c.drawString(width - 222, 128, f"Date Issued: {doc.issue_date}")
        c.drawCentredString(width / 2, 90, doc.authority)
        c.setFont("Times-Italic", 8)
        c.drawCentredString(width / 2, 76, doc.disclaimer)
        c.save()
        self.last_output = handle.path
        logger.info("[export] wrote %s", handle.path)

    def close(self, handle: _FileJob) -> None:
        pass


class HtmlFileRenderer:
    """Headless export: writes the standalone HTML page."""

    def __init__(self, output_dir: Path | str) -> None:
        self.output_dir = Path(output_dir)
        self.last_output: Optional[Path] = None

    def render(self, document: CertificateDocument) -> _FileJob:
        return _FileJob(document, _output_path(self.output_dir, document, ".html"))

    def print(self, handle: _FileJob) -> None:
        handle.path.parent.mkdir(parents=True, exist_ok=True)
        handle.path.write_text(handle.document.to_html(), encoding="utf-8")
        self.last_output = handle.path
        logger.info("[export] wrote %s", handle.path)

    def close(self, handle: _FileJob) -> None:
        pass


def make_renderer(kind: str, output_dir: Path | str, parent=None) -> Renderer:
    if kind == "pdf":
        return PdfFileRenderer(output_dir)
    if kind == "html":
        return HtmlFileRenderer(output_dir)
    if kind == "print":
        return QtPrintRenderer(parent)
    raise ValueError(f"Unknown renderer: {kind}")


# ---------------------------------------------------------------- controller

Schedule = Callable[[int, Callable[[], None]], None]


def qt_schedule(delay_ms: int, callback: Callable[[], None]) -> None:
    from PySide6.QtCore import QTimer

    QTimer.singleShot(delay_ms, callback)


@dataclass
class ExportControlState:
    label: str = "Download PDF"
    enabled: bool = False


class ExportController:
    """Runs one export at a time against ``renderer``.

    Parameters
    ----------
    renderer:
        Object implementing :class:`Renderer`.
    notifier:
        Anything with ``notify(message, severity)``.
    schedule:
        ``schedule(delay_ms, callback)``; :func:`qt_schedule` in the app.
    delay_ms:
        Settle delay between ``render`` and ``print``.
    on_state:
        Called with the new :class:`ExportControlState` whenever it changes.
    """

    IDLE_LABEL = "Download PDF"
    BUSY_LABEL = "Generating PDF..."

    def __init__(
        self,
        renderer: Renderer,
        notifier,
        schedule: Schedule = qt_schedule,
        delay_ms: int = 500,
        on_state: Optional[Callable[[ExportControlState], None]] = None,
    ) -> None:
        self.renderer = renderer
        self.notifier = notifier
        self.schedule = schedule
        self.delay_ms = delay_ms
        self.on_state = on_state
        self.state = ExportControlState(self.IDLE_LABEL, False)

    def _set_state(self, label: str, enabled: bool) -> None:
        self.state = ExportControlState(label, enabled)
        if self.on_state is not None:
            self.on_state(self.state)

    def set_enabled(self, enabled: bool) -> None:
        self._set_state(self.state.label, enabled)

    def export(self, document_factory: Callable[[], CertificateDocument]) -> None:
        previous_label = self.state.label
        try:
            self._set_state(self.BUSY_LABEL, False)
            handle = self.renderer.render(document_factory())
            self.schedule(self.delay_ms, lambda: self._finish(handle, previous_label))
        except Exception:
            logger.exception("[export] failed to prepare certificate")
            self._fail()

    def _finish(self, handle: Any, previous_label: str) -> None:
        failed = False
        try:
            self.renderer.print(handle)
        except Exception:
            logger.exception("[export] failed to print certificate")
            failed = True
        finally:
            try:
                self.renderer.close(handle)
            except Exception:
                logger.exception("[export] failed to release print job")
                failed = True
        if failed:
            self._fail()
            return
        self._set_state(previous_label, True)
        self.notifier.notify("Certificate ready for download/print!", "success")

    def _fail(self) -> None:
        self.notifier.notify("Error generating PDF. Please try again.", "error")
        self._set_state(self.IDLE_LABEL, True)
