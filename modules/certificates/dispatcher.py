"""Field-change dispatch for the certificate form.

:class:`CertificateController` is the single entry point the UI calls.  Every
field edit runs the same fixed pipeline::

    store value -> validity check -> preview refresh (only if valid) -> save

Edits to a trigger field then derive the dependent identifier and dispatch it
as an edit of its own, so generated numbers reach the preview and the saved
snapshot exactly like typed values.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Dict, Optional

from .export import CertificateDocument, ExportController, build_document
from .identifiers import IdentifierGenerator
from .persistence import PersistenceStore
from .preview import PreviewSync
from .session import SessionState
from .validity import is_valid, missing_required

__all__ = ["CertificateController"]

logger = logging.getLogger(__name__)


def _emit(name: str, *args) -> None:
    try:
        from utils.app_signals import app_signals

        getattr(app_signals, name).emit(*args)
    except Exception as e:
        logger.warning("[dispatch] failed to emit %s: %s", name, e)


class CertificateController:
    """Coordinates validation, preview, persistence and identifier derivation."""

    def __init__(
        self,
        session: SessionState,
        preview: PreviewSync,
        store: PersistenceStore,
        generator: Optional[IdentifierGenerator] = None,
        notifier=None,
        exporter: Optional[ExportController] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.session = session
        self.preview = preview
        self.store = store
        self.generator = generator or IdentifierGenerator(today=today)
        self.notifier = notifier
        self.exporter = exporter
        self.today = today

    @property
    def schema(self):
        return self.session.schema

    # ---- pipeline ----------------------------------------------------------
    def is_valid(self) -> bool:
        return is_valid(self.schema, self.session.values)

    def missing_fields(self):
        return missing_required(self.schema, self.session.values)

    def refresh_preview(self) -> Dict[str, str]:
        model = self.preview.refresh(self.session.values)
        _emit("previewChanged", model)
        return model

    def save(self) -> None:
        self.store.save(self.session.values)
        self.session.last_saved_at = self.store.last_saved_at

    def field_changed(self, key: str, value: str) -> None:
        """Handle an edit of ``key``; unknown keys are ignored."""

        if not self.session.set(key, value):
            logger.debug("[dispatch] ignoring unknown field %s", key)
            return
        _emit("fieldChanged", key, value)
        if self.is_valid():
            self.refresh_preview()
        self.save()

        derived = self.generator.derive(key, self.session.values)
        if derived is not None:
            target, generated = derived
            self.field_changed(target, generated)

    def restore(self) -> None:
        """Bring the preview in line with values restored at startup."""

        self.preview.reset()
        if self.is_valid():
            self.refresh_preview()

    # ---- user actions ------------------------------------------------------
    def _notify(self, message: str, severity: str) -> None:
        if self.notifier is not None:
            self.notifier.notify(message, severity)

    def _set_export_enabled(self, enabled: bool) -> None:
        self.session.export_enabled = enabled
        if self.exporter is not None:
            self.exporter.set_enabled(enabled)
        _emit("exportAvailabilityChanged", enabled)

    def generate(self) -> bool:
        if not self.is_valid():
            logger.info("[dispatch] generate blocked; missing %s", ", ".join(self.missing_fields()))
            self._notify("Please fill in all required fields.", "error")
            return False
        self.refresh_preview()
        self._set_export_enabled(True)
        self._notify("Certificate generated successfully!", "success")
        return True

    def reset(self) -> None:
        self.session.clear()
        self.session.apply_defaults(self.today)
        self.preview.reset()
        self._set_export_enabled(False)
        self.save()
        _emit("formReset")

    def document(self) -> CertificateDocument:
        return build_document(
            self.schema,
            self.preview.model,
            reference=self.session.get("certificateNumber"),
        )

    def export(self) -> None:
        if self.exporter is None:
            raise RuntimeError("No exporter configured")
        if not self.session.export_enabled:
            logger.debug("[dispatch] export requested before generate")
            return
        self.exporter.export(self.document)
