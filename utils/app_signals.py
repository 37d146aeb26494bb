from __future__ import annotations

from PySide6.QtCore import QObject, Signal


class AppSignals(QObject):
    """Global Qt signals for app-wide events.

    Panels can subscribe to these to stay in sync with the certificate session.
    """

    # Emitted after a form field value is stored; provides field key and raw value
    fieldChanged = Signal(str, str)
    # Emitted when the preview has been recomputed; provides the preview model
    previewChanged = Signal(dict)
    # Emitted when the print/export control becomes available or unavailable
    exportAvailabilityChanged = Signal(bool)
    # Emitted after the form and preview are reset
    formReset = Signal()


# Global singleton instance
app_signals = AppSignals()


__all__ = ["app_signals", "AppSignals"]
