from __future__ import annotations

from typing import Any, Dict, List

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QLabel, QWidget

from notifications.models.notification import DEFAULT_TOAST_DURATION_MS
from notifications.services import Notifier

TOAST_COLORS = {
    "success": "#48bb78",
    "error": "#f56565",
    "info": "#4299e1",
}


class Toast(QLabel):
    """Self-expiring message anchored to the top-right corner of its parent."""

    def __init__(self, payload: Dict[str, Any], parent: QWidget) -> None:
        super().__init__(payload.get("message", ""), parent)
        self.severity = payload.get("severity", "info")
        self.setObjectName(f"notification-{self.severity}")
        self.setWordWrap(True)
        self.setMaximumWidth(300)
        color = TOAST_COLORS.get(self.severity, TOAST_COLORS["info"])
        self.setStyleSheet(
            f"background-color:{color}; color:white; font-weight:600;"
            "padding:15px 20px; border-radius:8px;"
        )
        self.adjustSize()
        self._place()
        self.show()
        self.raise_()

        duration = int(payload.get("toast_duration_ms") or DEFAULT_TOAST_DURATION_MS)
        self._dismissed = False
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self.dismiss)
        self._timer.start(duration)

    def _place(self) -> None:
        parent = self.parentWidget()
        if parent is None:
            return
        x = max(0, parent.width() - self.width() - 20)
        self.move(x, 20)

    def dismiss(self) -> None:
        if self._dismissed:
            return
        self._dismissed = True
        self._timer.stop()
        self.hide()
        self.deleteLater()


class ToastHost:
    """Shows :class:`Notifier` toasts on top of ``parent``."""

    def __init__(self, notifier: Notifier, parent: QWidget) -> None:
        self.parent = parent
        self.toasts: List[Toast] = []
        notifier.showToast.connect(self.show_toast)
        notifier.clearToasts.connect(self.clear)

    def show_toast(self, payload: Dict[str, Any]) -> Toast:
        toast = Toast(payload, self.parent)
        toast.destroyed.connect(lambda *_: self._forget(toast))
        self.toasts.append(toast)
        return toast

    def _forget(self, toast: Toast) -> None:
        if toast in self.toasts:
            self.toasts.remove(toast)

    def clear(self) -> None:
        for toast in list(self.toasts):
            toast.dismiss()
        self.toasts.clear()
