from __future__ import annotations

import dataclasses
import logging
from typing import Any, Dict, List

from PySide6.QtCore import QObject, Signal

from notifications.models.notification import DEFAULT_TOAST_DURATION_MS, Notification

logger = logging.getLogger(__name__)


class Notifier(QObject):
    """Central service for transient user notifications (toasts).

    Only one toast is visible at a time: every ``notify`` first asks the
    views to drop whatever is currently shown.
    """

    showToast = Signal(dict)
    clearToasts = Signal()

    _instance: "Notifier | None" = None

    def __init__(self, duration_ms: int = DEFAULT_TOAST_DURATION_MS) -> None:
        super().__init__()
        self._recent: List[Dict[str, Any]] = []
        self._default_duration = duration_ms

    # ---- Singleton helpers -------------------------------------------------
    @classmethod
    def instance(cls) -> "Notifier":
        if cls._instance is None:
            cls._instance = Notifier()
        return cls._instance

    # ---- Public API --------------------------------------------------------
    def notify(self, message: str | Notification, severity: str = "info") -> None:
        note = message if isinstance(message, Notification) else Notification(message, severity)  # type: ignore[arg-type]
        payload = dataclasses.asdict(note)
        if payload.get("toast_duration_ms") is None:
            payload["toast_duration_ms"] = self._default_duration

        if payload["severity"] == "error":
            logger.warning("[notify] %s", payload["message"])
        else:
            logger.info("[notify] %s: %s", payload["severity"], payload["message"])

        self._recent.append(payload)
        self.clearToasts.emit()
        self.showToast.emit(payload)

    def recent(self, limit: int = 50) -> List[Dict[str, Any]]:
        return self._recent[-limit:]


# convenient alias
get_notifier = Notifier.instance
