from __future__ import annotations

import time

from PySide6.QtWidgets import QApplication, QWidget

from notifications.models.notification import Notification
from notifications.panels.toast import Toast, ToastHost
from notifications.services import Notifier


def _ensure_app() -> QApplication:
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


def test_unknown_severity_falls_back_to_info():
    assert Notification("hello", "warning").severity == "info"


def test_notify_clears_then_shows():
    notifier = Notifier(duration_ms=1500)
    events = []
    notifier.clearToasts.connect(lambda: events.append("clear"))
    notifier.showToast.connect(lambda payload: events.append(payload))

    notifier.notify("Saved", "success")
    assert events[0] == "clear"
    payload = events[1]
    assert payload["message"] == "Saved"
    assert payload["severity"] == "success"
    assert payload["toast_duration_ms"] == 1500
    assert notifier.recent()[-1]["message"] == "Saved"


def test_toast_host_keeps_one_toast():
    _ensure_app()
    parent = QWidget()
    parent.resize(600, 400)
    notifier = Notifier()
    host = ToastHost(notifier, parent)

    notifier.notify("first", "info")
    notifier.notify("second", "error")
    assert len(host.toasts) == 1
    current = host.toasts[0]
    assert not current.isHidden()
    assert current.text() == "second"
    assert current.objectName() == "notification-error"


def test_toast_expires():
    app = _ensure_app()
    parent = QWidget()
    toast = Toast({"message": "bye", "severity": "info", "toast_duration_ms": 50}, parent)
    fired = []
    toast._timer.timeout.connect(lambda: fired.append(True))
    assert toast._timer.interval() == 50
    assert not toast.isHidden()

    deadline = time.monotonic() + 2
    while not fired and time.monotonic() < deadline:
        app.processEvents()
        time.sleep(0.01)
    assert fired
    assert toast._dismissed


def test_toast_dismiss_stops_timer():
    _ensure_app()
    parent = QWidget()
    toast = Toast({"message": "bye", "severity": "info", "toast_duration_ms": 3000}, parent)
    assert toast._timer.isActive()
    toast.dismiss()
    assert toast.isHidden()
    assert not toast._timer.isActive()
