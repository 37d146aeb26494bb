from .notification import DEFAULT_TOAST_DURATION_MS, SEVERITIES, Notification, Severity

__all__ = ["Notification", "Severity", "SEVERITIES", "DEFAULT_TOAST_DURATION_MS"]
