"""Display formatting for certificate field values.

Every function here is pure: the same raw string always renders the same
text, and malformed input renders a placeholder rather than raising.  Dates
and times are rendered in US English regardless of the process locale.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional

from .schema import FieldKind

__all__ = [
    "PLACEHOLDER",
    "SHORT_PLACEHOLDER",
    "format_value",
    "format_text",
    "format_date",
    "format_time",
    "parse_date",
]


# Unfilled text slot.
PLACEHOLDER = "_" * 17
# Unknown date/time.
SHORT_PLACEHOLDER = "_" * 9

_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


def parse_date(raw: str | None) -> Optional[date]:
    """Best-effort conversion of an ISO date (or date-time) string."""

    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def format_text(raw: str | None) -> str:
    text = (raw or "").strip()
    return text or PLACEHOLDER


def format_date(raw: str | date | None) -> str:
    """Render ``raw`` as ``"January 5, 2024"``."""

    value = raw if isinstance(raw, date) else parse_date(raw)
    if value is None:
        return SHORT_PLACEHOLDER
    return f"{_MONTHS[value.month - 1]} {value.day}, {value.year}"


def format_time(raw: str | None) -> str:
    """Render a 24-hour ``HH:MM`` string as ``"2:30 PM"``."""

    match = _TIME_RE.match((raw or "").strip())
    if match is None:
        return SHORT_PLACEHOLDER
    hours, minutes = int(match.group(1)), int(match.group(2))
    seconds = int(match.group(3) or 0)
    if hours > 23 or minutes > 59 or seconds > 59:
        return SHORT_PLACEHOLDER
    suffix = "AM" if hours < 12 else "PM"
    return f"{hours % 12 or 12}:{minutes:02d} {suffix}"


def format_value(kind: FieldKind, raw: str | None) -> str:
    if kind is FieldKind.DATE:
        return format_date(raw)
    if kind is FieldKind.TIME:
        return format_time(raw)
    return format_text(raw)
