from datetime import date

import pytest

from modules.certificates.formatter import (
    PLACEHOLDER,
    SHORT_PLACEHOLDER,
    format_date,
    format_time,
    format_value,
    parse_date,
)
from modules.certificates.schema import FieldKind


def test_date_rendering():
    assert format_value(FieldKind.DATE, "2024-01-05") == "January 5, 2024"
    assert format_value(FieldKind.DATE, "1999-12-31") == "December 31, 1999"
    assert format_date(date(2024, 3, 7)) == "March 7, 2024"


def test_date_keeps_calendar_day_of_datetime_input():
    assert format_date("2024-01-05T23:30:00Z") == "January 5, 2024"


@pytest.mark.parametrize("raw", ["", "   ", None, "05/01/2024", "2024-02-30", "yesterday"])
def test_date_placeholder(raw):
    assert format_value(FieldKind.DATE, raw) == SHORT_PLACEHOLDER


def test_time_rendering():
    assert format_value(FieldKind.TIME, "14:30") == "2:30 PM"
    assert format_time("00:05") == "12:05 AM"
    assert format_time("12:00") == "12:00 PM"
    assert format_time("09:07:45") == "9:07 AM"


@pytest.mark.parametrize("raw", ["", "25:00", "12:60", "noon", "1430", None])
def test_time_placeholder(raw):
    assert format_time(raw) == SHORT_PLACEHOLDER


def test_text_rendering():
    assert format_value(FieldKind.TEXT, "  Jane Doe ") == "Jane Doe"
    assert format_value(FieldKind.TEXT, "") == PLACEHOLDER
    assert format_value(FieldKind.TEXT, "   ") == PLACEHOLDER
    assert PLACEHOLDER == "_" * 17
    assert SHORT_PLACEHOLDER == "_" * 9


def test_parse_date():
    assert parse_date("2024-03-07") == date(2024, 3, 7)
    assert parse_date("not a date") is None
