from __future__ import annotations

import os
from datetime import date

import pytest

# Qt widgets require a platform plugin.  Offscreen avoids libGL dependencies
# inside the test container.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from modules.certificates.schema import load_schema


FIXED_TODAY = date(2024, 3, 7)


@pytest.fixture
def schema():
    return load_schema()


@pytest.fixture
def today():
    return lambda: FIXED_TODAY


class FixedRandom:
    """Deterministic ``rand(low, high)`` returning queued values."""

    def __init__(self, *values: int) -> None:
        self.values = list(values) or [42]
        self.calls: list[tuple[int, int]] = []

    def __call__(self, low: int, high: int) -> int:
        self.calls.append((low, high))
        if len(self.values) > 1:
            return self.values.pop(0)
        return self.values[0]


@pytest.fixture
def rand():
    return FixedRandom(7)


def complete_values() -> dict[str, str]:
    return {
        "fullName": "Jane Ann Doe",
        "gender": "Female",
        "dateOfBirth": "2024-01-05",
        "timeOfBirth": "14:30",
        "placeOfBirth": "Springfield General Hospital",
        "fatherName": "John Doe",
        "motherName": "Mary Doe",
        "registrationDate": "2024-03-07",
        "issuingAuthority": "County Registrar",
    }
