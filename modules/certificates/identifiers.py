"""Registration and certificate number derivation.

Both identifiers are recomputed whenever their source field changes and carry
a random suffix.  Nothing here checks for duplicates; two certificates may
legitimately end up with the same number.
"""

from __future__ import annotations

import logging
import random
from datetime import date
from typing import Callable, Dict, Mapping, Optional, Tuple

from .formatter import parse_date

__all__ = [
    "RandomInt",
    "TRIGGERS",
    "IdentifierGenerator",
    "registration_number",
    "certificate_number",
]

logger = logging.getLogger(__name__)

# ``rand(low, high)`` returns an int in the inclusive range.
RandomInt = Callable[[int, int], int]

# source field -> derived field
TRIGGERS: Dict[str, str] = {
    "fullName": "registrationNumber",
    "dateOfBirth": "certificateNumber",
}


def registration_number(full_name: str, *, year: int, rand: RandomInt = random.randint) -> Optional[str]:
    """Return ``INITIALS + YYYY + NNNN`` or ``None`` for names under 3 chars.

    The length check counts the name as typed, surrounding blanks included.
    """

    name = full_name or ""
    if len(name) < 3:
        return None
    initials = "".join(token[0] for token in name.split()).upper()
    return f"{initials}{year:04d}{rand(0, 9999):04d}"


def certificate_number(date_of_birth: str, *, rand: RandomInt = random.randint) -> Optional[str]:
    """Return ``BC + YYYYMMDD + NNN`` or ``None`` when no date is given."""

    born = parse_date(date_of_birth)
    if born is None:
        return None
    return f"BC{born.year:04d}{born.month:02d}{born.day:02d}{rand(0, 999):03d}"


class IdentifierGenerator:
    """Derives identifier fields from their trigger fields.

    ``rand`` and ``today`` are injectable so callers can make the output
    deterministic.
    """

    def __init__(self, rand: RandomInt = random.randint, today: Callable[[], date] = date.today) -> None:
        self.rand = rand
        self.today = today

    def is_trigger(self, key: str) -> bool:
        return key in TRIGGERS

    def derive(self, key: str, values: Mapping[str, str]) -> Optional[Tuple[str, str]]:
        """Return ``(target_key, value)`` when ``key`` triggers a derivation.

        ``None`` means the previous identifier should be left untouched.
        """

        target = TRIGGERS.get(key)
        if target is None:
            return None
        source = values.get(key, "") or ""
        if target == "registrationNumber":
            value = registration_number(source, year=self.today().year, rand=self.rand)
        else:
            value = certificate_number(source, rand=self.rand)
        if value is None:
            return None
        logger.debug("[identifiers] %s -> %s=%s", key, target, value)
        return target, value
