"""State of the form being edited.

One :class:`SessionState` exists per running window.  It is created with
:meth:`SessionState.start`, which seeds defaults and then overlays whatever
snapshot was persisted by the previous run.  There is no explicit teardown;
the session simply ends with the window.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, Dict, Optional

from .persistence import PersistenceStore
from .schema import FieldSchema

__all__ = ["SessionState", "REGISTRATION_DATE_KEY"]

logger = logging.getLogger(__name__)

REGISTRATION_DATE_KEY = "registrationDate"


@dataclass
class SessionState:
    """Values of an in-progress certificate.

    Attributes
    ----------
    schema:
        Catalog the session was built from.  Only its keys are ever stored in
        ``values``.
    values:
        Mapping of field keys to raw strings as typed (or generated).
    export_enabled:
        Whether a certificate has been generated and can be printed.
    created_at / last_saved_at:
        Timestamps useful for draft management.
    """

    schema: FieldSchema
    values: Dict[str, str] = field(default_factory=dict)
    export_enabled: bool = False
    created_at: datetime = field(default_factory=datetime.now)
    last_saved_at: Optional[datetime] = None

    @classmethod
    def start(
        cls,
        schema: FieldSchema,
        store: Optional[PersistenceStore] = None,
        today: Callable[[], date] = date.today,
    ) -> "SessionState":
        session = cls(schema=schema)
        session.apply_defaults(today)
        if store is not None:
            restored = store.load()
            session.values.update(restored)
            logger.info("[session] restored %d field(s) from snapshot", len(restored))
        return session

    def apply_defaults(self, today: Callable[[], date] = date.today) -> None:
        if REGISTRATION_DATE_KEY in self.schema:
            self.values[REGISTRATION_DATE_KEY] = today().isoformat()

    def get(self, key: str) -> str:
        return self.values.get(key, "")

    def set(self, key: str, value: str) -> bool:
        """Store ``value`` under ``key``; unknown keys are ignored."""

        if key not in self.schema:
            return False
        self.values[key] = value
        return True

    def clear(self) -> None:
        self.values.clear()
        self.export_enabled = False
