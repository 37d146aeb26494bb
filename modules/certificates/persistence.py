"""Local persistence of the form values.

The whole field mapping is stored as one JSON string under a fixed key, the
same way a browser keeps it in local storage.  Loading never raises: a
missing or corrupt snapshot simply yields an empty form.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Dict, Mapping, Optional, Protocol

from .schema import FieldSchema

__all__ = ["STORAGE_KEY", "Storage", "MemoryStorage", "PersistenceStore"]

logger = logging.getLogger(__name__)

STORAGE_KEY = "birthCertificateData"


class Storage(Protocol):
    def get_item(self, key: str, default: Optional[str] = None) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """In-process storage, used by tests and throwaway sessions."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None) -> None:
        self.items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.items.get(key, default)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class PersistenceStore:
    def __init__(self, storage: Storage, schema: FieldSchema, key: str = STORAGE_KEY) -> None:
        self.storage = storage
        self.schema = schema
        self.key = key
        self.last_saved_at: Optional[datetime] = None

    def save(self, values: Mapping[str, str]) -> None:
        """Overwrite the snapshot with ``values``."""

        payload = json.dumps(dict(values))
        try:
            self.storage.set_item(self.key, payload)
        except OSError as e:
            logger.warning("[persistence] failed to save snapshot: %s", e)
            return
        self.last_saved_at = datetime.now()

    def load(self) -> Dict[str, str]:
        """Return the stored values known to the schema, or ``{}``."""

        try:
            raw = self.storage.get_item(self.key)
        except OSError as e:
            logger.warning("[persistence] failed to read snapshot: %s", e)
            return {}
        if not raw:
            return {}
        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.warning("[persistence] ignoring malformed snapshot: %s", e)
            return {}
        if not isinstance(data, dict):
            logger.warning("[persistence] ignoring snapshot of type %s", type(data).__name__)
            return {}

        values: Dict[str, str] = {}
        for key, value in data.items():
            if key not in self.schema:
                logger.debug("[persistence] dropping unknown field %s", key)
                continue
            if isinstance(value, str):
                values[key] = value
        return values

    def clear(self) -> None:
        try:
            self.storage.remove_item(self.key)
        except OSError as e:
            logger.warning("[persistence] failed to clear snapshot: %s", e)
