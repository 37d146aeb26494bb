"""Keeps the certificate preview in step with the form values.

The preview is a projection: :class:`PreviewSync` recomputes every slot from
the current field values and never keeps state of its own beyond the last
rendered text.  Where the text ends up is decided by a render target, which
may expose only some of the slots; slots it lacks are skipped silently.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Dict, Iterable, Mapping, Optional, Protocol

from .formatter import PLACEHOLDER, format_date, format_value
from .schema import FieldSchema, display_key

__all__ = [
    "RenderTarget",
    "DictRenderTarget",
    "PreviewSync",
    "ISSUE_DATE_SLOT",
    "AUTHORITY_KEY",
    "AUTHORITY_SLOT",
    "DEFAULT_AUTHORITY",
]

logger = logging.getLogger(__name__)

ISSUE_DATE_SLOT = display_key("issueDate")
AUTHORITY_KEY = "issuingAuthority"
AUTHORITY_SLOT = display_key(AUTHORITY_KEY)
DEFAULT_AUTHORITY = "Department of Vital Records"


class RenderTarget(Protocol):
    def has_slot(self, name: str) -> bool: ...

    def set_text(self, name: str, text: str) -> None: ...

    def slots(self) -> Iterable[str]: ...


class DictRenderTarget:
    """Headless render target backed by a plain dict."""

    def __init__(self, slots: Iterable[str]) -> None:
        self.texts: Dict[str, str] = {name: "" for name in slots}

    def has_slot(self, name: str) -> bool:
        return name in self.texts

    def set_text(self, name: str, text: str) -> None:
        if name in self.texts:
            self.texts[name] = text

    def slots(self) -> Iterable[str]:
        return list(self.texts)


class PreviewSync:
    """Formats field values into preview slots.

    Parameters
    ----------
    schema:
        Field catalog; decides which slots exist and how each is formatted.
    target:
        Where rendered text is written.  Defaults to a :class:`DictRenderTarget`
        exposing every field slot plus the issue-date slot.
    today:
        Clock used for the issue date.
    """

    def __init__(
        self,
        schema: FieldSchema,
        target: Optional[RenderTarget] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.schema = schema
        if target is None:
            target = DictRenderTarget([d.display_key for d in schema] + [ISSUE_DATE_SLOT])
        self.target = target
        self.today = today
        self._model: Dict[str, str] = {}

    @property
    def model(self) -> Dict[str, str]:
        return dict(self._model)

    def _write(self, slot: str, text: str) -> None:
        if not self.target.has_slot(slot):
            return
        self._model[slot] = text
        self.target.set_text(slot, text)

    def refresh(self, values: Mapping[str, str]) -> Dict[str, str]:
        """Render ``values`` into every available slot and return the model."""

        for desc in self.schema:
            raw = values.get(desc.key, "") or ""
            if desc.key == AUTHORITY_KEY:
                self._write(desc.display_key, raw)
            else:
                self._write(desc.display_key, format_value(desc.kind, raw))
        self._write(ISSUE_DATE_SLOT, format_date(self.today()))
        logger.debug("[preview] refreshed %d slots", len(self._model))
        return self.model

    def reset(self) -> Dict[str, str]:
        """Put every slot back to its unfilled state."""

        for slot in self.target.slots():
            if slot == ISSUE_DATE_SLOT:
                self._write(slot, format_date(self.today()))
            elif slot == AUTHORITY_SLOT:
                self._write(slot, DEFAULT_AUTHORITY)
            else:
                self._write(slot, PLACEHOLDER)
        logger.debug("[preview] reset")
        return self.model
