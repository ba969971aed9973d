"""
Read and write the comparison state as a URL query token.

URL format: ?s=(ref:Asia/Tokyo,t:'2024-01-15T10:00:00.000Z',tz:!(Asia/Tokyo,(id:America/New_York,l:Beijing)))

The record is Rison; ``tz`` holds bare ids or (id, l) pairs, ``t`` is the
frozen reference instant, ``ref`` the reference zone and ``re`` the range end
slot. Absent fields mean live mode, first-entry reference and no range.

The query string is decoded with form rules, so a literal ``+`` reads as a
space. ``encode`` writes it as ``%2B``; a hand-typed ``Etc/GMT+5`` must be
spelled ``Etc/GMT%2B5`` or the whole token is rejected.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any
from urllib.parse import parse_qs, quote

import prison

from .catalog import TimezoneCatalog
from .conversion import SLOTS_PER_DAY, format_instant, parse_instant
from .state import FALLBACK_TIMEZONE, AppState, Slot, TimezoneEntry, default_state

logger = logging.getLogger(__name__)

PARAM = "s"
# Rison punctuation left readable in the URL
RISON_SAFE = "()!:,'*/~$@-._"


class StateCodec:
    def __init__(self, catalog: TimezoneCatalog, local_timezone: str) -> None:
        self.catalog = catalog
        if local_timezone not in catalog:
            logger.warning("Local zone %r is not in the catalog; using %s", local_timezone, FALLBACK_TIMEZONE)
            local_timezone = FALLBACK_TIMEZONE
        self.local_timezone = local_timezone

    def default_timezones(self) -> tuple[TimezoneEntry, ...]:
        return (TimezoneEntry(self.local_timezone),)

    def default_state(self) -> AppState:
        return default_state(self.local_timezone)

    # -----------------------------
    # Encoding
    # -----------------------------

    def encode(self, state: AppState) -> str:
        """Return ``"?s=..."`` for ``state``, or ``""`` when it has no zones."""
        if not state.timezones:
            return ""
        data: dict[str, Any] = {"tz": [self._raw_entry(entry) for entry in state.timezones]}
        if state.reference_time is not None:
            data["t"] = format_instant(state.reference_time)
        if state.reference_id:
            data["ref"] = state.reference_id
        if state.range_end is not None:
            data["re"] = int(state.range_end)
        return f"?{PARAM}=" + quote(prison.dumps(data), safe=RISON_SAFE)

    @staticmethod
    def _raw_entry(entry: TimezoneEntry) -> str | dict[str, str]:
        if entry.label:
            return {"id": entry.id, "l": entry.label}
        return entry.id

    # -----------------------------
    # Decoding
    # -----------------------------

    def decode(self, token: str | None) -> AppState:
        """Rebuild a state from a token; malformed input yields the default state."""
        raw = self._param(token or "")
        if not raw:
            return self.default_state()

        try:
            data = prison.loads(raw)
        except Exception as exc:  # noqa: BLE001
            logger.debug("Unparseable state token %r: %s", raw, exc)
            return self.default_state()

        if not isinstance(data, dict) or not isinstance(data.get("tz"), list):
            logger.debug("State token without a zone list: %r", raw)
            return self.default_state()

        timezones = self._entries(data["tz"]) or self.default_timezones()
        ids = {entry.id for entry in timezones}

        ref = data.get("ref")
        return AppState(
            timezones=timezones,
            reference_time=self._instant(data.get("t")),
            reference_id=ref if isinstance(ref, str) and ref in ids else None,
            range_end=self._slot(data.get("re")),
        )

    @staticmethod
    def _param(token: str) -> str:
        query = token.partition("?")[2] if "?" in token else token
        values = parse_qs(query.partition("#")[0]).get(PARAM)
        return values[0] if values else ""

    def _entries(self, items: list[Any]) -> tuple[TimezoneEntry, ...]:
        entries: list[TimezoneEntry] = []
        seen: set[str] = set()
        for item in items:
            entry = self._entry(item)
            if entry is None:
                logger.debug("Dropping invalid zone entry %r", item)
                continue
            if entry.id in seen:
                continue
            seen.add(entry.id)
            entries.append(entry)
        return tuple(entries)

    def _entry(self, item: Any) -> TimezoneEntry | None:
        if isinstance(item, str):
            return TimezoneEntry(item) if item in self.catalog else None
        if isinstance(item, dict) and item.get("id") in self.catalog:
            label = item.get("l")
            return TimezoneEntry(item["id"], label if isinstance(label, str) and label else None)
        return None

    @staticmethod
    def _instant(value: Any) -> datetime | None:
        if not isinstance(value, str) or not value:
            return None
        return parse_instant(value)

    @staticmethod
    def _slot(value: Any) -> Slot | None:
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        if not 0 <= value < SLOTS_PER_DAY:
            return None
        return Slot(value)
