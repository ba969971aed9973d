"""
Comparison state and the edits the user interface applies to it.

Every edit returns a new AppState; nothing is mutated in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime

from .catalog import InvalidTimezoneError, TimezoneCatalog
from .conversion import SLOT_MINUTES, SLOTS_PER_DAY, TimeConverter, as_instant

FALLBACK_TIMEZONE = "UTC"


class Slot(int):
    """Quarter-hour index within a day, 0 (00:00) to 95 (23:45)."""

    def __new__(cls, value: int) -> Slot:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Slot must be an int, not {type(value).__name__}")
        if not 0 <= value < SLOTS_PER_DAY:
            raise ValueError(f"Slot out of range: {value}")
        return super().__new__(cls, value)

    @classmethod
    def of(cls, hour: int, minute: int) -> Slot:
        return cls(hour * (60 // SLOT_MINUTES) + minute // SLOT_MINUTES)

    @property
    def hour(self) -> int:
        return int(self) // (60 // SLOT_MINUTES)

    @property
    def minute(self) -> int:
        return int(self) % (60 // SLOT_MINUTES) * SLOT_MINUTES

    def __repr__(self) -> str:
        return f"Slot({int(self)})"


@dataclass(frozen=True)
class TimezoneEntry:
    id: str
    label: str | None = None

    @property
    def display_name(self) -> str:
        return self.label or self.id.split("/")[-1].replace("_", " ")


@dataclass(frozen=True)
class AppState:
    timezones: tuple[TimezoneEntry, ...] = field(default_factory=tuple)
    reference_time: datetime | None = None
    reference_id: str | None = None
    range_end: Slot | None = None

    @property
    def is_live(self) -> bool:
        return self.reference_time is None

    @property
    def ids(self) -> list[str]:
        return [entry.id for entry in self.timezones]

    @property
    def effective_reference_id(self) -> str:
        if self.reference_id:
            return self.reference_id
        if self.timezones:
            return self.timezones[0].id
        return FALLBACK_TIMEZONE


def default_state(local_timezone: str) -> AppState:
    return AppState(timezones=(TimezoneEntry(local_timezone),))


def validated_entry(catalog: TimezoneCatalog, tz_id: str, label: str | None = None) -> TimezoneEntry:
    catalog.require(tz_id)
    return TimezoneEntry(tz_id, label or None)


def effective_time(state: AppState, now: datetime) -> datetime:
    return state.reference_time if state.reference_time is not None else as_instant(now)


# -----------------------------
# Edits
# -----------------------------

def add_timezone(state: AppState, entry: TimezoneEntry) -> AppState:
    if entry.id in state.ids:
        return state
    return replace(state, timezones=state.timezones + (entry,))


def remove_timezone(state: AppState, tz_id: str) -> AppState:
    timezones = tuple(entry for entry in state.timezones if entry.id != tz_id)
    reference_id = None if state.reference_id == tz_id else state.reference_id
    return replace(state, timezones=timezones, reference_id=reference_id)


def set_reference(state: AppState, tz_id: str | None) -> AppState:
    if tz_id is None or (state.timezones and state.timezones[0].id == tz_id):
        return replace(state, reference_id=None)
    if tz_id not in state.ids:
        raise InvalidTimezoneError(tz_id)
    return replace(state, reference_id=tz_id)


def set_reference_time(state: AppState, instant: datetime | None) -> AppState:
    return replace(state, reference_time=None if instant is None else as_instant(instant))


def reset_to_now(state: AppState) -> AppState:
    return replace(state, reference_time=None, range_end=None)


def set_range_end(state: AppState, slot: int | None) -> AppState:
    return replace(state, range_end=None if slot is None else Slot(slot))


def select_range(
    state: AppState,
    converter: TimeConverter,
    instant: datetime,
    range_end: int | None,
) -> AppState:
    """Apply a drag or click on the timeline grid.

    ``instant`` is the new range start; a range end on the start's own slot
    means a single point, so it is stored as no range.
    """
    instant = as_instant(instant)
    end = None if range_end is None else Slot(range_end)
    if end is not None and end == converter.slot_of(instant, state.effective_reference_id):
        end = None
    return replace(state, reference_time=instant, range_end=end)


def shift_reference_day(
    state: AppState,
    converter: TimeConverter,
    now: datetime,
    delta_days: int,
) -> AppState:
    shifted = converter.shift_day(
        effective_time(state, now), state.effective_reference_id, delta_days
    )
    return replace(state, reference_time=as_instant(shifted))
