"""
Per-row view data for a comparison: what the reference instant looks like in
every listed zone, laid out on the 24-column hour grid of the reference zone.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .catalog import TimezoneCatalog
from .civil import CivilTime
from .conversion import SLOT_MINUTES, TimeConverter, TimePeriod, time_period
from .state import AppState, effective_time

HOURS_PER_DAY = 24
SLOTS_PER_HOUR = 60 // SLOT_MINUTES


@dataclass(frozen=True)
class HourColumn:
    col: int
    display_hour: int
    period: TimePeriod
    is_selected: bool
    in_range: bool


@dataclass(frozen=True)
class DisplayRow:
    id: str
    name: str
    is_reference: bool
    civil: CivilTime
    time: str
    date: str
    abbreviation: str
    offset: str
    region: str
    country: str | None
    period: TimePeriod
    offset_minutes: int
    day_label: str
    month_label: str
    day_of_month: str
    columns: tuple[HourColumn, ...]
    range_start: str | None = None
    range_end: str | None = None
    duration: str | None = None


def format_duration(minutes: int) -> str:
    hours, mins = divmod(minutes, 60)
    if mins and hours:
        return f"{hours}h{mins}m"
    if mins:
        return f"{mins}m"
    return f"{hours}h"


def _minutes(civil: CivilTime) -> int:
    return civil.hour * 60 + civil.minute


def _slot_time(slot: int, offset_minutes: int) -> str:
    total = (slot * SLOT_MINUTES + offset_minutes) % (HOURS_PER_DAY * 60)
    return f"{total // 60:02d}:{total % 60:02d}"


def header(state: AppState, converter: TimeConverter, now: datetime) -> str:
    """Reference-zone date with its ISO week, e.g. "Mon, Jan 15 W3"."""
    instant = effective_time(state, now)
    ref_id = state.effective_reference_id
    return f"{converter.format_date(instant, ref_id)} W{converter.iso_week_number(instant, ref_id)}"


def build_rows(
    state: AppState,
    converter: TimeConverter,
    catalog: TimezoneCatalog,
    now: datetime,
) -> list[DisplayRow]:
    instant = effective_time(state, now)
    ref_id = state.effective_reference_id
    ref_civil = converter.instant_to_civil(instant, ref_id)

    start_slot = ref_civil.hour * SLOTS_PER_HOUR + ref_civil.minute // SLOT_MINUTES
    has_range = state.range_end is not None and state.range_end != start_slot
    low = min(start_slot, state.range_end) if has_range else start_slot
    high = max(start_slot, state.range_end) if has_range else start_slot

    rows: list[DisplayRow] = []
    for entry in state.timezones:
        civil = converter.instant_to_civil(instant, entry.id)
        offset_minutes = _minutes(civil) - _minutes(ref_civil)
        hour_offset = offset_minutes // 60

        columns = tuple(
            HourColumn(
                col=col,
                display_hour=(col + hour_offset) % HOURS_PER_DAY,
                period=time_period((col + hour_offset) % HOURS_PER_DAY),
                is_selected=not has_range and col == ref_civil.hour,
                in_range=has_range and low // SLOTS_PER_HOUR <= col <= high // SLOTS_PER_HOUR,
            )
            for col in range(HOURS_PER_DAY)
        )

        # Day labels describe the local day that starts inside the grid.
        midnight = next((c.col for c in columns if c.display_hour == 0), None)
        day_instant = instant if midnight is None else converter.set_hour(instant, ref_id, midnight)
        month_label, day_of_month = converter.month_day_short(day_instant, entry.id)

        info = catalog.info(entry.id, instant)
        rows.append(DisplayRow(
            id=entry.id,
            name=entry.display_name,
            is_reference=entry.id == ref_id,
            civil=civil,
            time=f"{civil.hour:02d}:{civil.minute:02d}",
            date=converter.format_date(instant, entry.id),
            abbreviation=info.abbreviation,
            offset=info.offset,
            region=info.region,
            country=info.country,
            period=time_period(civil.hour),
            offset_minutes=offset_minutes,
            day_label=converter.day_of_week_short(day_instant, entry.id),
            month_label=month_label,
            day_of_month=day_of_month,
            columns=columns,
            range_start=_slot_time(low, offset_minutes) if has_range else None,
            range_end=_slot_time(high, offset_minutes) if has_range else None,
            duration=format_duration((high - low) * SLOT_MINUTES) if has_range else None,
        ))
    return rows
