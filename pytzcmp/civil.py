"""
Civil time fields and the service that produces them.

- CivilTime: calendar/clock fields of an instant inside one zone
- CivilTimeService: the capability the rest of the package depends on
- ZoneInfoCivilTimeService: default implementation (zoneinfo + tzdata)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import UTC, date, datetime, timedelta
from functools import lru_cache
from typing import Protocol
from zoneinfo import ZoneInfo


@dataclass(frozen=True)
class CivilTime:
    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int = 0

    def date(self) -> date:
        return date(self.year, self.month, self.day)

    def as_utc(self) -> datetime:
        """Reinterpret the wall-clock fields as a UTC instant."""
        return datetime(
            self.year, self.month, self.day,
            self.hour, self.minute, self.second,
            tzinfo=UTC,
        )

    def replace(self, **changes: int) -> CivilTime:
        return replace(self, **changes)


class CivilTimeService(Protocol):
    def civil_fields_of(self, instant: datetime, tz_id: str) -> CivilTime: ...

    def short_name(self, instant: datetime, tz_id: str) -> str: ...

    def long_offset(self, instant: datetime, tz_id: str) -> str: ...


# -----------------------------
# Helpers: offsets
# -----------------------------

def format_offset(offset: timedelta | None, with_colon: bool = True) -> str:
    if offset is None:
        return "+00:00" if with_colon else "+0000"
    total = int(offset.total_seconds())
    sign = "+" if total >= 0 else "-"
    total = abs(total)
    hours, rem = divmod(total, 3600)
    minutes = rem // 60
    if with_colon:
        return f"{sign}{hours:02d}:{minutes:02d}"
    return f"{sign}{hours:02d}{minutes:02d}"


def format_long_offset(offset: timedelta | None) -> str:
    # "GMT" alone for zero offsets, "GMT+09:00" otherwise.
    if not offset:
        return "GMT"
    return "GMT" + format_offset(offset, with_colon=True)


@lru_cache(maxsize=None)
def _zone(tz_id: str) -> ZoneInfo:
    return ZoneInfo(tz_id)


class ZoneInfoCivilTimeService:
    """CivilTimeService backed by the standard library zoneinfo database."""

    def _local(self, instant: datetime, tz_id: str) -> datetime:
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=UTC)
        return instant.astimezone(_zone(tz_id))

    def civil_fields_of(self, instant: datetime, tz_id: str) -> CivilTime:
        dt = self._local(instant, tz_id)
        return CivilTime(dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second)

    def short_name(self, instant: datetime, tz_id: str) -> str:
        dt = self._local(instant, tz_id)
        return dt.tzname() or format_long_offset(dt.utcoffset())

    def long_offset(self, instant: datetime, tz_id: str) -> str:
        return format_long_offset(self._local(instant, tz_id).utcoffset())
