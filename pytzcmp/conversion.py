"""
Instant <-> civil time conversion inside named zones.

Every function assumes a zone id that was already validated against the
catalog; nothing here re-checks it.
"""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from enum import StrEnum

from .civil import CivilTime, CivilTimeService, ZoneInfoCivilTimeService

SLOTS_PER_DAY = 96
SLOT_MINUTES = 15
# zone conversion and day shifts must stay inside datetime.min..max
MIN_INSTANT = datetime.min.replace(tzinfo=UTC) + timedelta(days=2)
MAX_INSTANT = datetime.max.replace(tzinfo=UTC) - timedelta(days=2)


class TimePeriod(StrEnum):
    NIGHT = "night"
    MORNING = "morning"
    BUSINESS = "business"
    EVENING = "evening"


def time_period(hour: int) -> TimePeriod:
    if 6 <= hour < 9:
        return TimePeriod.MORNING
    if 9 <= hour < 18:
        return TimePeriod.BUSINESS
    if 18 <= hour < 21:
        return TimePeriod.EVENING
    return TimePeriod.NIGHT


def utc_now() -> datetime:
    return datetime.now(UTC)


def as_instant(dt: datetime) -> datetime:
    """Normalize to an aware UTC datetime with millisecond precision.

    Naive values are taken to be UTC already.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    dt = dt.astimezone(UTC)
    return dt.replace(microsecond=dt.microsecond // 1000 * 1000)


def format_instant(instant: datetime) -> str:
    """2024-01-15T10:00:00.000Z"""
    text = as_instant(instant).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def parse_instant(text: str) -> datetime | None:
    """Parse an ISO-8601 instant; None when malformed or too close to the
    ends of the datetime range to convert into every zone."""
    try:
        instant = as_instant(datetime.fromisoformat(text.strip()))
    except (ValueError, OverflowError):
        return None
    if not MIN_INSTANT <= instant <= MAX_INSTANT:
        return None
    return instant


def parse_date(value: str | date) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip())


class TimeConverter:
    def __init__(self, service: CivilTimeService | None = None) -> None:
        self.service = service or ZoneInfoCivilTimeService()

    # -----------------------------
    # Core round trip
    # -----------------------------

    def civil_to_instant(self, civil: CivilTime, tz_id: str) -> datetime:
        """Resolve wall-clock fields in ``tz_id`` to an absolute instant.

        The fields are first read as if they were UTC. The zone's view of that
        provisional instant gives the offset, which is applied once. Inside a
        DST changeover the result may be either occurrence of the local time
        (or land across a skipped hour); both readings are accepted.
        """
        guess = civil.as_utc()
        seen = self.instant_to_civil(guess, tz_id).as_utc()
        return guess + (guess - seen)

    def instant_to_civil(self, instant: datetime, tz_id: str) -> CivilTime:
        civil = self.service.civil_fields_of(instant, tz_id)
        if civil.hour == 24:
            civil = civil.replace(hour=0)
        return civil

    # -----------------------------
    # Editing one part of the local reading
    # -----------------------------

    def set_hour(self, instant: datetime, tz_id: str, hour: int) -> datetime:
        civil = self.instant_to_civil(instant, tz_id)
        return self.civil_to_instant(civil.replace(hour=hour), tz_id)

    def set_time(self, instant: datetime, tz_id: str, hour: int, minute: int) -> datetime:
        civil = self.instant_to_civil(instant, tz_id)
        return self.civil_to_instant(
            civil.replace(hour=hour, minute=minute, second=0), tz_id
        )

    def set_date(self, instant: datetime, tz_id: str, target: str | date) -> datetime:
        day = parse_date(target)
        civil = self.instant_to_civil(instant, tz_id)
        return self.civil_to_instant(
            civil.replace(year=day.year, month=day.month, day=day.day), tz_id
        )

    def shift_day(self, instant: datetime, tz_id: str, delta_days: int) -> datetime:
        local_day = self.instant_to_civil(instant, tz_id).date()
        return self.set_date(instant, tz_id, local_day + timedelta(days=delta_days))

    # -----------------------------
    # Calendar readings
    # -----------------------------

    def iso_week_number(self, instant: datetime, tz_id: str) -> int:
        # Week of the Thursday in the same Monday-based week.
        local_day = self.instant_to_civil(instant, tz_id).date()
        thursday = local_day + timedelta(days=3 - local_day.weekday())
        jan1 = date(thursday.year, 1, 1)
        return (thursday - jan1).days // 7 + 1

    def slot_of(self, instant: datetime, tz_id: str) -> int:
        civil = self.instant_to_civil(instant, tz_id)
        return civil.hour * (60 // SLOT_MINUTES) + civil.minute // SLOT_MINUTES

    def format_time24(self, instant: datetime, tz_id: str) -> str:
        civil = self.instant_to_civil(instant, tz_id)
        return f"{civil.hour:02d}:{civil.minute:02d}"

    def format_date_iso(self, instant: datetime, tz_id: str) -> str:
        return self.instant_to_civil(instant, tz_id).date().isoformat()

    def format_date(self, instant: datetime, tz_id: str) -> str:
        local_day = self.instant_to_civil(instant, tz_id).date()
        return f"{local_day:%a}, {local_day:%b} {local_day.day}"

    def day_of_week_short(self, instant: datetime, tz_id: str) -> str:
        return f"{self.instant_to_civil(instant, tz_id).date():%a}".upper()

    def month_day_short(self, instant: datetime, tz_id: str) -> tuple[str, str]:
        local_day = self.instant_to_civil(instant, tz_id).date()
        return f"{local_day:%b}".upper(), str(local_day.day)
