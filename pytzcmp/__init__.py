"""Compare wall-clock time across IANA zones and share it as a URL token."""

from .catalog import InvalidTimezoneError, TimezoneCatalog, TimezoneInfo, TzMetadata
from .civil import CivilTime, CivilTimeService, ZoneInfoCivilTimeService
from .codec import StateCodec
from .conversion import TimeConverter, TimePeriod, time_period
from .search import SearchResult, search
from .state import AppState, Slot, TimezoneEntry

__all__ = [
    "AppState",
    "CivilTime",
    "CivilTimeService",
    "InvalidTimezoneError",
    "SearchResult",
    "Slot",
    "StateCodec",
    "TimeConverter",
    "TimePeriod",
    "TimezoneCatalog",
    "TimezoneEntry",
    "TimezoneInfo",
    "TzMetadata",
    "ZoneInfoCivilTimeService",
    "search",
    "time_period",
]
