"""
Registry of supported zone ids and their display metadata.

- TimezoneCatalog: ordered ids, membership checks, metadata and info
- MetadataCache: per-zone abbreviation/offset snapshot used by search
- country lookup read from the tzdata zone1970.tab / iso3166.tab files
"""

from __future__ import annotations

import logging
import os
import zoneinfo
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime
from importlib import resources

from .aliases import ABBREVIATION_BY_ZONE, ALIASES_BY_ZONE, format_alias
from .civil import CivilTimeService, ZoneInfoCivilTimeService
from .conversion import utc_now

logger = logging.getLogger(__name__)


class InvalidTimezoneError(ValueError):
    def __init__(self, tz_id: str) -> None:
        super().__init__(f"Invalid zone: {tz_id}")
        self.tz_id = tz_id


@dataclass(frozen=True)
class TzMetadata:
    abbreviation: str
    offset: str


@dataclass(frozen=True)
class TimezoneInfo:
    id: str
    label: str
    region: str
    offset: str
    abbreviation: str
    country: str | None = None


def city_name(tz_id: str) -> str:
    return tz_id.split("/")[-1].replace("_", " ")


def region(tz_id: str) -> str:
    return tz_id.split("/")[0]


def alias_labels(tz_id: str) -> list[str]:
    return [format_alias(alias) for alias in ALIASES_BY_ZONE.get(tz_id, ())]


# -----------------------------
# Metadata cache
# -----------------------------

class MetadataCache:
    """Abbreviation and offset of every catalog zone, taken once.

    The snapshot is computed against a single "now" the first time it is
    needed (or when ``build`` is called) and kept for the life of the
    process. It is never refreshed; an abbreviation or offset can go stale
    when a region changes its rules. Two threads building it at the same time
    both produce the same mapping, so no lock is taken.
    """

    def __init__(
        self,
        zones: Iterable[str],
        service: CivilTimeService,
        clock: Callable[[], datetime],
    ) -> None:
        self._zones = tuple(zones)
        self._service = service
        self._clock = clock
        self._entries: dict[str, TzMetadata] | None = None
        self.built_at: datetime | None = None

    @property
    def is_built(self) -> bool:
        return self._entries is not None

    def build(self) -> dict[str, TzMetadata]:
        if self._entries is not None:
            return self._entries
        now = self._clock()
        entries = {
            tz_id: TzMetadata(
                abbreviation=self._service.short_name(now, tz_id),
                offset=self._service.long_offset(now, tz_id),
            )
            for tz_id in self._zones
        }
        logger.debug("Built metadata cache for %d zones at %s", len(entries), now)
        self._entries = entries
        self.built_at = now
        return entries

    def get(self, tz_id: str) -> TzMetadata | None:
        return self.build().get(tz_id)


# -----------------------------
# tzdata country mapping
# -----------------------------

def _tzdata_dirs() -> list[str]:
    dirs = list(zoneinfo.TZPATH)
    try:
        dirs.append(str(resources.files("tzdata") / "zoneinfo"))
    except ModuleNotFoundError:
        pass
    return dirs


def _read_tab(path: str) -> list[list[str]]:
    rows: list[list[str]] = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            if not line.strip() or line.startswith("#"):
                continue
            rows.append(line.rstrip("\n").split("\t"))
    return rows


def load_country_names(zones: set[str]) -> dict[str, str]:
    """Map each zone id to the name of the first country listed for it."""
    for base in _tzdata_dirs():
        iso_path = os.path.join(base, "iso3166.tab")
        zone_path = os.path.join(base, "zone1970.tab")
        if not os.path.exists(zone_path):
            zone_path = os.path.join(base, "zone.tab")
        if not (os.path.exists(iso_path) and os.path.exists(zone_path)):
            continue
        try:
            iso_map = {parts[0]: parts[1] for parts in _read_tab(iso_path) if len(parts) >= 2}
            mapping: dict[str, str] = {}
            for parts in _read_tab(zone_path):
                if len(parts) < 3 or parts[2] not in zones:
                    continue
                cc = parts[0].split(",")[0]
                mapping.setdefault(parts[2], iso_map.get(cc, cc))
        except OSError as exc:
            logger.warning("Failed to read tzdata tables in %s: %s", base, exc)
            continue
        if mapping:
            return mapping
    logger.warning("No country/timezone mappings found")
    return {}


# -----------------------------
# Catalog
# -----------------------------

class TimezoneCatalog:
    def __init__(
        self,
        service: CivilTimeService | None = None,
        zones: Iterable[str] | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.service = service or ZoneInfoCivilTimeService()
        self.clock = clock
        source = zoneinfo.available_timezones() if zones is None else zones
        self.ids: tuple[str, ...] = tuple(sorted(set(source)))
        self._members = frozenset(self.ids)
        self.cache = MetadataCache(self.ids, self.service, clock)
        self._countries: dict[str, str] | None = None

    def __contains__(self, tz_id: object) -> bool:
        return isinstance(tz_id, str) and tz_id in self._members

    def __iter__(self) -> Iterator[str]:
        return iter(self.ids)

    def __len__(self) -> int:
        return len(self.ids)

    def is_valid(self, tz_id: object) -> bool:
        return tz_id in self

    def require(self, tz_id: str) -> str:
        if tz_id not in self:
            raise InvalidTimezoneError(tz_id)
        return tz_id

    def warm(self) -> None:
        """Build the metadata cache now instead of on the first search."""
        self.cache.build()

    def abbreviation(self, tz_id: str, instant: datetime | None = None) -> str:
        known = ABBREVIATION_BY_ZONE.get(tz_id)
        if known:
            return known
        return self.service.short_name(instant or self.clock(), tz_id)

    def metadata(self, tz_id: str, instant: datetime | None = None) -> TzMetadata:
        when = instant or self.clock()
        return TzMetadata(
            abbreviation=self.abbreviation(tz_id, when),
            offset=self.service.long_offset(when, tz_id),
        )

    def country_of(self, tz_id: str) -> str | None:
        if self._countries is None:
            self._countries = load_country_names(set(self.ids))
        return self._countries.get(tz_id)

    def info(self, tz_id: str, instant: datetime | None = None) -> TimezoneInfo:
        meta = self.metadata(tz_id, instant)
        return TimezoneInfo(
            id=tz_id,
            label=city_name(tz_id),
            region=region(tz_id),
            offset=meta.offset,
            abbreviation=meta.abbreviation,
            country=self.country_of(tz_id),
        )
