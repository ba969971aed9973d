from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

import pytest

from pytzcmp import catalog as catalog_module
from pytzcmp.catalog import TimezoneCatalog
from pytzcmp.civil import CivilTime
from pytzcmp.codec import StateCodec
from pytzcmp.conversion import TimeConverter

FIXED_NOW = datetime(2024, 1, 15, 12, 0, tzinfo=UTC)
LOCAL_ZONE = "Europe/Berlin"


@pytest.fixture(autouse=True)
def settings_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    Points the settings file at a temp path so tests never read or write
    the real ~/.pytzcmp.json.
    """
    path = tmp_path / "pytzcmp.json"
    monkeypatch.setenv("PYTZCMP_CONFIG", str(path))
    return path


@pytest.fixture
def country_tables(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Small iso3166/zone1970 tables standing in for the installed tzdata ones."""
    tables = tmp_path / "tzdata"
    tables.mkdir()
    (tables / "iso3166.tab").write_text("# comment\nJP\tJapan\nES\tSpain\nUS\tUnited States\n", encoding="utf-8")
    (tables / "zone1970.tab").write_text(
        "# comment\n"
        "JP\t+353916+1394441\tAsia/Tokyo\n"
        "ES,AD\t+4024-00341\tEurope/Madrid\n"
        "US\t+404251-0740023\tAmerica/New_York\n",
        encoding="utf-8",
    )
    monkeypatch.setattr(catalog_module, "_tzdata_dirs", lambda: [str(tables)])
    return tables


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def converter() -> TimeConverter:
    return TimeConverter()


@pytest.fixture
def catalog(converter: TimeConverter) -> TimezoneCatalog:
    """Real zoneinfo-backed catalog whose "now" is frozen at FIXED_NOW."""
    return TimezoneCatalog(converter.service, clock=lambda: FIXED_NOW)


@pytest.fixture
def codec(catalog: TimezoneCatalog) -> StateCodec:
    return StateCodec(catalog, LOCAL_ZONE)


class FakeCivilTimeService:
    """Canned answers keyed by zone id; counts every call."""

    def __init__(
        self,
        names: dict[str, str] | None = None,
        offsets: dict[str, str] | None = None,
        civil: CivilTime | None = None,
    ) -> None:
        self.names = names or {}
        self.offsets = offsets or {}
        self.civil = civil
        self.calls: list[tuple[str, str]] = []

    def civil_fields_of(self, instant: datetime, tz_id: str) -> CivilTime:
        self.calls.append(("civil", tz_id))
        assert self.civil is not None
        return self.civil

    def short_name(self, instant: datetime, tz_id: str) -> str:
        self.calls.append(("short", tz_id))
        return self.names.get(tz_id, "")

    def long_offset(self, instant: datetime, tz_id: str) -> str:
        self.calls.append(("offset", tz_id))
        return self.offsets.get(tz_id, "GMT")


@pytest.fixture
def fake_service() -> FakeCivilTimeService:
    return FakeCivilTimeService(
        names={"Asia/Tokyo": "GMT+9", "Pacific/Test": "ZZT", "Etc/Sample": "SMP"},
        offsets={"Asia/Tokyo": "GMT+09:00", "Pacific/Test": "GMT+13:45", "Etc/Sample": "GMT-02:00"},
    )
