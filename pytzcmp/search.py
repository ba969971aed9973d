"""
Free-text zone search.

Results come in three tiers: exact abbreviation hits (with their city
aliases), partial city-alias hits, then a scan of the catalog by city name,
cached abbreviation and cached offset. Earlier tiers always rank first.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from .aliases import ABBREVIATIONS, ALIASES_BY_ZONE, CITY_ALIASES, format_alias
from .catalog import TimezoneCatalog

logger = logging.getLogger(__name__)

MAX_RESULTS = 20


@dataclass(frozen=True)
class SearchResult:
    id: str
    label: str | None = None


def search(
    catalog: TimezoneCatalog,
    query: str,
    exclude: Iterable[str] = (),
) -> list[SearchResult]:
    filt = query.strip().lower()
    if not filt:
        return []

    excluded = set(exclude)
    results: list[SearchResult] = []
    seen: set[tuple[str, str | None]] = set()

    def add(tz_id: str, label: str | None = None) -> None:
        key = (tz_id, label)
        if key in seen:
            return
        seen.add(key)
        results.append(SearchResult(tz_id, label))

    def addable(tz_id: str) -> bool:
        return tz_id not in excluded and tz_id in catalog

    for tz_id in ABBREVIATIONS.get(filt, ()):
        if not addable(tz_id):
            continue
        add(tz_id)
        for alias in ALIASES_BY_ZONE.get(tz_id, ()):
            add(tz_id, format_alias(alias))

    alias_filt = filt.replace(" ", "_")
    for alias, tz_id in CITY_ALIASES.items():
        if alias_filt in alias and addable(tz_id):
            add(tz_id, format_alias(alias))

    prioritized = {result.id for result in results}
    for tz_id in catalog.ids:
        if tz_id in excluded or tz_id in prioritized:
            continue
        if _scan_matches(catalog, tz_id, filt):
            add(tz_id)

    logger.debug("Search %r matched %d zones", query, len(results))
    return results[:MAX_RESULTS]


def _scan_matches(catalog: TimezoneCatalog, tz_id: str, filt: str) -> bool:
    leaf = tz_id.split("/")[-1].replace("_", " ").lower()
    if filt in leaf:
        return True
    meta = catalog.cache.get(tz_id)
    if meta is None:
        return False
    if meta.abbreviation.lower() == filt:
        return True
    return filt in meta.offset.lower()
