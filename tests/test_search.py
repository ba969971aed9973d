"""Tests for ranked zone search."""

from __future__ import annotations

import pytest
from conftest import FIXED_NOW, FakeCivilTimeService

from pytzcmp.aliases import ABBREVIATIONS
from pytzcmp.catalog import TimezoneCatalog
from pytzcmp.search import MAX_RESULTS, SearchResult, search


@pytest.mark.unit
def test_abbreviation_puts_zone_first(catalog: TimezoneCatalog) -> None:
    results = search(catalog, "jst")
    assert results[0] == SearchResult("Asia/Tokyo")
    assert results[1] == SearchResult("Asia/Tokyo", "Osaka")
    assert results[:7] == [
        SearchResult("Asia/Tokyo"),
        SearchResult("Asia/Tokyo", "Osaka"),
        SearchResult("Asia/Tokyo", "Kyoto"),
        SearchResult("Asia/Tokyo", "Nagoya"),
        SearchResult("Asia/Tokyo", "Fukuoka"),
        SearchResult("Asia/Tokyo", "Sapporo"),
        SearchResult("Asia/Tokyo", "Yokohama"),
    ]


@pytest.mark.unit
def test_abbreviation_is_case_insensitive(catalog: TimezoneCatalog) -> None:
    assert search(catalog, "  JST ")[0] == SearchResult("Asia/Tokyo")


@pytest.mark.unit
def test_partial_alias_match(catalog: TimezoneCatalog) -> None:
    assert SearchResult("Europe/Madrid", "Barcelona") in search(catalog, "barce")


@pytest.mark.unit
def test_alias_match_converts_spaces(catalog: TimezoneCatalog) -> None:
    assert search(catalog, "salt lake")[0] == SearchResult("America/Denver", "Salt Lake City")
    assert search(catalog, "Cape Town")[0] == SearchResult("Africa/Johannesburg", "Cape Town")


@pytest.mark.unit
def test_several_aliases_of_one_zone(catalog: TimezoneCatalog) -> None:
    results = search(catalog, "san")
    assert results[:4] == [
        SearchResult("America/Los_Angeles", "San Francisco"),
        SearchResult("America/Los_Angeles", "San Diego"),
        SearchResult("America/Chicago", "San Antonio"),
        SearchResult("Asia/Seoul", "Busan"),
    ]
    assert all(result.label is None for result in results[4:])


@pytest.mark.unit
def test_no_match(catalog: TimezoneCatalog) -> None:
    assert search(catalog, "xyzzy-no-match") == []


@pytest.mark.unit
@pytest.mark.parametrize("query", ["", "   ", "\t"])
def test_blank_query(catalog: TimezoneCatalog, query: str) -> None:
    assert search(catalog, query) == []


@pytest.mark.unit
def test_catalog_scan_matches_leaf_name(catalog: TimezoneCatalog) -> None:
    assert search(catalog, "tokyo") == [SearchResult("Asia/Tokyo")]
    assert SearchResult("America/New_York") in search(catalog, "new york")


@pytest.mark.unit
def test_catalog_scan_ignores_region(catalog: TimezoneCatalog) -> None:
    assert search(catalog, "europe") == []


@pytest.mark.unit
def test_catalog_scan_matches_offset(catalog: TimezoneCatalog) -> None:
    results = search(catalog, "GMT+09:00")
    assert SearchResult("Asia/Tokyo") in results
    assert SearchResult("Asia/Seoul") in results
    assert all(result.label is None for result in results)


@pytest.mark.unit
def test_catalog_scan_matches_cached_abbreviation(fake_service: FakeCivilTimeService) -> None:
    small = TimezoneCatalog(fake_service, zones=["Pacific/Test", "Etc/Sample"], clock=lambda: FIXED_NOW)
    assert search(small, "zzt") == [SearchResult("Pacific/Test")]
    assert search(small, "-02:00") == [SearchResult("Etc/Sample")]


@pytest.mark.unit
def test_exclude_applies_to_every_tier(catalog: TimezoneCatalog) -> None:
    results = search(catalog, "jst", exclude=["Asia/Tokyo"])
    assert all(result.id != "Asia/Tokyo" for result in results)
    assert search(catalog, "barce", exclude={"Europe/Madrid"}) == []
    assert search(catalog, "tokyo", exclude=("Asia/Tokyo",)) == []


@pytest.mark.unit
def test_results_are_capped_and_earlier_tiers_win(catalog: TimezoneCatalog) -> None:
    results = search(catalog, "cet")
    assert len(results) == MAX_RESULTS
    assert results[0] == SearchResult("Europe/Paris")
    assert {result.id for result in results} <= set(ABBREVIATIONS["cet"])

    assert len(search(catalog, "a")) == MAX_RESULTS


@pytest.mark.unit
@pytest.mark.parametrize("query", ["jst", "cst", "ist", "gulf", "san", "gmt", "a"])
def test_results_are_unique(catalog: TimezoneCatalog, query: str) -> None:
    results = search(catalog, query)
    assert len(results) == len(set(results))
    assert all(result.id in catalog for result in results)


@pytest.mark.unit
def test_search_is_repeatable(catalog: TimezoneCatalog) -> None:
    assert search(catalog, "mum") == search(catalog, "mum")
    assert search(catalog, "mum")[0] == SearchResult("Asia/Calcutta", "Mumbai")
