"""
Curated lookup tables for search.

ABBREVIATIONS lists standard-time abbreviations before their DST variants, so
the first-wins pass that builds ABBREVIATION_BY_ZONE prefers the standard one.
"""

from __future__ import annotations

_CET_ZONES = (
    "Europe/Paris",
    "Europe/Berlin",
    "Europe/Madrid",
    "Europe/Rome",
    "Europe/Amsterdam",
    "Europe/Brussels",
    "Europe/Vienna",
    "Europe/Warsaw",
    "Europe/Stockholm",
    "Europe/Zurich",
    "Europe/Oslo",
    "Europe/Copenhagen",
    "Europe/Prague",
    "Europe/Budapest",
    "Europe/Belgrade",
)

_EET_ZONES = (
    "Europe/Athens",
    "Europe/Helsinki",
    "Europe/Bucharest",
    "Europe/Sofia",
    "Europe/Vilnius",
    "Europe/Riga",
    "Europe/Tallinn",
)

# abbreviation (lowercase) -> zone ids, in preference order
ABBREVIATIONS: dict[str, tuple[str, ...]] = {
    "jst": ("Asia/Tokyo",),
    "kst": ("Asia/Seoul",),
    "cst": ("America/Chicago", "Asia/Shanghai"),
    "est": ("America/New_York",),
    "edt": ("America/New_York",),
    "cdt": ("America/Chicago",),
    "mst": ("America/Denver",),
    "mdt": ("America/Denver",),
    "pst": ("America/Los_Angeles",),
    "pdt": ("America/Los_Angeles",),
    "akst": ("America/Anchorage",),
    "akdt": ("America/Anchorage",),
    "hst": ("Pacific/Honolulu",),
    "cet": _CET_ZONES,
    "cest": _CET_ZONES,
    "eet": _EET_ZONES,
    "eest": _EET_ZONES,
    "wet": ("Europe/Lisbon", "Atlantic/Canary"),
    "west": ("Europe/Lisbon", "Atlantic/Canary"),
    "gmt": ("Europe/London", "Europe/Dublin"),
    "bst": ("Europe/London",),
    "ist": ("Asia/Calcutta",),
    "ict": ("Asia/Bangkok",),
    "wib": ("Asia/Jakarta",),
    "wit": ("Asia/Jayapura",),
    "wita": ("Asia/Makassar",),
    "sgt": ("Asia/Singapore",),
    "hkt": ("Asia/Hong_Kong",),
    "pht": ("Asia/Manila",),
    "myt": ("Asia/Kuala_Lumpur",),
    "aest": ("Australia/Sydney",),
    "aedt": ("Australia/Sydney",),
    "acst": ("Australia/Adelaide",),
    "acdt": ("Australia/Adelaide",),
    "awst": ("Australia/Perth",),
    "nzst": ("Pacific/Auckland",),
    "nzdt": ("Pacific/Auckland",),
    "brt": ("America/Sao_Paulo",),
    "art": ("America/Buenos_Aires",),
    "cat": ("Africa/Nairobi",),
    "eat": ("Africa/Nairobi",),
    "wat": ("Africa/Lagos",),
    "sast": ("Africa/Johannesburg",),
    "msk": ("Europe/Moscow",),
    "trt": ("Europe/Istanbul",),
    "gulf": ("Asia/Dubai",),
    "pkt": ("Asia/Karachi",),
    "npt": ("Asia/Katmandu",),
}

# Cities people search for that are not zone leaf names.
# Keys are lowercase with underscores for spaces.
CITY_ALIASES: dict[str, str] = {
    # Europe
    "barcelona": "Europe/Madrid",
    "valencia": "Europe/Madrid",
    "seville": "Europe/Madrid",
    "milan": "Europe/Rome",
    "naples": "Europe/Rome",
    "florence": "Europe/Rome",
    "venice": "Europe/Rome",
    "turin": "Europe/Rome",
    "munich": "Europe/Berlin",
    "hamburg": "Europe/Berlin",
    "frankfurt": "Europe/Berlin",
    "cologne": "Europe/Berlin",
    "dusseldorf": "Europe/Berlin",
    "stuttgart": "Europe/Berlin",
    "lyon": "Europe/Paris",
    "marseille": "Europe/Paris",
    "nice": "Europe/Paris",
    "toulouse": "Europe/Paris",
    "manchester": "Europe/London",
    "birmingham": "Europe/London",
    "edinburgh": "Europe/London",
    "glasgow": "Europe/London",
    "liverpool": "Europe/London",
    "rotterdam": "Europe/Amsterdam",
    "antwerp": "Europe/Brussels",
    "geneva": "Europe/Zurich",
    "basel": "Europe/Zurich",
    "salzburg": "Europe/Vienna",
    "krakow": "Europe/Warsaw",
    "gothenburg": "Europe/Stockholm",
    "porto": "Europe/Lisbon",
    "st_petersburg": "Europe/Moscow",
    # Americas
    "san_francisco": "America/Los_Angeles",
    "seattle": "America/Los_Angeles",
    "portland": "America/Los_Angeles",
    "las_vegas": "America/Los_Angeles",
    "san_diego": "America/Los_Angeles",
    "miami": "America/New_York",
    "boston": "America/New_York",
    "washington": "America/New_York",
    "philadelphia": "America/New_York",
    "atlanta": "America/New_York",
    "houston": "America/Chicago",
    "dallas": "America/Chicago",
    "austin": "America/Chicago",
    "san_antonio": "America/Chicago",
    "minneapolis": "America/Chicago",
    "phoenix": "America/Phoenix",
    "salt_lake_city": "America/Denver",
    "montreal": "America/Toronto",
    "vancouver": "America/Vancouver",
    "calgary": "America/Edmonton",
    # Asia
    "osaka": "Asia/Tokyo",
    "kyoto": "Asia/Tokyo",
    "nagoya": "Asia/Tokyo",
    "fukuoka": "Asia/Tokyo",
    "sapporo": "Asia/Tokyo",
    "yokohama": "Asia/Tokyo",
    "busan": "Asia/Seoul",
    "beijing": "Asia/Shanghai",
    "guangzhou": "Asia/Shanghai",
    "shenzhen": "Asia/Shanghai",
    "chengdu": "Asia/Shanghai",
    "mumbai": "Asia/Calcutta",
    "delhi": "Asia/Calcutta",
    "bangalore": "Asia/Calcutta",
    "hyderabad": "Asia/Calcutta",
    "chennai": "Asia/Calcutta",
    "hanoi": "Asia/Ho_Chi_Minh",
    "phuket": "Asia/Bangkok",
    "bali": "Asia/Makassar",
    "penang": "Asia/Kuala_Lumpur",
    "cebu": "Asia/Manila",
    # Oceania
    "melbourne": "Australia/Melbourne",
    "brisbane": "Australia/Brisbane",
    "gold_coast": "Australia/Brisbane",
    "wellington": "Pacific/Auckland",
    # Africa
    "cairo": "Africa/Cairo",
    "cape_town": "Africa/Johannesburg",
    "durban": "Africa/Johannesburg",
    "casablanca": "Africa/Casablanca",
    "marrakech": "Africa/Casablanca",
    "accra": "Africa/Accra",
    "addis_ababa": "Africa/Addis_Ababa",
    "dar_es_salaam": "Africa/Dar_es_Salaam",
    # Middle East
    "dubai": "Asia/Dubai",
    "abu_dhabi": "Asia/Dubai",
    "doha": "Asia/Qatar",
    "riyadh": "Asia/Riyadh",
    "jeddah": "Asia/Riyadh",
    "tel_aviv": "Asia/Jerusalem",
    "beirut": "Asia/Beirut",
}


def _abbreviation_by_zone() -> dict[str, str]:
    found: dict[str, str] = {}
    for abbr, zones in ABBREVIATIONS.items():
        for zone in zones:
            found.setdefault(zone, abbr.upper())
    return found


def _aliases_by_zone() -> dict[str, tuple[str, ...]]:
    found: dict[str, list[str]] = {}
    for alias, zone in CITY_ALIASES.items():
        found.setdefault(zone, []).append(alias)
    return {zone: tuple(aliases) for zone, aliases in found.items()}


ABBREVIATION_BY_ZONE: dict[str, str] = _abbreviation_by_zone()
ALIASES_BY_ZONE: dict[str, tuple[str, ...]] = _aliases_by_zone()


def format_alias(alias: str) -> str:
    """st_petersburg -> St Petersburg"""
    words = alias.replace("_", " ").split(" ")
    return " ".join(word[:1].upper() + word[1:] for word in words)
