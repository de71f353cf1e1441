"""Build geocoding queries for canonical zoos and apply the results."""

from __future__ import annotations

import re
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ukzoos.domain.model import Zoo
    from ukzoos.domain.ports.geocoding import Geocoder

log = getLogger(__name__)

COUNTRY_SUFFIX: Final[str] = "United Kingdom"

# Ordered: longer, more specific phrases first.
_PLACE_KEYWORDS: Final[tuple[str, ...]] = (
    "Seal Sanctuary and Wildlife Centre",
    "Wild Animal Park",
    "Safari and Adventure Park",
    "Wildlife Conservation Park",
    "Wildlife Park",
    "Wildlife Centre",
    "Wildlife Center",
    "Safari Park",
    "Animal Park",
    "Bird Park",
    "Nature Reserve",
    "Seal Sanctuary",
    "Wildlife Sanctuary",
    "Sea Life",
    "Aquarium",
    "Zoo",
)
_NOT_PLACES: Final[frozenset[str]] = frozenset(
    {"the", "wild", "national", "international", "royal", "manor house"}
)

_SIMPLIFY_RULES: Final[tuple[tuple[re.Pattern[str], str], ...]] = (
    (re.compile(r"^RZSS\s*[-–]\s*", re.IGNORECASE), ""),
    (re.compile(r"^ZSL\s*", re.IGNORECASE), ""),
    (re.compile(r"^Wild Planet Trust\s*[-–]\s*", re.IGNORECASE), ""),
    (re.compile(r"^WWT\s*", re.IGNORECASE), ""),
    (re.compile(r"^SEA LIFE\s*(Centre)?\s*", re.IGNORECASE), "Sea Life "),
    (re.compile(r"\s*[-–]\s*National Zoological Society of Wales$", re.IGNORECASE), ""),
    (re.compile(r"\s*Zoological (Society|Gardens?|Park|Reserve)$", re.IGNORECASE), " Zoo"),
    (re.compile(r"\s*Wildlife (Conservation )?Trust$", re.IGNORECASE), ""),
    (re.compile(r"\s*Conservation Park$", re.IGNORECASE), ""),
    (re.compile(r"\s*\(.*?\)$"), ""),
    (re.compile(r"\s*(Centre|Center)$", re.IGNORECASE), ""),
)


@dataclass(slots=True)
class GeocodeReport:
    attempted: int = 0
    found: int = 0
    already_located: int = 0

    @property
    def failed(self) -> int:
        return self.attempted - self.found


def simplify_zoo_name(name: str) -> str:
    """Drop operator prefixes and institutional suffixes that confuse geocoders."""

    text = name
    for pattern, replacement in _SIMPLIFY_RULES:
        text = pattern.sub(replacement, text)
    return " ".join(text.split())


def extract_location_from_name(name: str) -> str | None:
    """Return the place name preceding a descriptor, e.g. "Mablethorpe Seal Sanctuary"."""

    for keyword in _PLACE_KEYWORDS:
        match = re.match(rf"^(.+?)\s+{re.escape(keyword)}", name, re.IGNORECASE)
        if match is None:
            continue
        location = match.group(1).strip()
        if len(location) > 3 and location.casefold() not in _NOT_PLACES:
            return location
    return None


def build_geocode_queries(zoo: Zoo) -> tuple[str, ...]:
    """Query variants for one zoo, most specific first, without duplicates."""

    name = zoo.name
    simplified = simplify_zoo_name(name)
    differs = simplified != name
    extracted = extract_location_from_name(name)

    candidates: list[str | None] = [
        f"{name}, {zoo.locality}" if zoo.locality else None,
        f"{simplified}, {zoo.locality}" if zoo.locality and differs else None,
        f"{name}, {zoo.region}" if zoo.region else None,
        f"{simplified}, {zoo.region}" if zoo.region and differs else None,
        simplified,
        name if differs else None,
        f"{simplified} Zoo" if "zoo" not in name.casefold() else None,
        extracted,
        # Zoos are large; landing in the right town is acceptable.
        zoo.locality,
        zoo.region,
    ]

    queries: list[str] = []
    for candidate in candidates:
        if not candidate:
            continue
        query = f"{candidate}, {COUNTRY_SUFFIX}"
        if query not in queries:
            queries.append(query)
    return tuple(queries)


def geocode_missing(zoos: Sequence[Zoo], geocoder: Geocoder) -> GeocodeReport:
    """Look up coordinates for zoos that have none; existing coordinates are kept."""

    report = GeocodeReport()
    pending = [zoo for zoo in zoos if not zoo.has_coordinates]
    report.already_located = len(zoos) - len(pending)
    report.attempted = len(pending)
    if not pending:
        return report

    log.info(
        "Geocoding %s zoos (%s already have coordinates)",
        report.attempted,
        report.already_located,
    )
    locations = geocoder([build_geocode_queries(zoo) for zoo in pending])
    for zoo, location in zip(pending, locations, strict=True):
        if location is None:
            log.warning("Could not geocode %s", zoo.name)
            continue
        zoo.coordinates = location.coordinates
        report.found += 1

    log.info("Geocoded %s/%s zoos", report.found, report.attempted)
    return report
