"""JSON documents for reviewing a reconciled zoo list."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, NotRequired, TypedDict

from ukzoos.domain.animals import count_by_category
from ukzoos.domain.reconciliation import count_by_source

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

    from ukzoos.domain.model import Animal, Zoo

log = getLogger(__name__)


class AnimalRecord(TypedDict):
    commonName: str
    category: str
    funFacts: list[str]
    confidence: int
    scientificName: NotRequired[str]
    exhibitArea: NotRequired[str]


class ZooRecord(TypedDict):
    name: str
    country: str
    sources: list[str]
    city: NotRequired[str]
    county: NotRequired[str]
    website: NotRequired[str]
    wikiUrl: NotRequired[str]
    latitude: NotRequired[float]
    longitude: NotRequired[float]
    animals: NotRequired[list[AnimalRecord]]


class ExportStats(TypedDict):
    total_zoos: int
    zoos_with_coordinates: int
    zoos_with_homepage: int
    sources: dict[str, int]
    total_animals: NotRequired[int]
    average_animals_per_zoo: NotRequired[int]
    animal_categories: NotRequired[dict[str, int]]


class ExportDocument(TypedDict):
    generated_at: str
    stats: ExportStats
    zoos: list[ZooRecord]


class ZoosOnlyDocument(TypedDict):
    generated_at: str
    count: int
    zoos: list[ZooRecord]


def serialize_zoo(zoo: Zoo) -> ZooRecord:
    """Flatten a zoo into the scraper's output shape; unset fields are omitted."""

    record: ZooRecord = {
        "name": zoo.name,
        "country": zoo.country,
        "sources": sorted(tag.value for tag in zoo.sources),
    }
    if zoo.locality:
        record["city"] = zoo.locality
    if zoo.region:
        record["county"] = zoo.region
    if zoo.homepage:
        record["website"] = zoo.homepage
    if zoo.external_ref:
        record["wikiUrl"] = zoo.external_ref
    if zoo.coordinates is not None:
        record["latitude"] = zoo.coordinates.lat
        record["longitude"] = zoo.coordinates.lon
    return record


def serialize_animal(animal: Animal) -> AnimalRecord:
    record: AnimalRecord = {
        "commonName": animal.common_name,
        "category": animal.category.value,
        "funFacts": list(animal.fun_facts),
        "confidence": animal.confidence,
    }
    if animal.scientific_name:
        record["scientificName"] = animal.scientific_name
    if animal.exhibit_area:
        record["exhibitArea"] = animal.exhibit_area
    return record


def _timestamp(generated_at: datetime | None) -> str:
    moment = generated_at or datetime.now(UTC)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC).isoformat()


def build_export(
    zoos: Sequence[Zoo],
    *,
    animals: Mapping[str, Sequence[Animal]] | None = None,
    generated_at: datetime | None = None,
) -> ExportDocument:
    """Full review document; zoos keep the order they are given in.

    With ``animals`` (lists keyed by zoo name) every zoo carries an
    ``animals`` list, empty when nothing was found, and the stats gain
    animal totals.
    """

    stats: ExportStats = {
        "total_zoos": len(zoos),
        "zoos_with_coordinates": sum(1 for zoo in zoos if zoo.has_coordinates),
        "zoos_with_homepage": sum(1 for zoo in zoos if zoo.has_homepage),
        "sources": {tag.value: count for tag, count in count_by_source(zoos).items()},
    }
    records = [serialize_zoo(zoo) for zoo in zoos]

    if animals is not None:
        per_zoo = [animals.get(zoo.name, ()) for zoo in zoos]
        for found, record in zip(per_zoo, records, strict=True):
            record["animals"] = [serialize_animal(animal) for animal in found]
        total = sum(len(found) for found in per_zoo)
        stats["total_animals"] = total
        stats["average_animals_per_zoo"] = round(total / len(zoos)) if zoos else 0
        stats["animal_categories"] = {
            category.value: count for category, count in count_by_category(per_zoo).items()
        }

    return {"generated_at": _timestamp(generated_at), "stats": stats, "zoos": records}


def build_zoos_only(
    zoos: Sequence[Zoo],
    *,
    generated_at: datetime | None = None,
) -> ZoosOnlyDocument:
    ordered = sorted(zoos, key=lambda zoo: zoo.name.casefold())
    return {
        "generated_at": _timestamp(generated_at),
        "count": len(ordered),
        "zoos": [serialize_zoo(zoo) for zoo in ordered],
    }


def _write_document(document: ExportDocument | ZoosOnlyDocument, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def write_export(
    zoos: Sequence[Zoo],
    path: Path,
    *,
    animals: Mapping[str, Sequence[Animal]] | None = None,
    generated_at: datetime | None = None,
) -> ExportDocument:
    document = build_export(zoos, animals=animals, generated_at=generated_at)
    _write_document(document, path)
    stats = document["stats"]
    log.info(
        "Exported %s zoos to %s (%s with coordinates, %s with homepage)",
        stats["total_zoos"],
        path,
        stats["zoos_with_coordinates"],
        stats["zoos_with_homepage"],
    )
    if "total_animals" in stats:
        log.info(
            "Exported %s animals (%s per zoo on average)",
            stats["total_animals"],
            stats["average_animals_per_zoo"],
        )
    return document


def write_zoos_only(
    zoos: Sequence[Zoo],
    path: Path,
    *,
    generated_at: datetime | None = None,
) -> ZoosOnlyDocument:
    document = build_zoos_only(zoos, generated_at=generated_at)
    _write_document(document, path)
    log.info("Exported %s zoos to %s", document["count"], path)
    return document
