from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from ukzoos.adapters.export import build_export, serialize_zoo, write_export, write_zoos_only
from ukzoos.domain.model import Animal, AnimalCategory, Coordinates, SourceTag, Zoo

if TYPE_CHECKING:
    from pathlib import Path

GENERATED_AT = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)


def _zoos() -> list[Zoo]:
    return [
        Zoo(
            name="Chester Zoo",
            sources={SourceTag.WIKIPEDIA, SourceTag.BIAZA},
            locality="Chester",
            region="Cheshire",
            homepage="https://www.chesterzoo.org",
            coordinates=Coordinates(lat=53.227, lon=-2.884),
        ),
        Zoo(name="alpaca farm", sources={SourceTag.GOOGLE}),
    ]


def test_serialize_zoo_flattens_coordinates_and_sorts_sources() -> None:
    record = serialize_zoo(_zoos()[0])

    assert record == {
        "name": "Chester Zoo",
        "country": "United Kingdom",
        "sources": ["biaza", "wikipedia"],
        "city": "Chester",
        "county": "Cheshire",
        "website": "https://www.chesterzoo.org",
        "latitude": 53.227,
        "longitude": -2.884,
    }


def test_serialize_zoo_omits_unset_fields() -> None:
    record = serialize_zoo(_zoos()[1])

    assert set(record) == {"name", "country", "sources"}


def test_build_export_reports_stats() -> None:
    document = build_export(_zoos(), generated_at=GENERATED_AT)

    assert document["generated_at"] == "2025-03-01T12:00:00+00:00"
    assert document["stats"] == {
        "total_zoos": 2,
        "zoos_with_coordinates": 1,
        "zoos_with_homepage": 1,
        "sources": {"biaza": 1, "google": 1, "wikipedia": 1},
    }
    assert [zoo["name"] for zoo in document["zoos"]] == ["Chester Zoo", "alpaca farm"]


def test_write_export_creates_parent_directories(tmp_path: Path) -> None:
    path = tmp_path / "out" / "uk-zoos.json"

    write_export(_zoos(), path, generated_at=GENERATED_AT)

    loaded = json.loads(path.read_text(encoding="utf-8"))
    assert loaded["stats"]["total_zoos"] == 2
    assert loaded["zoos"][0]["latitude"] == 53.227


def test_write_zoos_only_sorts_by_name(tmp_path: Path) -> None:
    path = tmp_path / "zoos.json"

    document = write_zoos_only(_zoos(), path, generated_at=GENERATED_AT)

    loaded = json.loads(path.read_text(encoding="utf-8"))
    assert loaded == json.loads(json.dumps(document))
    assert loaded["count"] == 2
    assert [zoo["name"] for zoo in loaded["zoos"]] == ["alpaca farm", "Chester Zoo"]
    assert "stats" not in loaded


def test_build_export_with_animals_adds_lists_and_totals() -> None:
    lemur = Animal(
        common_name="Ring-tailed Lemur",
        category=AnimalCategory.MAMMALS,
        scientific_name="Lemur catta",
        fun_facts=("They sunbathe",),
    )
    puffin = Animal(common_name="Puffin", category=AnimalCategory.BIRDS, exhibit_area="Coast")
    otter = Animal(common_name="Otter", category=AnimalCategory.MAMMALS)

    document = build_export(
        _zoos(),
        animals={"Chester Zoo": [lemur, puffin, otter], "Elsewhere": [otter]},
        generated_at=GENERATED_AT,
    )

    stats = document["stats"]
    assert stats.get("total_animals") == 3
    assert stats.get("average_animals_per_zoo") == 2
    assert stats.get("animal_categories") == {"Mammals": 2, "Birds": 1}
    chester, alpaca = document["zoos"]
    assert chester.get("animals", [])[0] == {
        "commonName": "Ring-tailed Lemur",
        "category": "Mammals",
        "funFacts": ["They sunbathe"],
        "confidence": 85,
        "scientificName": "Lemur catta",
    }
    assert chester.get("animals", [])[1].get("exhibitArea") == "Coast"
    assert alpaca.get("animals") == []
