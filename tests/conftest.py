from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from ukzoos.domain.model import SourceTag

if TYPE_CHECKING:
    from pathlib import Path

MATCH_POLICY_VARS = (
    "UKZOOS_MIN_CONTAINMENT_LENGTH",
    "UKZOOS_MAX_EDIT_DISTANCE",
    "UKZOOS_EDIT_DISTANCE_MAX_LENGTH",
    "UKZOOS_MIN_FIRST_WORD_LENGTH",
)

WIKIPEDIA_ZOOS = [
    {"name": "Chester Zoo[1]", "city": "Chester"},
    {
        "name": "ZSL London Zoo",
        "city": "London",
        "wikiUrl": "https://en.wikipedia.org/wiki/London_Zoo",
    },
    {"name": "Drayton Manor"},
]
BIAZA_ZOOS = [
    {
        "name": "Chester Zoo",
        "county": "Cheshire",
        "website": "https://www.chesterzoo.org",
        "latitude": 53.227,
        "longitude": -2.884,
    },
    {"name": "Manor Wildlife Park", "county": "Pembrokeshire"},
    {"name": "Dublin Zoo", "county": "Dublin"},
]
GOOGLE_ZOOS = [
    {"name": "London Zoo", "website": "https://zsl.org"},
    {"name": ""},
]


@pytest.fixture(autouse=True)
def _default_match_policy(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in MATCH_POLICY_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def source_files(tmp_path: Path) -> dict[SourceTag, Path]:
    documents = {
        SourceTag.WIKIPEDIA: WIKIPEDIA_ZOOS,
        SourceTag.BIAZA: {"zoos": BIAZA_ZOOS},
        SourceTag.GOOGLE: GOOGLE_ZOOS,
    }
    paths: dict[SourceTag, Path] = {}
    for tag, document in documents.items():
        path = tmp_path / "sources" / f"{tag}.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(document), encoding="utf-8")
        paths[tag] = path
    return paths
