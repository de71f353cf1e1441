"""Insert reconciled zoos into the web app database, or render the SQL for it."""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, Final, TypeAlias, TypedDict

from sqlalchemy import Delete, Insert, delete, insert, select
from sqlalchemy.dialects import sqlite

from ukzoos.domain.model import DEFAULT_COUNTRY

from .tables import animals_table, zoos_table

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from sqlalchemy.engine import Engine
    from sqlalchemy.sql import ClauseElement

    from ukzoos.domain.model import Animal, Zoo

log = getLogger(__name__)

ZOO_ID_NAMESPACE: Final[uuid.UUID] = uuid.UUID("6f1c2a0e-9f4b-5a52-8d0e-5b2f6c1d7e3a")

AnimalsByZoo: TypeAlias = "Mapping[str, Sequence[Animal]]"


class ZooRow(TypedDict):
    id: str
    name: str
    city: str | None
    country: str
    latitude: float | None
    longitude: float | None
    website_url: str | None
    animals_generated_at: str | None


class AnimalRow(TypedDict):
    id: str
    zoo_id: str
    common_name: str
    scientific_name: str | None
    category: str
    exhibit_area: str | None
    fun_fact: str | None


@dataclass(frozen=True, slots=True)
class WriteResult:
    zoos_written: int
    zoos_deleted: int = 0
    animals_written: int = 0


def zoo_id(name: str) -> str:
    """Stable row id for a zoo name, so re-imports produce the same ids."""

    return f"zoo-{uuid.uuid5(ZOO_ID_NAMESPACE, name.casefold())}"


def animal_id(zoo_row_id: str, common_name: str) -> str:
    return f"animal-{uuid.uuid5(ZOO_ID_NAMESPACE, f'{zoo_row_id}/{common_name.casefold()}')}"


def build_zoo_rows(
    zoos: Sequence[Zoo],
    *,
    animals: AnimalsByZoo | None = None,
    generated_at: datetime | None = None,
) -> list[ZooRow]:
    """One row per zoo; a repeated name gets a numbered id instead of a clash.

    ``animals_generated_at`` is only set for zoos that have animals.
    """

    moment = (generated_at or datetime.now(UTC)).isoformat()
    rows: list[ZooRow] = []
    used: set[str] = set()
    for zoo in zoos:
        row_id = zoo_id(zoo.name)
        copy = 1
        while row_id in used:
            copy += 1
            row_id = zoo_id(f"{zoo.name} #{copy}")
        used.add(row_id)
        has_animals = bool(_animals_for(animals, zoo))
        rows.append(
            {
                "id": row_id,
                "name": zoo.name,
                "city": zoo.locality,
                "country": zoo.country,
                "latitude": zoo.coordinates.lat if zoo.coordinates else None,
                "longitude": zoo.coordinates.lon if zoo.coordinates else None,
                "website_url": zoo.homepage,
                "animals_generated_at": moment if has_animals else None,
            }
        )
    return rows


def build_animal_rows(zoo_row_id: str, animals: Sequence[Animal]) -> list[AnimalRow]:
    return [
        {
            "id": animal_id(zoo_row_id, animal.common_name),
            "zoo_id": zoo_row_id,
            "common_name": animal.common_name,
            "scientific_name": animal.scientific_name,
            "category": animal.category.value,
            "exhibit_area": animal.exhibit_area,
            "fun_fact": json.dumps(list(animal.fun_facts)) if animal.fun_facts else None,
        }
        for animal in animals
    ]


def _animals_for(animals: AnimalsByZoo | None, zoo: Zoo) -> Sequence[Animal]:
    return animals.get(zoo.name, ()) if animals else ()


def clear_uk_animals_statement() -> Delete:
    uk_zoo_ids = select(zoos_table.c.id).where(zoos_table.c.country == DEFAULT_COUNTRY)
    return delete(animals_table).where(animals_table.c.zoo_id.in_(uk_zoo_ids))


def clear_uk_zoos_statement() -> Delete:
    return delete(zoos_table).where(zoos_table.c.country == DEFAULT_COUNTRY)


def insert_zoo_statement(row: ZooRow) -> Insert:
    return insert(zoos_table).values(**row)


def insert_animal_statement(row: AnimalRow) -> Insert:
    return insert(animals_table).values(**row)


def _render(statement: ClauseElement) -> str:
    compiled = statement.compile(
        dialect=sqlite.dialect(),
        compile_kwargs={"literal_binds": True},
    )
    return f"{compiled};"


def generate_sql(
    zoos: Sequence[Zoo],
    *,
    animals: AnimalsByZoo | None = None,
    clear_existing: bool = True,
    generated_at: datetime | None = None,
) -> str:
    """Render an import script for reviewing or applying by hand."""

    moment = generated_at or datetime.now(UTC)
    lines = [
        "-- UK zoo import",
        f"-- Generated at: {moment.isoformat()}",
        f"-- Zoos: {len(zoos)}",
        "",
    ]
    if clear_existing:
        lines += [
            "-- Clear existing UK zoos and their animals",
            _render(clear_uk_animals_statement()),
            _render(clear_uk_zoos_statement()),
            "",
        ]

    rows = build_zoo_rows(zoos, animals=animals, generated_at=moment)
    for zoo, row in zip(zoos, rows, strict=True):
        lines.append(f"-- {zoo.name} ({zoo.locality or 'Unknown city'})")
        lines.append(_render(insert_zoo_statement(row)))
        kept = _animals_for(animals, zoo)
        if kept:
            lines.append(f"-- Animals for {zoo.name}: {len(kept)}")
            lines.extend(
                _render(insert_animal_statement(animal_row))
                for animal_row in build_animal_rows(row["id"], kept)
            )
    return "\n".join(lines) + "\n"


def write_zoos(
    engine: Engine,
    zoos: Sequence[Zoo],
    *,
    animals: AnimalsByZoo | None = None,
    clear_existing: bool = True,
) -> WriteResult:
    """Replace the UK zoos (and their animals) in one transaction."""

    rows = build_zoo_rows(zoos, animals=animals)
    animal_rows = [
        animal_row
        for zoo, row in zip(zoos, rows, strict=True)
        for animal_row in build_animal_rows(row["id"], _animals_for(animals, zoo))
    ]
    deleted = 0
    with engine.begin() as connection:
        if clear_existing:
            # Without PRAGMA foreign_keys SQLite does not cascade.
            connection.execute(clear_uk_animals_statement())
            deleted = connection.execute(clear_uk_zoos_statement()).rowcount
        if rows:
            connection.execute(insert(zoos_table), rows)
        if animal_rows:
            connection.execute(insert(animals_table), animal_rows)

    log.info(
        "Wrote %s zoos and %s animals to the database (cleared %s zoos)",
        len(rows),
        len(animal_rows),
        deleted,
    )
    return WriteResult(
        zoos_written=len(rows),
        zoos_deleted=deleted,
        animals_written=len(animal_rows),
    )
