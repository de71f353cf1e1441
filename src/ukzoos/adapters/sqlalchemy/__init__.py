"""SQLAlchemy adapter for the web app's zoo and animal tables."""

from __future__ import annotations

from .statements import (
    AnimalRow,
    WriteResult,
    ZooRow,
    animal_id,
    build_animal_rows,
    build_zoo_rows,
    clear_uk_animals_statement,
    clear_uk_zoos_statement,
    generate_sql,
    insert_animal_statement,
    insert_zoo_statement,
    write_zoos,
    zoo_id,
)
from .tables import animals_table, create_zoo_tables, metadata, zoos_table

__all__ = [
    "AnimalRow",
    "WriteResult",
    "ZooRow",
    "animal_id",
    "animals_table",
    "build_animal_rows",
    "build_zoo_rows",
    "clear_uk_animals_statement",
    "clear_uk_zoos_statement",
    "create_zoo_tables",
    "generate_sql",
    "insert_animal_statement",
    "insert_zoo_statement",
    "metadata",
    "write_zoos",
    "zoo_id",
    "zoos_table",
]
