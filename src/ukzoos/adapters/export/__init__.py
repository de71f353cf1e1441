"""File exports of the reconciled zoo list."""

from __future__ import annotations

from .json import (
    AnimalRecord,
    ExportDocument,
    ExportStats,
    ZooRecord,
    ZoosOnlyDocument,
    build_export,
    build_zoos_only,
    serialize_animal,
    serialize_zoo,
    write_export,
    write_zoos_only,
)

__all__ = [
    "AnimalRecord",
    "ExportDocument",
    "ExportStats",
    "ZooRecord",
    "ZoosOnlyDocument",
    "build_export",
    "build_zoos_only",
    "serialize_animal",
    "serialize_zoo",
    "write_export",
    "write_zoos_only",
]
