"""Public interface for the scraper output reader."""

from __future__ import annotations

from .reader import (
    FileZooSource,
    SourceReadError,
    collect_raw_zoos,
    load_raw_zoos,
    read_source_file,
)
from .schema import RawZooPayload, SourceDocument
from .translator import clean_zoo_name, is_irish_location, translate_payload

__all__ = [
    "FileZooSource",
    "RawZooPayload",
    "SourceDocument",
    "SourceReadError",
    "clean_zoo_name",
    "collect_raw_zoos",
    "is_irish_location",
    "load_raw_zoos",
    "read_source_file",
    "translate_payload",
]
