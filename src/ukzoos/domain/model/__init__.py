"""Zoo domain model."""

from __future__ import annotations

from .animal import Animal, RawAnimal
from .enums import SOURCE_ORDER, AnimalCategory, SourceTag
from .zoo import DEFAULT_COUNTRY, Coordinates, RawZoo, Zoo

__all__ = [
    "DEFAULT_COUNTRY",
    "SOURCE_ORDER",
    "Animal",
    "AnimalCategory",
    "Coordinates",
    "RawAnimal",
    "RawZoo",
    "SourceTag",
    "Zoo",
]
