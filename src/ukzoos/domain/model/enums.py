"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class SourceTag(StrEnum):
    """Producer that emitted a raw zoo record.

    Declaration order is the order in which sources are fed to reconciliation.
    """

    WIKIPEDIA = "wikipedia"
    BIAZA = "biaza"
    GOOGLE = "google"


SOURCE_ORDER: tuple[SourceTag, ...] = tuple(SourceTag)


class AnimalCategory(StrEnum):
    """Animal group as stored in the web app's ``animals.category`` column."""

    MAMMALS = "Mammals"
    BIRDS = "Birds"
    REPTILES = "Reptiles"
    AMPHIBIANS = "Amphibians"
    FISH = "Fish"
    INVERTEBRATES = "Invertebrates"
