"""Animals kept at a zoo, as reported by an enrichment source."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .enums import AnimalCategory


@dataclass(frozen=True, slots=True, kw_only=True)
class RawAnimal:
    """One species mention before category checks and de-duplication."""

    common_name: str
    category: str | None = None
    scientific_name: str | None = None
    exhibit_area: str | None = None
    fun_facts: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class Animal:
    common_name: str
    category: AnimalCategory
    scientific_name: str | None = None
    exhibit_area: str | None = None
    fun_facts: tuple[str, ...] = ()
    confidence: int = 85

    def __post_init__(self) -> None:
        if not self.common_name.strip():
            raise ValueError("Animal common name must not be empty")
