"""Raw and canonical zoo records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from .enums import SourceTag

DEFAULT_COUNTRY: Final[str] = "United Kingdom"


@dataclass(frozen=True, slots=True)
class Coordinates:
    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError(f"Latitude out of range: {self.lat}")
        if not -180.0 <= self.lon <= 180.0:
            raise ValueError(f"Longitude out of range: {self.lon}")


@dataclass(frozen=True, slots=True, kw_only=True)
class RawZoo:
    """One unreconciled sighting of a zoo from a single source."""

    name: str
    source: SourceTag
    locality: str | None = None
    region: str | None = None
    homepage: str | None = None
    external_ref: str | None = None
    coordinates: Coordinates | None = None


@dataclass(slots=True, kw_only=True)
class Zoo:
    """Canonical zoo assembled from one or more raw records.

    Optional fields are set once by the first record that supplies them. ``name``
    may only be replaced by a longer one and ``sources`` only grows.
    """

    name: str
    sources: set[SourceTag]
    locality: str | None = None
    region: str | None = None
    homepage: str | None = None
    external_ref: str | None = None
    coordinates: Coordinates | None = None
    country: str = DEFAULT_COUNTRY

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("Zoo name must not be empty")
        if not self.sources:
            raise ValueError("Zoo must have at least one source")

    @classmethod
    def from_raw(cls, raw: RawZoo) -> Zoo:
        return cls(
            name=raw.name,
            sources={raw.source},
            locality=raw.locality or None,
            region=raw.region or None,
            homepage=raw.homepage or None,
            external_ref=raw.external_ref or None,
            coordinates=raw.coordinates,
        )

    @property
    def has_homepage(self) -> bool:
        return bool(self.homepage)

    @property
    def has_coordinates(self) -> bool:
        return self.coordinates is not None
