"""Port for resolving free-text place queries to coordinates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ukzoos.domain.model import Coordinates


@dataclass(frozen=True, slots=True)
class GeoLocation:
    coordinates: Coordinates
    address: str | None = None


@runtime_checkable
class Geocoder(Protocol):
    """Callable port resolving batches of query variants.

    Each entry of ``query_sets`` holds the variants for one place, most specific
    first; the geocoder returns the first hit per entry (or ``None``), aligned
    with the input.
    """

    def __call__(self, query_sets: Sequence[Sequence[str]]) -> list[GeoLocation | None]: ...


__all__ = ["GeoLocation", "Geocoder"]
