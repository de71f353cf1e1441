"""Public interface for the Nominatim geocoding adapter."""

from __future__ import annotations

from .client import GeocodingError, NominatimGeocoder
from .schema import NominatimPlace, NominatimSearchResponse

__all__ = [
    "GeocodingError",
    "NominatimGeocoder",
    "NominatimPlace",
    "NominatimSearchResponse",
]
