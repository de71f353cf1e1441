"""Ports the domain expects adapters to implement."""

from __future__ import annotations

from .animals import AnimalCache, AnimalFetcher
from .geocoding import GeoLocation, Geocoder
from .sources import RawZooSource

__all__ = ["AnimalCache", "AnimalFetcher", "GeoLocation", "Geocoder", "RawZooSource"]
