"""Geocoder backed by the OpenStreetMap Nominatim search API."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from ukzoos.adapters.http_resilience import ResilientClient
from ukzoos.config.nominatim import NominatimConfig, get_nominatim_config
from ukzoos.domain.model import Coordinates
from ukzoos.domain.ports.geocoding import GeoLocation, Geocoder

from .schema import NominatimSearchResponse

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from ukzoos.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

SEARCH_PATH = "/search"


class GeocodingError(RuntimeError):
    """Raised when Nominatim answers with something other than a result list."""


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class NominatimGeocoder:
    """Resolve query variants one at a time, stopping at the first hit per place.

    A single client (and therefore a single rate limiter) is shared by the whole
    batch.
    """

    config: NominatimConfig = field(default_factory=get_nominatim_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def __call__(self, query_sets: Sequence[Sequence[str]]) -> list[GeoLocation | None]:
        return asyncio.run(self._geocode_all(query_sets))

    async def _geocode_all(self, query_sets: Sequence[Sequence[str]]) -> list[GeoLocation | None]:
        results: list[GeoLocation | None] = []
        async with self.client_factory(self.config.resilience) as client:
            for index, queries in enumerate(query_sets):
                if index and index % 10 == 0:
                    log.info("Geocoding progress: %s/%s", index, len(query_sets))
                results.append(await self._geocode_one(client, queries))
        return results

    async def _geocode_one(
        self,
        client: ResilientClient,
        queries: Sequence[str],
    ) -> GeoLocation | None:
        for query in queries:
            try:
                location = await self._search(client, query)
            except (httpx.HTTPError, GeocodingError) as exc:
                log.warning("Nominatim lookup failed for %r: %s", query, exc)
                continue
            if location is not None:
                return location
        return None

    async def _search(self, client: ResilientClient, query: str) -> GeoLocation | None:
        params = {
            "q": query,
            "format": "json",
            "limit": 1,
            "countrycodes": self.config.country_codes,
        }
        response = await client.get(SEARCH_PATH, params=params)
        response.raise_for_status()

        try:
            payload = NominatimSearchResponse.model_validate(response.json())
        except (json.JSONDecodeError, ValidationError) as exc:
            raise GeocodingError(f"Unexpected Nominatim payload for {query!r}") from exc

        place = payload.first
        if place is None:
            return None
        return GeoLocation(
            coordinates=Coordinates(lat=place.lat, lon=place.lon),
            address=place.display_name,
        )


if TYPE_CHECKING:
    _geocoder_check: Geocoder = NominatimGeocoder()
