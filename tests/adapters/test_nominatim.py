from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import replace
from typing import TYPE_CHECKING

import httpx
import pytest

from ukzoos.adapters.http_resilience import ResilientClient, RetryPolicy
from ukzoos.adapters.nominatim import NominatimGeocoder
from ukzoos.config.nominatim import NominatimConfig, get_nominatim_config
from ukzoos.domain.model import Coordinates

if TYPE_CHECKING:
    from ukzoos.config.http_resilience import ResilienceConfig

Handler = Callable[[httpx.Request], httpx.Response]

LONDON_ZOO = {
    "lat": "51.5353",
    "lon": "-0.1534",
    "display_name": "London Zoo, Outer Circle, London, United Kingdom",
    "importance": 0.61,
}


@pytest.fixture
def nominatim_config(monkeypatch: pytest.MonkeyPatch) -> NominatimConfig:
    monkeypatch.setenv("NOMINATIM_BASE_URL", "https://nominatim.test")
    monkeypatch.setenv("NOMINATIM_USER_AGENT", "ukzoos-tests/1.0")
    config = get_nominatim_config()
    # No client-side throttling or retries in tests.
    resilience = replace(config.resilience, ratelimit=None, retry=RetryPolicy(total=0))
    return replace(config, resilience=resilience)


def _client_factory(handler: Handler) -> Callable[[ResilienceConfig], ResilientClient]:
    def factory(resilience: ResilienceConfig) -> ResilientClient:
        return ResilientClient(resilience, transport=httpx.MockTransport(handler))

    return factory


def test_geocoder_returns_first_hit_per_place(nominatim_config: NominatimConfig) -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.params["q"] == "London Zoo, United Kingdom":
            return httpx.Response(200, json=[LONDON_ZOO])
        return httpx.Response(200, json=[])

    geocoder = NominatimGeocoder(config=nominatim_config, client_factory=_client_factory(handler))

    results = geocoder(
        [
            ("ZSL London Zoo, London, United Kingdom", "London Zoo, United Kingdom", "London"),
            ("Nowhere Zoo, United Kingdom",),
        ]
    )

    assert [request.url.params["q"] for request in requests] == [
        "ZSL London Zoo, London, United Kingdom",
        "London Zoo, United Kingdom",
        "Nowhere Zoo, United Kingdom",
    ]
    first = requests[0]
    assert first.url.host == "nominatim.test"
    assert first.url.path == "/search"
    assert first.url.params["format"] == "json"
    assert first.url.params["limit"] == "1"
    assert first.url.params["countrycodes"] == "gb"
    assert first.headers["User-Agent"] == "ukzoos-tests/1.0"

    london, nowhere = results
    assert london is not None
    assert london.coordinates == Coordinates(lat=51.5353, lon=-0.1534)
    assert london.address == LONDON_ZOO["display_name"]
    assert nowhere is None


def test_geocoder_moves_on_after_http_errors(
    nominatim_config: NominatimConfig,
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.WARNING, logger="ukzoos.adapters.nominatim.client")

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.params["q"].startswith("Broken"):
            return httpx.Response(503, text="overloaded")
        return httpx.Response(200, json=[LONDON_ZOO])

    geocoder = NominatimGeocoder(config=nominatim_config, client_factory=_client_factory(handler))

    [location] = geocoder([("Broken query", "London Zoo, United Kingdom")])

    assert location is not None
    assert "Nominatim lookup failed for 'Broken query'" in caplog.text


def test_geocoder_treats_unexpected_payloads_as_misses(
    nominatim_config: NominatimConfig,
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.WARNING, logger="ukzoos.adapters.nominatim.client")

    def handler(request: httpx.Request) -> httpx.Response:
        del request
        return httpx.Response(200, content=json.dumps({"error": "Unable to geocode"}))

    geocoder = NominatimGeocoder(config=nominatim_config, client_factory=_client_factory(handler))

    assert geocoder([("London Zoo, United Kingdom",)]) == [None]
    assert "Unexpected Nominatim payload" in caplog.text


def test_geocoder_handles_an_empty_batch(nominatim_config: NominatimConfig) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError(f"unexpected request {request.url}")

    geocoder = NominatimGeocoder(config=nominatim_config, client_factory=_client_factory(handler))

    assert geocoder([]) == []


def test_default_nominatim_config_is_rate_limited(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("NOMINATIM_BASE_URL", raising=False)
    monkeypatch.delenv("NOMINATIM_USER_AGENT", raising=False)

    config = get_nominatim_config()

    assert config.resilience.base_url == "https://nominatim.openstreetmap.org"
    assert config.resilience.ratelimit is not None
    assert config.resilience.ratelimit.max_calls == 1
    assert config.resilience.default_headers is not None
    assert config.resilience.default_headers["User-Agent"].startswith("ukzoos/")
