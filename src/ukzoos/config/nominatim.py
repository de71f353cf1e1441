"""Nominatim (OpenStreetMap geocoder) configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_NOMINATIM_BASE_URL = "https://nominatim.openstreetmap.org"
DEFAULT_NOMINATIM_USER_AGENT = "ukzoos/0.1 (UK zoo directory builder)"
NOMINATIM_TIMEOUT_SECONDS = 15.0


@dataclass(frozen=True, slots=True)
class NominatimConfig:
    resilience: ResilienceConfig
    country_codes: str = "gb"


def get_nominatim_config() -> NominatimConfig:
    base_url = optional_env_var("NOMINATIM_BASE_URL") or DEFAULT_NOMINATIM_BASE_URL
    user_agent = optional_env_var("NOMINATIM_USER_AGENT") or DEFAULT_NOMINATIM_USER_AGENT

    # The public instance allows one request per second per client.
    resilience = ResilienceConfig(
        name="nominatim",
        base_url=base_url,
        timeout_seconds=NOMINATIM_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=1, per_seconds=1.1),
        retry=RetryPolicy(total=3),
        default_headers={"User-Agent": user_agent},
    )

    return NominatimConfig(resilience=resilience)
