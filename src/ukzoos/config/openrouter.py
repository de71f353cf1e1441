"""OpenRouter chat-completions configuration for animal enrichment."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_OPENROUTER_MODEL = "google/gemini-2.0-flash-001"
DEFAULT_OPENROUTER_REFERER = "https://zookeeperapp.com"
OPENROUTER_TITLE = "ukzoos animal enrichment"
OPENROUTER_TIMEOUT_SECONDS = 120.0


@dataclass(frozen=True, slots=True)
class OpenRouterConfig:
    resilience: ResilienceConfig
    api_key: str | None
    model: str = DEFAULT_OPENROUTER_MODEL
    temperature: float = 0.1
    max_tokens: int = 16000

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)


def get_openrouter_config() -> OpenRouterConfig:
    api_key = optional_env_var("OPENROUTER_API_KEY")
    base_url = optional_env_var("OPENROUTER_BASE_URL") or DEFAULT_OPENROUTER_BASE_URL
    model = optional_env_var("OPENROUTER_MODEL") or DEFAULT_OPENROUTER_MODEL
    referer = optional_env_var("OPENROUTER_REFERER") or DEFAULT_OPENROUTER_REFERER

    headers = {"HTTP-Referer": referer, "X-Title": OPENROUTER_TITLE}
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"

    resilience = ResilienceConfig(
        name="openrouter",
        base_url=base_url,
        timeout_seconds=OPENROUTER_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=1, per_seconds=1.0),
        # Every call is a POST to /chat/completions.
        retry=RetryPolicy(total=2, allowed_methods=frozenset({"POST"})),
        default_headers=headers,
    )

    return OpenRouterConfig(resilience=resilience, api_key=api_key, model=model)
