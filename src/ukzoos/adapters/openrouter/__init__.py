"""Public interface for the OpenRouter animal enrichment adapter."""

from __future__ import annotations

from .client import (
    AnimalPayloadError,
    OpenRouterAnimalFetcher,
    build_prompt,
    parse_animal_list,
    repair_json,
)
from .schema import AnimalPayload, ChatCompletionResponse

__all__ = [
    "AnimalPayload",
    "AnimalPayloadError",
    "ChatCompletionResponse",
    "OpenRouterAnimalFetcher",
    "build_prompt",
    "parse_animal_list",
    "repair_json",
]
