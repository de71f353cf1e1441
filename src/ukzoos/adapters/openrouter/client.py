"""Ask an OpenRouter-hosted model which animals a zoo keeps."""

from __future__ import annotations

import asyncio
import json
import re
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

import httpx
from pydantic import ValidationError

from ukzoos.adapters.http_resilience import ResilientClient
from ukzoos.config.openrouter import OpenRouterConfig, get_openrouter_config
from ukzoos.domain.model import AnimalCategory, RawAnimal
from ukzoos.domain.ports.animals import AnimalFetcher

from .schema import AnimalPayload, ChatCompletionResponse

if TYPE_CHECKING:
    from collections.abc import Callable

    from ukzoos.config.http_resilience import ResilienceConfig
    from ukzoos.domain.model import Zoo

log = getLogger(__name__)

COMPLETIONS_PATH = "/chat/completions"

_JSON_ARRAY = re.compile(r"\[[\s\S]*\]")
_TRAILING_COMMA = re.compile(r",\s*([\]}])")

# One completion per topic, in this order.
SURVEY_TOPICS: Final[tuple[tuple[AnimalCategory, str], ...]] = (
    (AnimalCategory.MAMMALS, "Primates (monkeys, apes, lemurs)"),
    (AnimalCategory.MAMMALS, "Big cats and wild cats"),
    (AnimalCategory.MAMMALS, "Bears and raccoons"),
    (AnimalCategory.MAMMALS, "Elephants and rhinos"),
    (AnimalCategory.MAMMALS, "Hoofed animals (deer, antelope, giraffes, zebras)"),
    (AnimalCategory.MAMMALS, "Canines and hyenas (wolves, wild dogs)"),
    (AnimalCategory.MAMMALS, "Small mammals (meerkats, otters, mongoose, rodents)"),
    (AnimalCategory.MAMMALS, "Marine mammals (seals, sea lions)"),
    (AnimalCategory.MAMMALS, "Bats and nocturnal mammals"),
    (AnimalCategory.MAMMALS, "Exotic mammals (sloths, anteaters, armadillos, tapirs)"),
    (AnimalCategory.BIRDS, "Penguins and seabirds"),
    (AnimalCategory.BIRDS, "Flamingos and wading birds"),
    (AnimalCategory.BIRDS, "Parrots, macaws, and cockatoos"),
    (AnimalCategory.BIRDS, "Birds of prey (eagles, hawks, owls, vultures)"),
    (AnimalCategory.BIRDS, "Hornbills and toucans"),
    (AnimalCategory.BIRDS, "Cranes and storks"),
    (AnimalCategory.BIRDS, "Pheasants, peacocks, and gamebirds"),
    (AnimalCategory.BIRDS, "Songbirds and passerines"),
    (AnimalCategory.BIRDS, "Waterfowl (ducks, geese, swans)"),
    (AnimalCategory.BIRDS, "Flightless birds (ostriches, emus, cassowaries)"),
    (AnimalCategory.REPTILES, "Crocodilians (crocodiles, alligators, caimans, gharials)"),
    (AnimalCategory.REPTILES, "Tortoises and turtles"),
    (AnimalCategory.REPTILES, "Large snakes (pythons, boas, anacondas)"),
    (AnimalCategory.REPTILES, "Venomous snakes"),
    (AnimalCategory.REPTILES, "Lizards (monitors, iguanas, geckos, chameleons)"),
    (AnimalCategory.REPTILES, "Komodo dragons and giant reptiles"),
    (AnimalCategory.FISH, "Sharks and rays"),
    (AnimalCategory.FISH, "Tropical reef fish"),
    (AnimalCategory.FISH, "Freshwater fish"),
    (AnimalCategory.FISH, "Jellyfish and sea anemones"),
    (AnimalCategory.AMPHIBIANS, "Amphibians"),
    (AnimalCategory.INVERTEBRATES, "Invertebrates"),
)

_PROMPT: Final[str] = """\
You research zoo collections. Find the complete list of {topic} kept at \
{zoo}{location}, United Kingdom.

List every species in this group that the zoo keeps, not only the highlights. \
Use the zoo's own animal pages, its Wikipedia article and recent news about \
arrivals.

Give each species five surprising fun facts.

Answer with a JSON array and nothing else, for example:
[{{"common_name": "Ring-tailed Lemur", "scientific_name": "Lemur catta", \
"fun_facts": ["...", "...", "...", "...", "..."]}}]

If the zoo keeps no {topic}, answer [].
"""


class AnimalPayloadError(ValueError):
    """Raised when a completion does not contain a usable animal list."""


def build_prompt(zoo: Zoo, topic: str) -> str:
    place = zoo.region or zoo.locality
    location = f" ({place})" if place else ""
    return _PROMPT.format(topic=topic, zoo=zoo.name, location=location)


def repair_json(text: str) -> str:
    """Best-effort fix for a truncated or sloppy JSON array from a model."""

    repaired = _TRAILING_COMMA.sub(r"\1", text.strip())
    open_objects = repaired.count("{") - repaired.count("}")
    open_arrays = repaired.count("[") - repaired.count("]")
    if open_objects <= 0 and open_arrays <= 0:
        return repaired

    last_complete = repaired.rfind("},")
    if last_complete > 0:
        return repaired[: last_complete + 1] + "]"
    last_brace = repaired.rfind("}")
    if last_brace > 0:
        return repaired[: last_brace + 1] + "]"
    return repaired


def parse_animal_list(content: str) -> list[object]:
    """Pull the JSON array out of a completion, repairing it once if needed."""

    match = _JSON_ARRAY.search(content)
    if match is None:
        raise AnimalPayloadError("No JSON array in completion")

    text = match.group(0)
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError:
        try:
            decoded = json.loads(repair_json(text))
        except json.JSONDecodeError as exc:
            raise AnimalPayloadError(f"Unrepairable animal list: {exc}") from exc

    if not isinstance(decoded, list):
        raise AnimalPayloadError("Animal list is not a JSON array")
    return decoded


def translate_animals(items: list[object], *, category: AnimalCategory) -> list[RawAnimal]:
    animals: list[RawAnimal] = []
    for index, item in enumerate(items):
        try:
            payload = AnimalPayload.model_validate(item)
        except ValidationError as exc:
            log.debug("Skipping invalid animal #%s: %s", index, exc)
            continue
        animals.append(
            RawAnimal(
                common_name=payload.common_name,
                category=category.value,
                scientific_name=payload.scientific_name,
                exhibit_area=payload.exhibit_area,
                fun_facts=tuple(payload.fun_facts),
            )
        )
    return animals


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class OpenRouterAnimalFetcher:
    """Survey one zoo topic by topic; a failed topic is logged and contributes nothing."""

    config: OpenRouterConfig = field(default_factory=get_openrouter_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    topics: tuple[tuple[AnimalCategory, str], ...] = SURVEY_TOPICS

    def __call__(self, zoo: Zoo) -> list[RawAnimal]:
        return asyncio.run(self._survey(zoo))

    async def _survey(self, zoo: Zoo) -> list[RawAnimal]:
        animals: list[RawAnimal] = []
        async with self.client_factory(self.config.resilience) as client:
            for category, topic in self.topics:
                try:
                    found = await self._ask(client, zoo, category, topic)
                except (httpx.HTTPError, AnimalPayloadError) as exc:
                    log.warning("Animal lookup failed for %s (%s): %s", zoo.name, topic, exc)
                    continue
                log.debug("%s / %s: %s species", zoo.name, topic, len(found))
                animals.extend(found)
        return animals

    async def _ask(
        self,
        client: ResilientClient,
        zoo: Zoo,
        category: AnimalCategory,
        topic: str,
    ) -> list[RawAnimal]:
        body = {
            "model": self.config.model,
            "messages": [{"role": "user", "content": build_prompt(zoo, topic)}],
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
        }
        response = await client.post(COMPLETIONS_PATH, json=body)
        response.raise_for_status()

        try:
            completion = ChatCompletionResponse.model_validate(response.json())
        except (json.JSONDecodeError, ValidationError) as exc:
            raise AnimalPayloadError("Unexpected OpenRouter response") from exc

        if not completion.content:
            return []
        return translate_animals(parse_animal_list(completion.content), category=category)


if TYPE_CHECKING:
    _fetcher_check: AnimalFetcher = OpenRouterAnimalFetcher()
