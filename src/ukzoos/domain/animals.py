"""Turn species mentions into clean animal lists and attach them to zoos."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

from ukzoos.domain.model import Animal, AnimalCategory

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ukzoos.domain.model import RawAnimal, Zoo
    from ukzoos.domain.ports.animals import AnimalCache, AnimalFetcher

log = getLogger(__name__)

FACTS_PER_ANIMAL: Final[int] = 5

# Checked in order against free-text categories such as "Big cats" or "Avian".
_CATEGORY_HINTS: Final[tuple[tuple[tuple[str, ...], AnimalCategory], ...]] = (
    (("mammal",), AnimalCategory.MAMMALS),
    (("bird", "avian"), AnimalCategory.BIRDS),
    (("reptile", "snake", "lizard"), AnimalCategory.REPTILES),
    (("amphibian", "frog"), AnimalCategory.AMPHIBIANS),
    (("fish", "aquatic"), AnimalCategory.FISH),
    (("insect", "invertebrate", "spider"), AnimalCategory.INVERTEBRATES),
)

_FILLER_FACTS: Final[dict[AnimalCategory, tuple[str, ...]]] = {
    AnimalCategory.MAMMALS: (
        "{name}s have unique personalities that zookeepers learn to recognize",
        "Conservation programs help protect {name}s from habitat loss",
        "{name}s communicate through a variety of vocalizations and body language",
        "In the wild, {name}s play important roles in their ecosystems",
        "{name}s form social bonds that can last for years",
    ),
    AnimalCategory.BIRDS: (
        "{name}s have hollow bones that make them lightweight for flight",
        "Many {name}s mate for life and share parenting duties",
        "{name}s can see colors that humans cannot detect",
        "{name}s use unique calls to communicate with their flock",
        "Conservation efforts help protect {name}s' nesting habitats",
    ),
    AnimalCategory.REPTILES: (
        "{name}s are cold-blooded and rely on their environment to regulate body temperature",
        "Many {name}s can regenerate parts of their body",
        "{name}s have been on Earth for over 300 million years",
        "{name}s have specialized scales for protection and water retention",
        "{name}s play important roles as both predators and prey",
    ),
    AnimalCategory.AMPHIBIANS: (
        "{name}s can breathe through their skin",
        "Many {name}s go through metamorphosis during their life cycle",
        "{name}s are indicator species for environmental health",
        "{name}s have been on Earth for over 350 million years",
        "Many {name}s produce toxins for defense",
    ),
    AnimalCategory.FISH: (
        "{name}s have a lateral line system to detect movement in water",
        "Many {name}s can change color based on mood or environment",
        "{name}s don't have eyelids - they sleep with their eyes open",
        "{name}s have been swimming in Earth's oceans for 500 million years",
        "{name}s can sense electrical fields in the water",
    ),
    AnimalCategory.INVERTEBRATES: (
        "{name}s don't have a backbone but have evolved amazing adaptations",
        "Many {name}s can regenerate lost body parts",
        "{name}s make up over 95% of all animal species on Earth",
        "{name}s have complex behaviors despite their simple nervous systems",
        "{name}s are essential for healthy ecosystems",
    ),
}
_LAST_RESORT_FACT: Final[str] = "{name}s are fascinating creatures studied by scientists worldwide"


def classify_category(raw: str | None) -> AnimalCategory:
    """Map a free-text category onto ``AnimalCategory``; unknown text counts as mammals."""

    if not raw:
        return AnimalCategory.MAMMALS
    text = raw.strip().casefold()
    for category in AnimalCategory:
        if category.value.casefold() == text:
            return category
    for hints, category in _CATEGORY_HINTS:
        if any(hint in text for hint in hints):
            return category
    return AnimalCategory.MAMMALS


def clean_animal_name(name: str) -> str:
    return " ".join(name.split())


def ensure_five_facts(
    name: str,
    category: AnimalCategory,
    facts: Sequence[str],
) -> tuple[str, ...]:
    """Trim to five facts, or pad with generic ones for the animal's category."""

    kept = [fact for fact in (" ".join(f.split()) for f in facts) if fact][:FACTS_PER_ANIMAL]
    fillers = _FILLER_FACTS[category]
    while len(kept) < FACTS_PER_ANIMAL:
        filler = fillers[len(kept)].format(name=name)
        kept.append(filler if filler not in kept else _LAST_RESORT_FACT.format(name=name))
    return tuple(kept)


def consolidate_animals(raw_animals: Iterable[RawAnimal]) -> list[Animal]:
    """Drop repeated species (by common name, ignoring case) and normalise the rest."""

    animals: list[Animal] = []
    seen: set[str] = set()
    for raw in raw_animals:
        name = clean_animal_name(raw.common_name)
        key = name.casefold()
        if not key or key in seen:
            continue
        seen.add(key)
        category = classify_category(raw.category)
        animals.append(
            Animal(
                common_name=name,
                category=category,
                scientific_name=raw.scientific_name or None,
                exhibit_area=raw.exhibit_area or None,
                fun_facts=ensure_five_facts(name, category, raw.fun_facts),
            )
        )
    return animals


@dataclass(slots=True)
class AnimalReport:
    by_zoo: dict[str, list[Animal]] = field(default_factory=dict[str, list[Animal]])
    from_cache: int = 0
    fetched: int = 0

    @property
    def total_animals(self) -> int:
        return sum(len(animals) for animals in self.by_zoo.values())


def collect_animals(
    zoos: Sequence[Zoo],
    fetcher: AnimalFetcher,
    cache: AnimalCache,
) -> AnimalReport:
    """Look up animal lists by zoo name, reusing non-empty cached lists.

    Every fresh list is stored in ``cache`` as soon as it is fetched.
    """

    report = AnimalReport()
    for position, zoo in enumerate(zoos, start=1):
        cached = cache.get(zoo.name)
        if cached:
            report.by_zoo[zoo.name] = list(cached)
            report.from_cache += 1
            log.debug("[%s/%s] %s: %s animals (cached)", position, len(zoos), zoo.name, len(cached))
            continue

        animals = consolidate_animals(fetcher(zoo))
        cache[zoo.name] = animals
        report.by_zoo[zoo.name] = animals
        report.fetched += 1
        log.info("[%s/%s] %s: %s animals", position, len(zoos), zoo.name, len(animals))

    log.info(
        "Collected %s animals for %s zoos (cached=%s, fetched=%s)",
        report.total_animals,
        len(zoos),
        report.from_cache,
        report.fetched,
    )
    return report


def count_by_category(animal_lists: Iterable[Iterable[Animal]]) -> dict[AnimalCategory, int]:
    counts = Counter(animal.category for animals in animal_lists for animal in animals)
    return {category: counts[category] for category in AnimalCategory if counts[category]}
