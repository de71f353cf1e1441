"""Ports for looking up the animals kept at a zoo."""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import TYPE_CHECKING, Protocol, TypeAlias, runtime_checkable

if TYPE_CHECKING:
    from ukzoos.domain.model import Animal, RawAnimal, Zoo


@runtime_checkable
class AnimalFetcher(Protocol):
    """Callable port returning every species mention found for one zoo."""

    def __call__(self, zoo: Zoo) -> list[RawAnimal]: ...


AnimalCache: TypeAlias = "MutableMapping[str, list[Animal]]"
"""Animal lists keyed by zoo name; a plain ``dict`` works in tests."""


__all__ = ["AnimalCache", "AnimalFetcher"]
