"""Order canonical zoos by how well corroborated they are."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ukzoos.domain.model import Zoo


def quality_key(zoo: Zoo) -> tuple[int, bool, str]:
    return (-len(zoo.sources), not zoo.has_homepage, zoo.name.casefold())


def rank_zoos(zoos: Iterable[Zoo]) -> list[Zoo]:
    """Most sources first, then zoos with a homepage, then by name.

    ``sorted`` is stable, so equally ranked zoos keep their input order and
    ranking an already ranked list changes nothing.
    """

    return sorted(zoos, key=quality_key)
