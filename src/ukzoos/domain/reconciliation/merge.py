"""Fold a raw record into an existing canonical zoo."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from ukzoos.domain.model import RawZoo, Zoo

FILLABLE_FIELDS: Final[tuple[str, ...]] = (
    "locality",
    "region",
    "homepage",
    "external_ref",
    "coordinates",
)


@dataclass(frozen=True, slots=True)
class MergeOutcome:
    """What a single merge changed on the canonical zoo."""

    source_added: bool
    filled_fields: tuple[str, ...] = ()
    renamed_from: str | None = None

    @property
    def changed(self) -> bool:
        return self.source_added or bool(self.filled_fields) or self.renamed_from is not None


def merge_into(zoo: Zoo, raw: RawZoo) -> MergeOutcome:
    """Merge ``raw`` into ``zoo`` in place.

    Populated fields are never overwritten; the only field that may change once
    set is ``name``, which is replaced by a strictly longer one.
    """

    source_added = raw.source not in zoo.sources
    zoo.sources.add(raw.source)

    filled: list[str] = []
    for field_name in FILLABLE_FIELDS:
        incoming = getattr(raw, field_name)
        if _is_blank(getattr(zoo, field_name)) and not _is_blank(incoming):
            setattr(zoo, field_name, incoming)
            filled.append(field_name)

    renamed_from: str | None = None
    if len(raw.name) > len(zoo.name):
        renamed_from = zoo.name
        zoo.name = raw.name

    return MergeOutcome(
        source_added=source_added,
        filled_fields=tuple(filled),
        renamed_from=renamed_from,
    )


def _is_blank(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False
