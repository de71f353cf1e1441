"""Port for producers of raw zoo records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ukzoos.domain.model import RawZoo, SourceTag


@runtime_checkable
class RawZooSource(Protocol):
    """Yields the raw records one producer emitted, tagged with its source."""

    @property
    def source(self) -> SourceTag: ...

    def __call__(self) -> Iterable[RawZoo]: ...


__all__ = ["RawZooSource"]
