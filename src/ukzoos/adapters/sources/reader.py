"""Read scraper output files into raw zoo records."""

from __future__ import annotations

import json
from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from ukzoos.domain.model import SOURCE_ORDER, SourceTag

from .schema import RawZooPayload, SourceDocument
from .translator import is_irish_location, translate_payload

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from ukzoos.domain.model import RawZoo
    from ukzoos.domain.ports.sources import RawZooSource

log = getLogger(__name__)

JSON_LINES_SUFFIXES = frozenset({".jsonl", ".ndjson"})


class SourceReadError(RuntimeError):
    """Raised when a source file cannot be read or is not a zoo listing."""

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(message)
        self.path = path


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SourceReadError(f"Cannot read {path}: {exc}", path=path) from exc


def _load_json_lines(path: Path, text: str) -> list[tuple[str, object]]:
    items: list[tuple[str, object]] = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            items.append((f"line {line_number}", json.loads(line)))
        except json.JSONDecodeError as exc:
            log.warning("Skipping malformed line %s in %s: %s", line_number, path, exc)
    return items


def _load_items(path: Path) -> list[tuple[str, object]]:
    """Return ``(position, item)`` pairs; items are validated one at a time later."""

    text = _read_text(path)
    if path.suffix.lower() in JSON_LINES_SUFFIXES:
        return _load_json_lines(path, text)

    try:
        document = SourceDocument.model_validate(json.loads(text))
    except (json.JSONDecodeError, ValidationError) as exc:
        raise SourceReadError(f"{path} is not a zoo listing: {exc}", path=path) from exc
    return [(f"entry #{index}", item) for index, item in enumerate(document.zoos)]


def read_source_file(path: Path, *, source: SourceTag) -> list[RawZoo]:
    """Parse one scraper output file; malformed entries are logged and skipped."""

    records: list[RawZoo] = []
    for position, item in _load_items(path):
        try:
            payload = RawZooPayload.model_validate(item)
        except ValidationError as exc:
            log.warning("Skipping invalid %s %s in %s: %s", source, position, path, exc)
            continue
        records.append(translate_payload(payload, source=source))

    log.info("Read %s %s records from %s", len(records), source, path)
    return records


@dataclass(slots=True)
class FileZooSource:
    """A ``RawZooSource`` backed by a JSON or JSON Lines file."""

    path: Path
    tag: SourceTag
    uk_only: bool = True

    @property
    def source(self) -> SourceTag:
        return self.tag

    def __call__(self) -> list[RawZoo]:
        records = read_source_file(self.path, source=self.tag)
        if not self.uk_only:
            return records
        kept = [raw for raw in records if not is_irish_location(raw.name, raw.region)]
        if dropped := len(records) - len(kept):
            log.info("Dropped %s Republic of Ireland %s records", dropped, self.tag)
        return kept


def load_raw_zoos(
    paths_by_source: Mapping[SourceTag, Path],
    *,
    uk_only: bool = True,
) -> list[RawZoo]:
    """Read every given source and concatenate them in ``SOURCE_ORDER``."""

    sources = [
        FileZooSource(path=Path(paths_by_source[tag]), tag=tag, uk_only=uk_only)
        for tag in SOURCE_ORDER
        if tag in paths_by_source
    ]
    return collect_raw_zoos(sources)


def collect_raw_zoos(sources: Iterable[RawZooSource]) -> list[RawZoo]:
    """Concatenate records from several producers, ordered by source tag.

    A source whose file cannot be read is logged and left out; the others
    still contribute.
    """

    ordered = sorted(sources, key=lambda producer: SOURCE_ORDER.index(producer.source))
    records: list[RawZoo] = []
    for producer in ordered:
        try:
            records.extend(producer())
        except SourceReadError as exc:
            log.error("Skipping %s source: %s", producer.source, exc)
    return records


if TYPE_CHECKING:
    _source_check: RawZooSource = FileZooSource(path=Path(), tag=SourceTag.WIKIPEDIA)
