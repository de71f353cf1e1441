"""Orchestrator folding a stream of raw zoo records into canonical zoos.

The fold is strictly left to right: the same records in the same order always
produce the same canonical set. Callers combining several sources must
concatenate them in a fixed order first (see ``ukzoos.domain.model.SOURCE_ORDER``).
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from ukzoos.domain.model import Zoo

from .match import KeyMatch, MatchKind, explain_match
from .merge import merge_into
from .normalize import normalize_name
from .policy import DEFAULT_POLICY, MatchPolicy

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ukzoos.domain.model import RawZoo, SourceTag

log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationResult:
    """Canonical zoos plus counters describing one reconciliation run."""

    zoos: list[Zoo]
    input_count: int = 0
    merged: int = 0
    skipped: int = 0

    @property
    def created(self) -> int:
        return len(self.zoos)


@dataclass(slots=True)
class ZooReconciler:
    """Owns the insertion-ordered map of normalized key -> canonical zoo for one run."""

    policy: MatchPolicy = DEFAULT_POLICY
    canonical_map: dict[str, Zoo] = field(default_factory=dict[str, Zoo])
    input_count: int = 0
    merged: int = 0
    skipped: int = 0

    def add(self, raw: RawZoo) -> Zoo | None:
        """Fold one record into the canonical set.

        Returns the zoo the record ended up in, or ``None`` when the record was
        skipped for lacking a name.
        """

        self.input_count += 1
        if not raw.name or not raw.name.strip():
            self.skipped += 1
            log.warning("Skipping %s record without a name: %r", raw.source, raw)
            return None

        key = normalize_name(raw.name)
        existing = self.canonical_map.get(key)
        match: KeyMatch | None = None
        if existing is None:
            match = explain_match(key, self.canonical_map.keys(), policy=self.policy)
            if match is not None:
                existing = self.canonical_map[match.key]
        else:
            match = KeyMatch(key=key, kind=MatchKind.EXACT)

        if existing is None or match is None:
            zoo = Zoo.from_raw(raw)
            self.canonical_map[key] = zoo
            return zoo

        outcome = merge_into(existing, raw)
        self.merged += 1
        if not outcome.changed:
            log.debug("Record %r from %s adds nothing to %r", raw.name, raw.source, existing.name)
            return existing
        log.debug(
            "Merged %s record %r into %r (key=%r, rule=%s, filled=%s)",
            raw.source,
            raw.name,
            existing.name,
            match.key,
            match.kind,
            ",".join(outcome.filled_fields) or "-",
        )
        return existing

    def extend(self, records: Iterable[RawZoo]) -> None:
        for raw in records:
            self.add(raw)

    def result(self) -> ReconciliationResult:
        return ReconciliationResult(
            zoos=list(self.canonical_map.values()),
            input_count=self.input_count,
            merged=self.merged,
            skipped=self.skipped,
        )


def reconcile(
    records: Iterable[RawZoo],
    *,
    policy: MatchPolicy = DEFAULT_POLICY,
) -> ReconciliationResult:
    """Deduplicate ``records`` into canonical zoos, in first-seen order."""

    reconciler = ZooReconciler(policy=policy)
    reconciler.extend(records)
    result = reconciler.result()
    log.info(
        "Reconciled %s raw records into %s zoos (merged=%s, skipped=%s)",
        result.input_count,
        result.created,
        result.merged,
        result.skipped,
    )
    return result


def count_by_source(zoos: Iterable[Zoo]) -> dict[SourceTag, int]:
    """Number of canonical zoos each source corroborates."""

    counts: Counter[SourceTag] = Counter()
    for zoo in zoos:
        counts.update(zoo.sources)
    return dict(sorted(counts.items(), key=lambda item: item[0].value))
