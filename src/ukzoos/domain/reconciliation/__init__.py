"""Reconciliation of raw zoo records into a deduplicated, ranked canonical set.

Flow for one run:
1) normalize each record's name into a lookup key
2) match the key against keys already seen (exact, then heuristics)
3) merge into the matched zoo, or start a new one
4) rank the canonical zoos for downstream consumers
"""

from __future__ import annotations

from .engine import ReconciliationResult, ZooReconciler, count_by_source, reconcile
from .match import (
    MATCH_RULES,
    KeyMatch,
    MatchKind,
    explain_match,
    find_match,
    is_contained_match,
    is_edit_distance_match,
    is_exact_match,
    is_first_word_match,
)
from .merge import MergeOutcome, merge_into
from .normalize import normalize_name
from .policy import DEFAULT_POLICY, MatchPolicy
from .rank import quality_key, rank_zoos

__all__ = [
    "DEFAULT_POLICY",
    "MATCH_RULES",
    "KeyMatch",
    "MatchKind",
    "MatchPolicy",
    "MergeOutcome",
    "ReconciliationResult",
    "ZooReconciler",
    "count_by_source",
    "explain_match",
    "find_match",
    "is_contained_match",
    "is_edit_distance_match",
    "is_exact_match",
    "is_first_word_match",
    "merge_into",
    "normalize_name",
    "quality_key",
    "rank_zoos",
    "reconcile",
]
