"""Heuristic rules deciding whether two normalized keys name the same zoo.

Each rule is a plain predicate so it can be tested and tuned on its own. Rules
are tried in ``MATCH_RULES`` order against every existing key, in the order the
keys were first seen; the first hit wins.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, TypeAlias

from rapidfuzz.distance import Levenshtein

from .policy import DEFAULT_POLICY, MatchPolicy

if TYPE_CHECKING:
    from collections.abc import Iterable


class MatchKind(StrEnum):
    """Which rule linked a candidate key to an existing one."""

    EXACT = "exact"
    CONTAINMENT = "containment"
    EDIT_DISTANCE = "edit_distance"
    FIRST_WORD = "first_word"


MatchRule: TypeAlias = Callable[[str, str, MatchPolicy], bool]


@dataclass(frozen=True, slots=True)
class KeyMatch:
    key: str
    kind: MatchKind


def is_exact_match(candidate: str, existing: str, policy: MatchPolicy) -> bool:
    del policy
    return candidate == existing


def is_contained_match(candidate: str, existing: str, policy: MatchPolicy) -> bool:
    if len(candidate) < len(existing):
        shorter, longer = candidate, existing
    else:
        shorter, longer = existing, candidate
    return len(shorter) >= policy.min_containment_length and shorter in longer


def is_edit_distance_match(candidate: str, existing: str, policy: MatchPolicy) -> bool:
    limit = policy.edit_distance_max_length
    if len(candidate) >= limit or len(existing) >= limit:
        return False
    distance = Levenshtein.distance(candidate, existing, score_cutoff=policy.max_edit_distance)
    return distance <= policy.max_edit_distance


def is_first_word_match(candidate: str, existing: str, policy: MatchPolicy) -> bool:
    candidate_tokens = candidate.split()
    existing_tokens = existing.split()
    if not candidate_tokens or not existing_tokens:
        return False
    first_word = candidate_tokens[0]
    return first_word == existing_tokens[0] and len(first_word) >= policy.min_first_word_length


MATCH_RULES: tuple[tuple[MatchKind, MatchRule], ...] = (
    (MatchKind.EXACT, is_exact_match),
    (MatchKind.CONTAINMENT, is_contained_match),
    (MatchKind.EDIT_DISTANCE, is_edit_distance_match),
    (MatchKind.FIRST_WORD, is_first_word_match),
)


def explain_match(
    candidate_key: str,
    existing_keys: Iterable[str],
    *,
    policy: MatchPolicy = DEFAULT_POLICY,
) -> KeyMatch | None:
    """Return the first existing key matching ``candidate_key`` and the rule that fired."""

    for existing in existing_keys:
        for kind, rule in MATCH_RULES:
            if rule(candidate_key, existing, policy):
                return KeyMatch(key=existing, kind=kind)
    return None


def find_match(
    candidate_key: str,
    existing_keys: Iterable[str],
    *,
    policy: MatchPolicy = DEFAULT_POLICY,
) -> str | None:
    match = explain_match(candidate_key, existing_keys, policy=policy)
    return match.key if match is not None else None
