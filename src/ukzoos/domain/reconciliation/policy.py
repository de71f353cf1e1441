"""Tunable thresholds for the name-matching heuristics."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class MatchPolicy:
    """Thresholds used by the matching rules in :mod:`.match`.

    The defaults were picked empirically against the UK zoo listings and have no
    derivation beyond that; override them through ``ukzoos.config.get_match_policy``.

    Attributes:
        min_containment_length: shortest key allowed to match by substring
            containment ("manor" must not swallow "drayton manor").
        max_edit_distance: largest Levenshtein distance still treated as a match.
        edit_distance_max_length: edit distance is only tried when both keys are
            strictly shorter than this.
        min_first_word_length: shortest shared first word that counts as a match.
    """

    min_containment_length: int = 8
    max_edit_distance: int = 2
    edit_distance_max_length: int = 15
    min_first_word_length: int = 5

    def __post_init__(self) -> None:
        for name in (
            "min_containment_length",
            "max_edit_distance",
            "edit_distance_max_length",
            "min_first_word_length",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")


DEFAULT_POLICY = MatchPolicy()
