"""Matching thresholds, overridable from the environment."""

from __future__ import annotations

from ukzoos.domain.reconciliation.policy import DEFAULT_POLICY, MatchPolicy

from .env import optional_env_int


def get_match_policy() -> MatchPolicy:
    return MatchPolicy(
        min_containment_length=optional_env_int(
            "UKZOOS_MIN_CONTAINMENT_LENGTH",
            default=DEFAULT_POLICY.min_containment_length,
        ),
        max_edit_distance=optional_env_int(
            "UKZOOS_MAX_EDIT_DISTANCE",
            default=DEFAULT_POLICY.max_edit_distance,
        ),
        edit_distance_max_length=optional_env_int(
            "UKZOOS_EDIT_DISTANCE_MAX_LENGTH",
            default=DEFAULT_POLICY.edit_distance_max_length,
        ),
        min_first_word_length=optional_env_int(
            "UKZOOS_MIN_FIRST_WORD_LENGTH",
            default=DEFAULT_POLICY.min_first_word_length,
        ),
    )
