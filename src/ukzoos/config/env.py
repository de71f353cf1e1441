"""Environment variable loaders for configuration."""

from __future__ import annotations

import os

from .errors import InvalidConfigurationError


def optional_env_var(name: str) -> str | None:
    """Return an environment variable, treating blank values as unset."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def optional_env_int(name: str, *, default: int, minimum: int = 0) -> int:
    """Return an integer environment variable or ``default`` when unset."""

    raw = optional_env_var(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise InvalidConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise InvalidConfigurationError(f"{name} must be >= {minimum}, got {value}")
    return value
