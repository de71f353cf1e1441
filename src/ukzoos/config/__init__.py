"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_int, optional_env_var
from .errors import ConfigurationError, InvalidConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .matching import get_match_policy
from .nominatim import NominatimConfig, get_nominatim_config
from .openrouter import OpenRouterConfig, get_openrouter_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "InvalidConfigurationError",
    "NominatimConfig",
    "OpenRouterConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_match_policy",
    "get_nominatim_config",
    "get_openrouter_config",
    "get_storage_config",
    "optional_env_int",
    "optional_env_var",
]
