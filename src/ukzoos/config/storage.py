"""Where the local zoo database lives and how to reach the shared one."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var
from .errors import InvalidConfigurationError

APP_DIR_NAME: Final[str] = "ukzoos"
DEFAULT_DB_FILENAME: Final[str] = "ukzoos.db"

_TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
_FALSY: Final[frozenset[str]] = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path

    def database_path(self, *, ensure: bool = True) -> Path:
        data_dir = self.data_dir.expanduser().resolve()
        if ensure:
            data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir / DEFAULT_DB_FILENAME

    def sqlite_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.database_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    """Connection settings for the web app database holding the ``zoos`` table."""

    uri: str
    echo: bool = False


def _data_home() -> Path:
    xdg = optional_env_var("XDG_DATA_HOME")
    if xdg:
        return Path(xdg)
    if os.name == "nt":
        local = optional_env_var("LOCALAPPDATA")
        return Path(local) if local else Path.home() / "AppData" / "Local"
    return Path.home() / ".local" / "share"


def _env_flag(name: str) -> bool:
    raw = optional_env_var(name)
    if raw is None:
        return False
    value = raw.casefold()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise InvalidConfigurationError(f"{name} must be a boolean flag, got {raw!r}")


def get_storage_config() -> StorageConfig:
    override = optional_env_var("UKZOOS_DATA_DIR")
    data_dir = Path(override) if override else _data_home() / APP_DIR_NAME
    return StorageConfig(data_dir=data_dir.expanduser().resolve())


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """``DATABASE_URI`` when set, otherwise a SQLite file in the data directory."""

    echo = _env_flag("UKZOOS_SQL_ECHO")
    uri = optional_env_var("DATABASE_URI")
    if uri is None:
        uri = (storage or get_storage_config()).sqlite_uri()
    return DatabaseConfig(uri=uri, echo=echo)
