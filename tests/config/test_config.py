from __future__ import annotations

import logging
from pathlib import Path

import pytest

from ukzoos.config import (
    InvalidConfigurationError,
    configure_logging,
    get_database_config,
    get_match_policy,
    get_storage_config,
    optional_env_int,
    optional_env_var,
)
from ukzoos.domain.reconciliation import DEFAULT_POLICY, MatchPolicy


def test_optional_env_var_treats_blank_values_as_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")
    assert optional_env_var("EXAMPLE_VAR") is None

    monkeypatch.setenv("EXAMPLE_VAR", " value ")
    assert optional_env_var("EXAMPLE_VAR") == "value"


def test_optional_env_int(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXAMPLE_INT", raising=False)
    assert optional_env_int("EXAMPLE_INT", default=7) == 7

    monkeypatch.setenv("EXAMPLE_INT", " 12 ")
    assert optional_env_int("EXAMPLE_INT", default=7) == 12

    monkeypatch.setenv("EXAMPLE_INT", "twelve")
    with pytest.raises(InvalidConfigurationError, match="must be an integer"):
        optional_env_int("EXAMPLE_INT", default=7)

    monkeypatch.setenv("EXAMPLE_INT", "-1")
    with pytest.raises(InvalidConfigurationError, match=">= 0"):
        optional_env_int("EXAMPLE_INT", default=7)


def test_match_policy_defaults() -> None:
    assert get_match_policy() == DEFAULT_POLICY
    assert DEFAULT_POLICY == MatchPolicy(
        min_containment_length=8,
        max_edit_distance=2,
        edit_distance_max_length=15,
        min_first_word_length=5,
    )


def test_match_policy_reads_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("UKZOOS_MIN_CONTAINMENT_LENGTH", "6")
    monkeypatch.setenv("UKZOOS_MAX_EDIT_DISTANCE", "1")

    policy = get_match_policy()

    assert policy.min_containment_length == 6
    assert policy.max_edit_distance == 1
    assert policy.edit_distance_max_length == DEFAULT_POLICY.edit_distance_max_length


def test_match_policy_rejects_bad_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("UKZOOS_MIN_FIRST_WORD_LENGTH", "five")

    with pytest.raises(InvalidConfigurationError, match="UKZOOS_MIN_FIRST_WORD_LENGTH"):
        get_match_policy()


def test_match_policy_rejects_negative_thresholds() -> None:
    with pytest.raises(ValueError, match="max_edit_distance"):
        MatchPolicy(max_edit_distance=-1)


def test_storage_config_uses_env_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("UKZOOS_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("DATABASE_URI", raising=False)
    monkeypatch.delenv("UKZOOS_SQL_ECHO", raising=False)

    storage = get_storage_config()
    database = get_database_config(storage=storage)

    assert storage.data_dir == (tmp_path / "data").resolve()
    assert database.uri == f"sqlite+pysqlite:///{(tmp_path / 'data' / 'ukzoos.db').resolve()}"
    assert database.echo is False
    assert (tmp_path / "data").is_dir()


def test_database_uri_env_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "postgresql+psycopg://zoo@localhost/zoos")
    monkeypatch.setenv("UKZOOS_SQL_ECHO", "yes")

    database = get_database_config()

    assert database.uri == "postgresql+psycopg://zoo@localhost/zoos"
    assert database.echo is True


def test_sql_echo_flag_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///:memory:")
    monkeypatch.setenv("UKZOOS_SQL_ECHO", "sometimes")

    with pytest.raises(InvalidConfigurationError, match="UKZOOS_SQL_ECHO"):
        get_database_config()


def test_configure_logging_uses_terse_format(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_basic_config(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr(logging, "basicConfig", fake_basic_config)

    configure_logging(level=logging.DEBUG)

    assert captured["level"] == logging.DEBUG
    assert captured["format"] == "%(asctime)s %(levelname)s [%(name)s] %(message)s"
    assert captured["force"] is False


def test_default_data_dir_follows_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("UKZOOS_DATA_DIR", raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    storage = get_storage_config()

    assert storage.data_dir == Path(tmp_path / "ukzoos").resolve()
