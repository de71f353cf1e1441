from __future__ import annotations

import json
from pathlib import Path

import pytest

from ukzoos.app import PipelineOptions, PipelineResult, ZooListResult
from ukzoos.config import InvalidConfigurationError
from ukzoos.domain.model import SourceTag
from ukzoos.domain.reconciliation import ReconciliationResult
from ukzoos.ui import cli as cli_module


def _capture_pipeline(monkeypatch: pytest.MonkeyPatch) -> list[PipelineOptions]:
    captured: list[PipelineOptions] = []

    def fake_run_pipeline(options: PipelineOptions) -> PipelineResult:
        captured.append(options)
        return PipelineResult(
            zoo_list=ZooListResult(zoos=[], reconciliation=ReconciliationResult(zoos=[]))
        )

    monkeypatch.setattr(cli_module, "run_pipeline", fake_run_pipeline)
    return captured


def test_cli_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    captured = _capture_pipeline(monkeypatch)

    cli_module.main(["--wikipedia", "wiki.json"])

    [options] = captured
    assert options.sources == {SourceTag.WIKIPEDIA: Path("wiki.json")}
    assert options.output == Path("uk-zoos.json")
    assert options.uk_only
    assert not options.write_db
    assert not options.geocode
    assert not options.animals
    assert options.limit is None


def test_cli_with_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    captured = _capture_pipeline(monkeypatch)

    cli_module.main(
        [
            "--wikipedia",
            "wiki.json",
            "--biaza",
            "biaza.json",
            "--google",
            "google.jsonl",
            "--zoo",
            "london",
            "--limit",
            "5",
            "--output",
            "out/zoos.json",
            "--zoos-only",
            "--sql",
            "out/zoos.sql",
            "--write-db",
            "--dry-run",
            "--geocode",
            "--animals",
            "--include-ireland",
            "--verbose",
        ]
    )

    [options] = captured
    assert list(options.sources) == [SourceTag.WIKIPEDIA, SourceTag.BIAZA, SourceTag.GOOGLE]
    assert options.zoo_filter == "london"
    assert options.limit == 5
    assert options.output == Path("out/zoos.json")
    assert options.sql_path == Path("out/zoos.sql")
    assert options.zoos_only
    assert options.write_db
    assert options.dry_run
    assert options.geocode
    assert not options.uk_only
    assert options.animals


def test_cli_source_flag_selects_one_file(monkeypatch: pytest.MonkeyPatch) -> None:
    captured = _capture_pipeline(monkeypatch)

    cli_module.main(["--wikipedia", "wiki.json", "--biaza", "biaza.json", "--source", "biaza"])

    assert captured[0].sources == {SourceTag.BIAZA: Path("biaza.json")}


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["--source", "google", "--wikipedia", "wiki.json"],
        ["--wikipedia", "wiki.json", "--limit", "0"],
        ["--wikipedia", "wiki.json", "--limit", "many"],
        ["--wikipedia", "wiki.json", "--source", "tripadvisor"],
    ],
)
def test_cli_validation_errors_exit_with_2(
    monkeypatch: pytest.MonkeyPatch,
    argv: list[str],
) -> None:
    captured = _capture_pipeline(monkeypatch)

    with pytest.raises(SystemExit) as exc:
        cli_module.main(argv)

    assert exc.value.code == 2
    assert captured == []


def test_cli_runtime_failure_exits_with_1(monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_pipeline(options: PipelineOptions) -> PipelineResult:
        del options
        raise RuntimeError("boom")

    monkeypatch.setattr(cli_module, "run_pipeline", failing_pipeline)

    with pytest.raises(SystemExit) as exc:
        cli_module.main(["--wikipedia", "wiki.json"])

    assert exc.value.code == 1


def test_cli_configuration_failure_exits_with_2(monkeypatch: pytest.MonkeyPatch) -> None:
    def misconfigured_pipeline(options: PipelineOptions) -> PipelineResult:
        del options
        raise InvalidConfigurationError("UKZOOS_MAX_EDIT_DISTANCE must be an integer")

    monkeypatch.setattr(cli_module, "run_pipeline", misconfigured_pipeline)

    with pytest.raises(SystemExit) as exc:
        cli_module.main(["--wikipedia", "wiki.json"])

    assert exc.value.code == 2


def test_cli_end_to_end_writes_output(
    source_files: dict[SourceTag, Path],
    tmp_path: Path,
) -> None:
    output = tmp_path / "zoos.json"

    cli_module.main(
        [
            "--wikipedia",
            str(source_files[SourceTag.WIKIPEDIA]),
            "--biaza",
            str(source_files[SourceTag.BIAZA]),
            "--output",
            str(output),
            "--zoos-only",
        ]
    )

    document = json.loads(output.read_text(encoding="utf-8"))
    assert [zoo["name"] for zoo in document["zoos"]] == [
        "Chester Zoo",
        "Drayton Manor",
        "Manor Wildlife Park",
        "ZSL London Zoo",
    ]


def test_sigint_handler_exits_cleanly() -> None:
    with pytest.raises(SystemExit) as exc:
        cli_module.sigint_handler(2, None)

    assert exc.value.code == 0
