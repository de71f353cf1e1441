"""Command-line entry point for building the UK zoo list."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from ukzoos.app import DEFAULT_OUTPUT, PipelineOptions, run_pipeline
from ukzoos.config import ConfigurationError, configure_logging
from ukzoos.domain.model import SourceTag

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Not an integer: {value}") from exc
    if number <= 0:
        raise argparse.ArgumentTypeError(f"Must be positive: {value}")
    return number


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Reconcile UK zoo listings into one deduplicated, ranked list",
    )
    sources = parser.add_argument_group("sources", "Scraper output files (JSON or JSON Lines)")
    sources.add_argument("--wikipedia", type=Path, help="Wikipedia list of UK zoos")
    sources.add_argument("--biaza", type=Path, help="BIAZA member directory")
    sources.add_argument("--google", type=Path, help="Search-derived zoo list")
    parser.add_argument(
        "--source",
        choices=[tag.value for tag in SourceTag],
        help="Only use this source, ignoring the other files",
    )
    parser.add_argument(
        "--zoo",
        type=str,
        help="Only keep zoos whose name contains this text (case-insensitive)",
    )
    parser.add_argument(
        "--limit",
        type=_positive_int,
        help="Only keep the first N zoos after ranking",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT,
        help="JSON file to write (default: %(default)s)",
    )
    parser.add_argument(
        "--zoos-only",
        action="store_true",
        help="Write the compact name-sorted zoo list instead of the full review document",
    )
    parser.add_argument("--sql", type=Path, help="Also write an SQL import script to this path")
    parser.add_argument(
        "--write-db",
        action="store_true",
        help="Replace the UK zoos in the database at DATABASE_URI",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Never touch the database, even with --write-db",
    )
    parser.add_argument(
        "--geocode",
        action="store_true",
        help="Look up missing coordinates with Nominatim",
    )
    parser.add_argument(
        "--animals",
        action="store_true",
        help="Look up the animals at each zoo with OpenRouter (needs OPENROUTER_API_KEY)",
    )
    parser.add_argument(
        "--include-ireland",
        action="store_true",
        help="Keep Republic of Ireland entries from the source files",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(list(argv))


def _selected_sources(args: argparse.Namespace) -> dict[SourceTag, Path]:
    given: dict[SourceTag, Path] = {
        tag: getattr(args, tag.value)
        for tag in SourceTag
        if getattr(args, tag.value) is not None
    }
    if args.source is not None:
        tag = SourceTag(args.source)
        if tag not in given:
            raise ValueError(f"--source {tag} requires --{tag} PATH")
        given = {tag: given[tag]}
    if not given:
        raise ValueError("At least one of --wikipedia, --biaza or --google is required")
    return given


def _build_options(args: argparse.Namespace) -> PipelineOptions:
    return PipelineOptions(
        sources=_selected_sources(args),
        output=args.output,
        zoos_only=args.zoos_only,
        sql_path=args.sql,
        write_db=args.write_db,
        dry_run=args.dry_run,
        geocode=args.geocode,
        animals=args.animals,
        uk_only=not args.include_ireland,
        zoo_filter=args.zoo,
        limit=args.limit,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        options = _build_options(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        result = run_pipeline(options)
    except ConfigurationError:
        log.exception("Invalid configuration")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error while building the zoo list")
        sys.exit(1)

    if result.geocode_report is not None:
        report = result.geocode_report
        log.info("Geocoding: found=%s, failed=%s", report.found, report.failed)
    if result.animal_report is not None:
        animal_report = result.animal_report
        log.info(
            "Animals: %s across %s zoos (cached=%s, fetched=%s)",
            animal_report.total_animals,
            len(animal_report.by_zoo),
            animal_report.from_cache,
            animal_report.fetched,
        )
    if result.write_result is not None:
        written = result.write_result
        log.info(
            "Database: wrote %s zoos and %s animals",
            written.zoos_written,
            written.animals_written,
        )


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
