"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from sqlalchemy import Engine, create_engine

from ukzoos.adapters.export import write_export, write_zoos_only
from ukzoos.adapters.nominatim import NominatimGeocoder
from ukzoos.adapters.openrouter import OpenRouterAnimalFetcher
from ukzoos.adapters.sources import load_raw_zoos
from ukzoos.adapters.sqlalchemy import WriteResult, create_zoo_tables, generate_sql, write_zoos
from ukzoos.config import (
    get_database_config,
    get_match_policy,
    get_openrouter_config,
)
from ukzoos.domain.animals import AnimalReport, collect_animals
from ukzoos.domain.geocoding import GeocodeReport, geocode_missing
from ukzoos.domain.reconciliation import count_by_source, rank_zoos, reconcile

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from ukzoos.domain.model import Animal, SourceTag, Zoo
    from ukzoos.domain.ports.animals import AnimalCache, AnimalFetcher
    from ukzoos.domain.ports.geocoding import Geocoder
    from ukzoos.domain.reconciliation import MatchPolicy, ReconciliationResult

EngineFactory = Callable[[], Engine]

DEFAULT_OUTPUT = Path("uk-zoos.json")

log = getLogger(__name__)


def _default_engine() -> Engine:
    config = get_database_config()
    return create_engine(config.uri, echo=config.echo)


@dataclass(slots=True)
class ZooListResult:
    """Ranked zoos after filtering, plus the run that produced them."""

    zoos: list[Zoo]
    reconciliation: ReconciliationResult

    @property
    def filtered_out(self) -> int:
        return self.reconciliation.created - len(self.zoos)


@dataclass(frozen=True, slots=True, kw_only=True)
class PipelineOptions:
    sources: Mapping[SourceTag, Path]
    output: Path = DEFAULT_OUTPUT
    zoos_only: bool = False
    sql_path: Path | None = None
    write_db: bool = False
    dry_run: bool = False
    geocode: bool = False
    animals: bool = False
    uk_only: bool = True
    zoo_filter: str | None = None
    limit: int | None = None


@dataclass(slots=True)
class PipelineResult:
    zoo_list: ZooListResult
    geocode_report: GeocodeReport | None = None
    animal_report: AnimalReport | None = None
    write_result: WriteResult | None = None
    written_files: list[Path] = field(default_factory=list[Path])


def build_zoo_list(
    paths_by_source: Mapping[SourceTag, Path],
    *,
    policy: MatchPolicy | None = None,
    zoo_filter: str | None = None,
    limit: int | None = None,
    uk_only: bool = True,
) -> ZooListResult:
    """Load every source, reconcile, rank, then apply the name filter and limit."""

    raw_zoos = load_raw_zoos(paths_by_source, uk_only=uk_only)
    result = reconcile(raw_zoos, policy=policy or get_match_policy())
    zoos = rank_zoos(result.zoos)

    if zoo_filter:
        needle = zoo_filter.casefold()
        zoos = [zoo for zoo in zoos if needle in zoo.name.casefold()]
        log.info("Filtered to %s zoos matching %r", len(zoos), zoo_filter)
    if limit is not None:
        zoos = zoos[:limit]
        log.info("Limited to the first %s zoos", limit)

    for tag, count in count_by_source(zoos).items():
        log.info("  %s: %s zoos", tag, count)
    return ZooListResult(zoos=zoos, reconciliation=result)


def geocode_zoos(zoos: Sequence[Zoo], *, geocoder: Geocoder | None = None) -> GeocodeReport:
    return geocode_missing(zoos, geocoder or NominatimGeocoder())


def enrich_with_animals(
    zoos: Sequence[Zoo],
    *,
    fetcher: AnimalFetcher | None = None,
    cache: AnimalCache | None = None,
) -> AnimalReport | None:
    """Attach animal lists to zoos, or return ``None`` when no fetcher can be built.

    Without an injected ``fetcher`` the OpenRouter adapter is used, which needs
    ``OPENROUTER_API_KEY``. Without an injected ``cache`` every zoo is looked up.
    """

    if fetcher is None:
        config = get_openrouter_config()
        if not config.enabled:
            log.warning("OPENROUTER_API_KEY is not set, skipping animal lookup")
            return None
        fetcher = OpenRouterAnimalFetcher(config=config)
    return collect_animals(zoos, fetcher, {} if cache is None else cache)


def export_zoos(
    zoos: Sequence[Zoo],
    *,
    output: Path = DEFAULT_OUTPUT,
    zoos_only: bool = False,
    sql_path: Path | None = None,
    animals: Mapping[str, Sequence[Animal]] | None = None,
) -> list[Path]:
    """Write the JSON review file and, when asked, the SQL import script."""

    if zoos_only:
        write_zoos_only(zoos, output)
    else:
        write_export(zoos, output, animals=animals)
    written = [output]

    if sql_path is not None:
        sql_path.parent.mkdir(parents=True, exist_ok=True)
        sql_path.write_text(generate_sql(zoos, animals=animals), encoding="utf-8")
        log.info("SQL import script written to %s", sql_path)
        written.append(sql_path)
    return written


def store_zoos(
    zoos: Sequence[Zoo],
    *,
    animals: Mapping[str, Sequence[Animal]] | None = None,
    engine_factory: EngineFactory | None = None,
) -> WriteResult:
    engine = (engine_factory or _default_engine)()
    try:
        create_zoo_tables(engine)
        return write_zoos(engine, zoos, animals=animals, clear_existing=True)
    finally:
        engine.dispose()


def run_pipeline(
    options: PipelineOptions,
    *,
    geocoder: Geocoder | None = None,
    animal_fetcher: AnimalFetcher | None = None,
    animal_cache: AnimalCache | None = None,
    engine_factory: EngineFactory | None = None,
) -> PipelineResult:
    """Build the UK zoo list end to end using the configured adapters."""

    log.info(
        "Starting zoo list build: sources=%s, filter=%s, limit=%s, geocode=%s, animals=%s",
        ",".join(sorted(str(tag) for tag in options.sources)),
        options.zoo_filter,
        options.limit,
        options.geocode,
        options.animals,
    )
    zoo_list = build_zoo_list(
        options.sources,
        zoo_filter=options.zoo_filter,
        limit=options.limit,
        uk_only=options.uk_only,
    )
    result = PipelineResult(zoo_list=zoo_list)

    if options.geocode:
        result.geocode_report = geocode_zoos(zoo_list.zoos, geocoder=geocoder)

    if options.animals:
        result.animal_report = enrich_with_animals(
            zoo_list.zoos,
            fetcher=animal_fetcher,
            cache=animal_cache,
        )
    animals = result.animal_report.by_zoo if result.animal_report else None

    result.written_files = export_zoos(
        zoo_list.zoos,
        output=options.output,
        zoos_only=options.zoos_only,
        sql_path=options.sql_path,
        animals=animals,
    )

    if options.dry_run:
        log.info("Skipping database write (dry run)")
    elif options.write_db:
        result.write_result = store_zoos(
            zoo_list.zoos,
            animals=animals,
            engine_factory=engine_factory,
        )

    located = sum(1 for zoo in zoo_list.zoos if zoo.has_coordinates)
    log.info(
        "Finished zoo list build: zoos=%s, filtered_out=%s, with_coordinates=%s, output=%s",
        len(zoo_list.zoos),
        zoo_list.filtered_out,
        located,
        options.output,
    )
    return result
