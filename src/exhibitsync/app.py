"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from exhibitsync.adapters.apify import FEED_START_URL, ApifyExtractor
from exhibitsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyExhibitionUnitOfWork,
    is_started,
    startup,
)
from exhibitsync.config.reconciliation import get_reconciliation_config
from exhibitsync.domain.errors import VenueRegistryError
from exhibitsync.domain.model import Origin, Venue
from exhibitsync.domain.ports.extraction import ExtractionRequest
from exhibitsync.domain.reconciliation import ExhibitionReconciler
from exhibitsync.domain.venues import build_venue_maps

if TYPE_CHECKING:
    from collections.abc import Sequence

    from exhibitsync.domain.model import ScrapedExhibition
    from exhibitsync.domain.ports.extraction import ExhibitionExtractor
    from exhibitsync.domain.ports.unit_of_work import ExhibitionUnitOfWork
    from exhibitsync.domain.reconciliation import ReconcileSummary

UnitOfWorkFactory = Callable[[], "ExhibitionUnitOfWork"]
ContinuePredicate = Callable[[], bool]

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ScrapeSummary:
    """Counts reported by a scrape run.

    ``total`` is the number of records the extractor returned. It exceeds the sum
    of the other counts only when a run is stopped between groups.
    """

    total: int = 0
    created: int = 0
    updated: int = 0
    skipped: int = 0
    errors: int = 0

    @classmethod
    def from_reconcile(cls, total: int, summary: ReconcileSummary) -> ScrapeSummary:
        return cls(
            total=total,
            created=summary.created,
            updated=summary.updated,
            skipped=summary.skipped,
            errors=summary.errors,
        )


def _resolve_unit_of_work_factory(
    unit_of_work_factory: UnitOfWorkFactory | None,
) -> UnitOfWorkFactory:
    if unit_of_work_factory is not None:
        return unit_of_work_factory
    if not is_started():
        startup()
    return SqlAlchemyExhibitionUnitOfWork


def _load_venues(
    unit_of_work_factory: UnitOfWorkFactory,
    *,
    scrape_enabled: bool | None = None,
) -> list[Venue]:
    with unit_of_work_factory() as uow:
        return uow.repositories.venues.list_venues(scrape_enabled=scrape_enabled)


def _run(
    records: Sequence[ScrapedExhibition],
    venues: Sequence[Venue],
    origin: Origin,
    *,
    unit_of_work_factory: UnitOfWorkFactory,
    group_size: int | None,
    should_continue: ContinuePredicate | None,
) -> ScrapeSummary:
    reconciler = ExhibitionReconciler(
        unit_of_work_factory=unit_of_work_factory,
        config=get_reconciliation_config(group_size=group_size),
    )
    summary = reconciler.reconcile(
        records,
        build_venue_maps(venues),
        origin,
        should_continue=should_continue,
    )
    result = ScrapeSummary.from_reconcile(len(records), summary)
    log.info(
        f"Finished {origin} run: total={result.total}, created={result.created}, "
        f"updated={result.updated}, skipped={result.skipped}, errors={result.errors}"
    )
    return result


def scrape_exhibitions(
    *,
    extractor: ExhibitionExtractor | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    group_size: int | None = None,
    should_continue: ContinuePredicate | None = None,
) -> ScrapeSummary:
    """Scrape every enabled venue's own pages and reconcile the results."""

    effective_uow = _resolve_unit_of_work_factory(unit_of_work_factory)
    venues = _load_venues(effective_uow, scrape_enabled=True)
    start_urls = tuple(venue.scrape_url for venue in venues if venue.scrape_url)
    if not start_urls:
        log.warning("No venues with scraping enabled; nothing to scrape")
        return ScrapeSummary()

    log.info(f"Starting scrape: venues={len(venues)}, start_urls={len(start_urls)}")
    effective_extractor = extractor or ApifyExtractor()
    records = effective_extractor(ExtractionRequest(origin=Origin.SCRAPE, start_urls=start_urls))
    return _run(
        records,
        venues,
        Origin.SCRAPE,
        unit_of_work_factory=effective_uow,
        group_size=group_size,
        should_continue=should_continue,
    )


def scrape_exhibition_feed(
    *,
    extractor: ExhibitionExtractor | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    group_size: int | None = None,
    should_continue: ContinuePredicate | None = None,
) -> ScrapeSummary:
    """Scrape the aggregator feed and reconcile against every registered venue."""

    effective_uow = _resolve_unit_of_work_factory(unit_of_work_factory)
    venues = _load_venues(effective_uow)
    log.info(f"Starting feed scrape: venues={len(venues)}")
    effective_extractor = extractor or ApifyExtractor()
    records = effective_extractor(
        ExtractionRequest(origin=Origin.SCRAPE_FEED, start_urls=(FEED_START_URL,))
    )
    return _run(
        records,
        venues,
        Origin.SCRAPE_FEED,
        unit_of_work_factory=effective_uow,
        group_size=group_size,
        should_continue=should_continue,
    )


def add_venue(  # noqa: PLR0913
    *,
    venue_id: str,
    name: str,
    aliases: Sequence[str] = (),
    scrape_url: str | None = None,
    scrape_enabled: bool = False,
    official_url: str | None = None,
    address: str | None = None,
    area: str | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Venue:
    """Register a venue, rejecting ids or names another venue already claims."""

    effective_uow = _resolve_unit_of_work_factory(unit_of_work_factory)
    venue = Venue(
        id=venue_id,
        name=name,
        aliases=tuple(dict.fromkeys(alias for alias in aliases if alias != name)),
        scrape_url=scrape_url,
        scrape_enabled=scrape_enabled,
        official_url=official_url,
        address=address,
        area=area,
    )
    with effective_uow() as uow:
        repository = uow.repositories.venues
        if repository.get(venue_id) is not None:
            raise VenueRegistryError(f"Venue id {venue_id} is already registered")
        # raises VenueRegistryError on a name or alias clash
        build_venue_maps([*repository.list_venues(), venue], strict=True)
        repository.add(venue)
        uow.commit()
    log.info(f"Added venue {venue.name} ({venue.id})")
    return venue


def list_venues(
    *,
    scrape_enabled: bool | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> list[Venue]:
    return _load_venues(
        _resolve_unit_of_work_factory(unit_of_work_factory),
        scrape_enabled=scrape_enabled,
    )
