"""Group-wise transactional reconciliation of a full scrape result."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from itertools import batched
from logging import getLogger
from typing import TYPE_CHECKING

from exhibitsync.config.reconciliation import ReconciliationConfig
from exhibitsync.domain.errors import MuseumIdNotFoundError, VenueNotFoundError

from .engine import PreparedRecord, ReconciliationEngine, prepare_record
from .outcomes import Outcome, Reason, ReconcileOutcome, ReconcileReport

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from exhibitsync.domain.model import Origin, ScrapedExhibition, VenueMaps
    from exhibitsync.domain.ports import ExhibitionUnitOfWork

    from .outcomes import ReconcileSummary

UnitOfWorkFactory = Callable[[], "ExhibitionUnitOfWork"]
ContinuePredicate = Callable[[], bool]

log = getLogger(__name__)


@dataclass(slots=True)
class ExhibitionReconciler:
    """Reconcile scraped exhibitions in bounded groups, one transaction per group.

    Groups run sequentially. A group whose transaction fails counts every record
    that reached the transactional step as an error and the run moves on to the
    next group.
    """

    unit_of_work_factory: UnitOfWorkFactory
    config: ReconciliationConfig = field(default_factory=ReconciliationConfig)
    engine: ReconciliationEngine = field(default_factory=ReconciliationEngine)

    def reconcile(
        self,
        records: Iterable[ScrapedExhibition],
        venue_maps: VenueMaps,
        origin: Origin,
        *,
        should_continue: ContinuePredicate | None = None,
    ) -> ReconcileSummary:
        """Reconcile ``records`` and return aggregate counts."""

        report = self.reconcile_detailed(
            records, venue_maps, origin, should_continue=should_continue
        )
        return report.summary()

    def reconcile_detailed(
        self,
        records: Iterable[ScrapedExhibition],
        venue_maps: VenueMaps,
        origin: Origin,
        *,
        should_continue: ContinuePredicate | None = None,
    ) -> ReconcileReport:
        report = ReconcileReport()
        for index, group in enumerate(batched(records, self.config.group_size)):
            if should_continue is not None and not should_continue():
                log.info(f"Reconciliation stopped before group {index + 1}")
                break
            report.extend(self._reconcile_group(group, venue_maps, origin))
            report.groups += 1
        return report

    def _reconcile_group(
        self,
        group: Sequence[ScrapedExhibition],
        venue_maps: VenueMaps,
        origin: Origin,
    ) -> list[ReconcileOutcome]:
        outcomes: list[ReconcileOutcome] = []
        prepared: list[PreparedRecord] = []
        for record in group:
            try:
                prepared.append(prepare_record(record, venue_maps))
            except VenueNotFoundError as exc:
                log.error(str(exc))  # noqa: TRY400
                outcomes.append(_unresolved(record, Reason.UNKNOWN_VENUE))
            except MuseumIdNotFoundError as exc:
                log.error(str(exc))  # noqa: TRY400
                outcomes.append(_unresolved(record, Reason.MISSING_MUSEUM_ID))

        if not prepared:
            return outcomes

        try:
            with self.unit_of_work_factory() as uow:
                applied = self.engine.apply(uow, prepared, origin=origin)
                uow.commit()
        except Exception:
            log.exception(f"Transaction failed for a group of {len(prepared)} exhibitions")
            outcomes.extend(
                ReconcileOutcome(
                    title=item.title,
                    outcome=Outcome.ERRORED,
                    document_id=item.document_id,
                    reason=Reason.TRANSACTION_FAILED,
                )
                for item in prepared
            )
            return outcomes

        outcomes.extend(applied)
        return outcomes


def _unresolved(record: ScrapedExhibition, reason: Reason) -> ReconcileOutcome:
    return ReconcileOutcome(title=record.title, outcome=Outcome.ERRORED, reason=reason)


def reconcile(
    records: Iterable[ScrapedExhibition],
    venue_maps: VenueMaps,
    origin: Origin,
    *,
    unit_of_work_factory: UnitOfWorkFactory,
    config: ReconciliationConfig | None = None,
) -> ReconcileSummary:
    """Reconcile ``records`` against the store behind ``unit_of_work_factory``."""

    reconciler = ExhibitionReconciler(
        unit_of_work_factory=unit_of_work_factory,
        config=config or ReconciliationConfig(),
    )
    return reconciler.reconcile(records, venue_maps, origin)
