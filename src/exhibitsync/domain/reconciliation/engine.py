"""Decide-and-apply logic for one group of scraped exhibitions.

The engine never opens or commits a transaction itself. The caller hands it an
entered unit of work; the engine reads every document it needs first and only
then stages creates and updates, so the read phase of a group completes before
any write exists.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from exhibitsync.domain.dates import dates_equal, to_tokyo_instant
from exhibitsync.domain.errors import (
    InvalidDateError,
    MalformedDocumentError,
    VenueNotFoundError,
)
from exhibitsync.domain.identity import derive_document_id
from exhibitsync.domain.model import Exhibition, ExhibitionStatus
from exhibitsync.domain.venues import get_museum_id, resolve_venue

from .outcomes import Outcome, Reason, ReconcileOutcome
from .policy import optional_fields_for

if TYPE_CHECKING:
    from collections.abc import Sequence

    from exhibitsync.domain.model import Origin, ScrapedExhibition, VenueMaps
    from exhibitsync.domain.ports import ExhibitionRepository, ExhibitionUnitOfWork

Clock = Callable[[], datetime]

log = getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class PreparedRecord:
    """A scraped record with its canonical venue and document identity resolved."""

    record: ScrapedExhibition
    venue: str
    museum_id: str
    document_id: str

    @property
    def title(self) -> str:
        return self.record.title


def prepare_record(record: ScrapedExhibition, venue_maps: VenueMaps) -> PreparedRecord:
    """Resolve venue and identity without touching the store.

    Raises ``VenueNotFoundError`` for an unregistered venue and
    ``MuseumIdNotFoundError`` when the registry has no id for the canonical name.
    """

    venue = resolve_venue(record.venue, venue_maps)
    if venue is None:
        raise VenueNotFoundError(record.venue, record.title)
    museum_id = get_museum_id(venue, venue_maps)
    return PreparedRecord(
        record=record,
        venue=venue,
        museum_id=museum_id,
        document_id=derive_document_id(museum_id, record.title),
    )


def _require_readable(document_id: str, exhibition: Exhibition) -> None:
    if exhibition.created_at is None:
        raise MalformedDocumentError(document_id, "missing created_at")
    for name in ("start_date", "end_date"):
        value = getattr(exhibition, name)
        if value is None:
            continue
        if not isinstance(value, datetime) or value.tzinfo is None:
            raise MalformedDocumentError(document_id, f"{name} is not an aware timestamp")


@dataclass(slots=True)
class ReconciliationEngine:
    """Turn prepared records plus stored state into created/updated/skipped outcomes."""

    clock: Clock = field(default=_utcnow)

    def apply(
        self,
        uow: ExhibitionUnitOfWork,
        prepared: Sequence[PreparedRecord],
        *,
        origin: Origin,
    ) -> list[ReconcileOutcome]:
        """Read, decide and stage writes for ``prepared`` inside ``uow``.

        Store failures propagate so the caller can fail the whole group. A
        malformed stored document or an unparsable incoming date only errors the
        record it belongs to.
        """

        repository = uow.repositories.exhibitions
        stored = repository.get_many(item.document_id for item in prepared)

        now = self.clock()
        staged: dict[str, Exhibition] = dict(stored)
        outcomes: list[ReconcileOutcome] = []
        for item in prepared:
            try:
                outcome = self._decide(item, staged, repository=repository, origin=origin, now=now)
            except MalformedDocumentError:
                log.exception(f"Unreadable exhibition document {item.document_id}")
                outcome = _errored(item, Reason.MALFORMED_DOCUMENT)
            except InvalidDateError:
                log.exception(f"Invalid dates for exhibition {item.title!r} ({item.venue})")
                outcome = _errored(item, Reason.INVALID_DATE)
            outcomes.append(outcome)
        return outcomes

    def _decide(
        self,
        item: PreparedRecord,
        staged: dict[str, Exhibition],
        *,
        repository: ExhibitionRepository,
        origin: Origin,
        now: datetime,
    ) -> ReconcileOutcome:
        record = item.record
        existing = staged.get(item.document_id)

        if existing is None:
            exhibition = self._new_exhibition(item, origin=origin, now=now)
            repository.add(exhibition)
            staged[item.document_id] = exhibition
            log.info(f"Added document with id: {item.document_id}")
            return ReconcileOutcome(
                title=item.title, outcome=Outcome.CREATED, document_id=item.document_id
            )

        _require_readable(item.document_id, existing)
        start_unchanged = dates_equal(existing.start_date, record.start_date)
        end_unchanged = dates_equal(existing.end_date, record.end_date)
        if start_unchanged and end_unchanged:
            log.debug(f"Skipping duplicate document with id: {item.document_id}")
            return ReconcileOutcome(
                title=item.title,
                outcome=Outcome.SKIPPED,
                document_id=item.document_id,
                reason=Reason.NO_DATE_CHANGE,
            )

        existing.change_dates(
            start_date=to_tokyo_instant(record.start_date),
            end_date=to_tokyo_instant(record.end_date),
            now=now,
        )
        log.info(f"Updated document with id: {item.document_id} (dates changed)")
        return ReconcileOutcome(
            title=item.title,
            outcome=Outcome.UPDATED,
            document_id=item.document_id,
            reason=Reason.DATES_CHANGED,
        )

    @staticmethod
    def _new_exhibition(item: PreparedRecord, *, origin: Origin, now: datetime) -> Exhibition:
        record = item.record
        return Exhibition(
            id=item.document_id,
            title=record.title,
            venue=item.venue,
            museum_id=item.museum_id,
            start_date=to_tokyo_instant(record.start_date),
            end_date=to_tokyo_instant(record.end_date),
            status=ExhibitionStatus.PENDING,
            origin=origin,
            is_excluded=False,
            has_date_changed=False,
            created_at=now,
            updated_at=now,
            **optional_fields_for(origin, record),
        )


def _errored(item: PreparedRecord, reason: Reason) -> ReconcileOutcome:
    return ReconcileOutcome(
        title=item.title,
        outcome=Outcome.ERRORED,
        document_id=item.document_id,
        reason=reason,
    )
