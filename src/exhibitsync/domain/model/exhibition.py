"""Exhibition entities: transient scraped records and persisted documents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from exhibitsync.domain.model.enums import ExhibitionStatus, Origin

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(frozen=True, slots=True, kw_only=True)
class ScrapedExhibition:
    """One record emitted by the extraction service.

    Dates are ``yyyy-mm-dd`` strings in the exhibition time zone, or ``None`` when
    the source did not state them.
    """

    title: str
    venue: str
    start_date: str | None = None
    end_date: str | None = None
    official_url: str | None = None
    image_url: str | None = None


@dataclass(eq=False, kw_only=True)
class Exhibition:
    """Persisted exhibition document addressed by a derived identity."""

    id: str
    title: str
    venue: str
    museum_id: str
    start_date: datetime | None = None
    end_date: datetime | None = None
    status: ExhibitionStatus = ExhibitionStatus.PENDING
    origin: Origin = Origin.SCRAPE
    is_excluded: bool = False
    has_date_changed: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    official_url: str | None = None

    def change_dates(
        self,
        *,
        start_date: datetime | None,
        end_date: datetime | None,
        now: datetime,
    ) -> None:
        """Overwrite both dates and flag the document as changed."""

        self.start_date = start_date
        self.end_date = end_date
        self.has_date_changed = True
        self.touch(now)

    def touch(self, now: datetime) -> None:
        # updated_at never moves backwards
        if self.updated_at is None or now > self.updated_at:
            self.updated_at = now
