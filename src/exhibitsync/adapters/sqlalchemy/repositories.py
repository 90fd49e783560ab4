"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from sqlalchemy import select

from exhibitsync.adapters.sqlalchemy.mappings import exhibition_table, venue_table
from exhibitsync.domain.model import Exhibition, Venue

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy.orm import Session


class SqlAlchemyExhibitionRepository:
    """Exhibition documents keyed by derived identity.

    Reads lock the returned rows for the rest of the transaction where the
    backend supports ``SELECT ... FOR UPDATE``.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Exhibition) -> None:
        self.session.add(entity)

    def get(self, document_id: str) -> Exhibition | None:
        return self.session.get(Exhibition, document_id, with_for_update=True)

    def get_many(self, document_ids: Iterable[str]) -> dict[str, Exhibition]:
        ids = sorted(set(document_ids))
        if not ids:
            return {}
        stmt = select(Exhibition).where(exhibition_table.c.id.in_(ids)).with_for_update()
        return {exhibition.id: exhibition for exhibition in self.session.scalars(stmt)}


class SqlAlchemyVenueRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Venue) -> None:
        self.session.add(entity)

    def get(self, venue_id: str) -> Venue | None:
        return self.session.get(Venue, venue_id)

    def list_venues(self, *, scrape_enabled: bool | None = None) -> list[Venue]:
        stmt = select(Venue).order_by(venue_table.c.name)
        if scrape_enabled is not None:
            stmt = stmt.where(venue_table.c.scrape_enabled == scrape_enabled)
        return list(self.session.scalars(stmt))


if TYPE_CHECKING:
    from exhibitsync.domain.ports.persistence import ExhibitionRepository, VenueRepository

    _session_stub = cast("Session", object())
    _exhibition_repo: ExhibitionRepository = SqlAlchemyExhibitionRepository(_session_stub)
    _venue_repo: VenueRepository = SqlAlchemyVenueRepository(_session_stub)
