"""Ports for persisting exhibition documents and the venue registry."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from exhibitsync.domain.model import Exhibition, Venue

if TYPE_CHECKING:
    from collections.abc import Iterable


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class ExhibitionRepository(Repository[Exhibition], Protocol):
    """Persistence contract for exhibition documents keyed by derived identity."""

    def get(self, document_id: str) -> Exhibition | None: ...

    def get_many(self, document_ids: Iterable[str]) -> dict[str, Exhibition]:
        """Return stored documents by id; ids with no document are left out."""
        ...


@runtime_checkable
class VenueRepository(Repository[Venue], Protocol):
    """Read access to the venue registry."""

    def get(self, venue_id: str) -> Venue | None: ...

    def list_venues(self, *, scrape_enabled: bool | None = None) -> list[Venue]: ...
