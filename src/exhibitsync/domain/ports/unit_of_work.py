"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from exhibitsync.domain.ports.persistence import ExhibitionRepository, VenueRepository


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Generic unit-of-work boundary around a repository collection.

    One unit of work is one store transaction: reads and staged writes either
    commit together or not at all. Leaving the context with an exception rolls
    back.
    """

    @property
    def repositories(self) -> TRepositories: ...

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@dataclass(slots=True)
class ExhibitionRepositories(RepositoryCollection):
    """Repositories required to reconcile exhibitions."""

    exhibitions: ExhibitionRepository
    venues: VenueRepository


type ExhibitionUnitOfWork = UnitOfWork[ExhibitionRepositories]
