"""Domain port definitions for adapters."""

from __future__ import annotations

from .extraction import ExhibitionExtractor, ExtractionRequest
from .persistence import ExhibitionRepository, Repository, VenueRepository
from .unit_of_work import (
    ExhibitionRepositories,
    ExhibitionUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "ExhibitionExtractor",
    "ExhibitionRepositories",
    "ExhibitionRepository",
    "ExhibitionUnitOfWork",
    "ExtractionRequest",
    "Repository",
    "RepositoryCollection",
    "UnitOfWork",
    "VenueRepository",
]
