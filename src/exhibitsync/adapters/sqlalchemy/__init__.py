"""SQLAlchemy adapter package for the exhibition store."""

from __future__ import annotations

from .mappings import (
    create_all_tables,
    exhibition_table,
    mapper_registry,
    start_mappers,
    venue_table,
)
from .repositories import SqlAlchemyExhibitionRepository, SqlAlchemyVenueRepository
from .unit_of_work import (
    SqlAlchemyExhibitionUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyExhibitionRepository",
    "SqlAlchemyExhibitionUnitOfWork",
    "SqlAlchemyVenueRepository",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "exhibition_table",
    "is_started",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
    "venue_table",
]
