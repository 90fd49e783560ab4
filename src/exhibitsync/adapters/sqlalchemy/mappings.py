"""SQLAlchemy mapping metadata for the exhibition domain model."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    Index,
    Integer,
    String,
    Table,
    TypeDecorator,
    orm,
)
from sqlalchemy.orm import configure_mappers

from exhibitsync.domain.model import Exhibition, ExhibitionStatus, Origin, Venue

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class StringTupleType(TypeDecorator[tuple[str, ...]]):
    """Ordered list of strings stored as a JSON array."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value: tuple[str, ...] | None, dialect: Dialect) -> str:
        _ = dialect
        return json.dumps(list(value or ()), ensure_ascii=False)

    def process_result_value(self, value: str | None, dialect: Dialect) -> tuple[str, ...]:
        _ = dialect
        if value is None:
            return ()
        loaded = json.loads(value)
        if not isinstance(loaded, list):
            return ()
        items = cast(list[Any], loaded)
        return tuple(item for item in items if isinstance(item, str))


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Tables ------------------------------------------------------------------------

venue_table = Table(
    "venue",
    mapper_registry.metadata,
    Column("id", String, primary_key=True),
    Column("name", String, nullable=False, unique=True),
    Column("aliases", StringTupleType(), nullable=False),
    Column("scrape_url", String, nullable=True),
    Column("scrape_enabled", Boolean, nullable=False),
    Column("address", String, nullable=True),
    Column("access", String, nullable=True),
    Column("opening_information", String, nullable=True),
    Column("official_url", String, nullable=True),
    Column("venue_type", String, nullable=True),
    Column("area", String, nullable=True),
)

exhibition_table = Table(
    "exhibition",
    mapper_registry.metadata,
    Column("id", String(64), primary_key=True),
    Column("title", String, nullable=False),
    Column("venue", String, nullable=False),
    Column("museum_id", String, nullable=False),
    Column("start_date", UTCDateTime(), nullable=True),
    Column("end_date", UTCDateTime(), nullable=True),
    Column("status", Enum(ExhibitionStatus, native_enum=False), nullable=False),
    Column("origin", Enum(Origin, native_enum=False), nullable=False),
    Column("is_excluded", Boolean, nullable=False),
    Column("has_date_changed", Boolean, nullable=False),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=False),
    Column("official_url", String, nullable=True),
    # optimistic lock: a concurrent update of the same row fails the transaction
    Column("version", Integer, key="_version", nullable=False),
    Index("ix_exhibition_museum_id", "museum_id"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Venue, venue_table)
    mapper_registry.map_imperatively(
        Exhibition,
        exhibition_table,
        version_id_col=exhibition_table.c._version,  # noqa: SLF001
    )

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
