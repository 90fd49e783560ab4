from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError

from exhibitsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyExhibitionUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)
from exhibitsync.domain.dates import to_tokyo_instant
from tests.support.exhibitions import FIXED_NOW, make_venue, stored_exhibition

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from sqlalchemy.engine import Engine


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


@pytest.fixture
def file_engine(tmp_path: Path) -> Iterator[Engine]:
    engine = create_engine(f"sqlite+pysqlite:///{tmp_path / 'exhibitions.db'}", future=True)
    startup(engine=engine, force=True)
    try:
        yield engine
    finally:
        engine.dispose()


def test_unit_of_work_requires_startup() -> None:
    with pytest.raises(StartupError):
        SqlAlchemyExhibitionUnitOfWork()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:", future=True)
    engine_b = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine_a, force=True)

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert configured_engine() is engine_b
    assert is_started()


def test_repositories_require_entered_unit_of_work(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with pytest.raises(StartupError):
        _ = SqlAlchemyExhibitionUnitOfWork().repositories


def test_unit_of_work_persists_on_commit(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with SqlAlchemyExhibitionUnitOfWork() as uow:
        uow.repositories.exhibitions.add(stored_exhibition("doc-1"))
        uow.commit()

    with SqlAlchemyExhibitionUnitOfWork() as uow:
        assert uow.repositories.exhibitions.get("doc-1") is not None


def test_unit_of_work_rolls_back_on_error(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with pytest.raises(RuntimeError), SqlAlchemyExhibitionUnitOfWork() as uow:
        uow.repositories.exhibitions.add(stored_exhibition("doc-1"))
        uow.session.flush()
        raise RuntimeError("boom")

    with SqlAlchemyExhibitionUnitOfWork() as uow:
        assert uow.repositories.exhibitions.get("doc-1") is None


def test_unit_of_work_discards_uncommitted_writes(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with SqlAlchemyExhibitionUnitOfWork() as uow:
        uow.repositories.exhibitions.add(stored_exhibition("doc-1"))

    with SqlAlchemyExhibitionUnitOfWork() as uow:
        assert uow.repositories.exhibitions.get_many(["doc-1"]) == {}


def test_unit_of_work_releases_session_on_exit(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    uow = SqlAlchemyExhibitionUnitOfWork()

    with uow:
        with pytest.raises(StartupError, match="already initialised"), uow:
            pass
        uow.repositories.venues.add(make_venue())
        uow.commit()

    with pytest.raises(StartupError):
        _ = uow.session
    with uow:
        assert uow.repositories.venues.get("museum-1") is not None


@pytest.mark.usefixtures("file_engine")
def test_concurrent_update_of_same_document_fails_later_commit() -> None:
    with SqlAlchemyExhibitionUnitOfWork() as uow:
        uow.repositories.exhibitions.add(stored_exhibition("doc-1"))
        uow.commit()

    first = SqlAlchemyExhibitionUnitOfWork()
    second = SqlAlchemyExhibitionUnitOfWork()
    with first, second:
        mine = first.repositories.exhibitions.get("doc-1")
        theirs = second.repositories.exhibitions.get("doc-1")
        assert mine is not None
        assert theirs is not None

        mine.change_dates(start_date=to_tokyo_instant("2024-06-01"), end_date=None, now=FIXED_NOW)
        first.commit()

        theirs.change_dates(
            start_date=to_tokyo_instant("2024-07-01"), end_date=None, now=FIXED_NOW
        )
        with pytest.raises(StaleDataError):
            second.commit()

    with SqlAlchemyExhibitionUnitOfWork() as uow:
        stored = uow.repositories.exhibitions.get("doc-1")
        assert stored is not None
        assert stored.start_date == to_tokyo_instant("2024-06-01")


@pytest.mark.usefixtures("file_engine")
def test_concurrent_create_of_same_identity_fails_later_commit() -> None:
    first = SqlAlchemyExhibitionUnitOfWork()
    second = SqlAlchemyExhibitionUnitOfWork()
    with first, second:
        assert first.repositories.exhibitions.get_many(["doc-1"]) == {}
        assert second.repositories.exhibitions.get_many(["doc-1"]) == {}

        first.repositories.exhibitions.add(stored_exhibition("doc-1"))
        first.commit()

        second.repositories.exhibitions.add(stored_exhibition("doc-1", title="別の展覧会"))
        with pytest.raises(IntegrityError):
            second.commit()

    with SqlAlchemyExhibitionUnitOfWork() as uow:
        stored = uow.repositories.exhibitions.get("doc-1")
        assert stored is not None
        assert stored.title == "モネ展"
