from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from hotzone.adapters.sqlalchemy import start_mappers
from hotzone.adapters.sqlalchemy.migrations import upgrade_head
from hotzone.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyInventoryUnitOfWork,
    shutdown,
    startup,
)
from hotzone.domain.model import Container, User, Zone

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    start_mappers()
    upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True, expire_on_commit=False)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyInventoryUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyInventoryUnitOfWork:
        return SqlAlchemyInventoryUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()


@pytest.fixture
def seeded_location(sqlite_session: Session) -> Container:
    """Persist one user owning zone "Office" with container "Box A"."""

    user = User(display_name="Collector")
    sqlite_session.add(user)
    sqlite_session.flush()
    assert user.id is not None
    zone = Zone(user_id=user.id, name="Office")
    sqlite_session.add(zone)
    sqlite_session.flush()
    assert zone.id is not None
    container = Container(user_id=user.id, zone_id=zone.id, name="Box A")
    sqlite_session.add(container)
    sqlite_session.commit()
    return container
