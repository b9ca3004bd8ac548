"""SQLAlchemy-backed unit of work for the inventory store.

The adapter holds one engine per process. ``startup()`` binds it (running
migrations on the way), every unit of work opens a fresh session from it, and
``shutdown()`` releases it again.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from hotzone.adapters.sqlalchemy.mappings import start_mappers
from hotzone.adapters.sqlalchemy.migrations import upgrade_head
from hotzone.adapters.sqlalchemy.repositories import (
    SqlAlchemyCardRepository,
    SqlAlchemyComicRepository,
    SqlAlchemyContainerRepository,
    SqlAlchemyUserRepository,
    SqlAlchemyZoneRepository,
)
from hotzone.config import get_database_config
from hotzone.domain.ports.persistence import DuplicateItemError, StoreMutationError
from hotzone.domain.ports.unit_of_work import InventoryRepositories, RepositoryCollection

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class StartupError(RuntimeError):
    """The adapter or a unit of work was used in the wrong lifecycle state."""


@dataclass(slots=True)
class _AdapterState:
    engine: Engine | None = None
    sessions: sessionmaker[Session] | None = None

    def bind(self, engine: Engine) -> None:
        self.engine = engine
        self.sessions = sessionmaker(bind=engine, expire_on_commit=False)

    def release(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
        self.engine = None
        self.sessions = None

    def require_sessions(self) -> sessionmaker[Session]:
        if self.sessions is None:
            raise StartupError("Inventory store is not started; call startup() first")
        return self.sessions


_STATE = _AdapterState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Bind the adapter to ``engine`` (or a new one) after migrating it to head."""

    if is_started() and not force:
        raise StartupError("Inventory store already started; pass force=True to rebind")

    target = engine or create_engine(database_uri or get_database_config().uri)
    start_mappers()
    upgrade_head(engine=target)
    _STATE.bind(target)
    log.info("Inventory store ready at %s", target.url.render_as_string())


def configured_engine() -> Engine | None:
    return _STATE.engine


def is_started() -> bool:
    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the bound engine; mostly used between tests."""

    _STATE.release()


class BaseSqlAlchemyUnitOfWork[TRepositories: RepositoryCollection](ABC):
    """One session per ``with`` block; subclasses decide which repositories it exposes."""

    def __init__(self) -> None:
        self._sessions = _STATE.require_sessions()
        self._session: Session | None = None
        self._repositories: TRepositories | None = None

    @abstractmethod
    def _build_repositories(self, session: Session) -> TRepositories: ...

    def __enter__(self) -> BaseSqlAlchemyUnitOfWork[TRepositories]:
        if self._session is not None:
            raise StartupError("Unit of work is already open")
        self._session = self._sessions()
        self._repositories = self._build_repositories(self._session)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        try:
            if exc_type is not None:
                session.rollback()
        finally:
            session.close()
            self._session = None
            self._repositories = None
        return False

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work is not open")
        return self._session

    @property
    def repositories(self) -> TRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work is not open")
        return self._repositories

    def commit(self) -> None:
        try:
            self.session.commit()
        except IntegrityError as exc:
            raise DuplicateItemError(str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            raise StoreMutationError(str(exc)) from exc

    def rollback(self) -> None:
        self.session.rollback()


class SqlAlchemyInventoryUnitOfWork(BaseSqlAlchemyUnitOfWork[InventoryRepositories]):
    def _build_repositories(self, session: Session) -> InventoryRepositories:
        return InventoryRepositories(
            users=SqlAlchemyUserRepository(session),
            zones=SqlAlchemyZoneRepository(session),
            containers=SqlAlchemyContainerRepository(session),
            cards=SqlAlchemyCardRepository(session),
            comics=SqlAlchemyComicRepository(session),
        )


if TYPE_CHECKING:
    from hotzone.domain.ports.unit_of_work import InventoryUnitOfWork

    _uow_check: InventoryUnitOfWork = SqlAlchemyInventoryUnitOfWork()
