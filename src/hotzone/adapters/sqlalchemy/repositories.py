"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from hotzone.domain.model import Card, Comic, Container, Entity, InventoryItem, User, Zone
from hotzone.domain.ports.persistence import DuplicateItemError, StoreMutationError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from sqlalchemy.engine import CursorResult
    from sqlalchemy.orm import InstrumentedAttribute, Session


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _column(entity_cls: type[object], name: str) -> InstrumentedAttribute[Any]:
    return cast("InstrumentedAttribute[Any]", getattr(entity_cls, name))


class SqlAlchemyEntityRepository[TEntity: Entity]:
    """Shared add/flush behaviour; timestamps are stamped here, not by the model."""

    def __init__(self, session: Session, entity_cls: type[TEntity]) -> None:
        self.session = session
        self._entity_cls = entity_cls

    def add(self, entity: TEntity) -> None:
        now = _utcnow()
        entity.created_at = entity.created_at or now
        entity.updated_at = now
        self.session.add(entity)
        try:
            self.session.flush()
        except IntegrityError as exc:
            raise DuplicateItemError(str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            raise StoreMutationError(str(exc)) from exc


class SqlAlchemyOwnedRepository[TEntity: Entity](SqlAlchemyEntityRepository[TEntity]):
    def list_for_user(self, user_id: int) -> Sequence[TEntity]:
        stmt = (
            select(self._entity_cls)
            .where(_column(self._entity_cls, "user_id") == user_id)
            .order_by(_column(self._entity_cls, "id"))
        )
        return self.session.execute(stmt).scalars().all()


class SqlAlchemyUserRepository(SqlAlchemyEntityRepository[User]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, User)

    def get(self, user_id: int) -> User | None:
        return self.session.get(User, user_id)


class SqlAlchemyZoneRepository(SqlAlchemyOwnedRepository[Zone]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Zone)

    def get_by_name(self, user_id: int, name: str) -> Zone | None:
        stmt = (
            select(Zone)
            .where(_column(Zone, "user_id") == user_id)
            .where(func.lower(_column(Zone, "name")) == name.strip().lower())
            .order_by(_column(Zone, "id"))
            .limit(1)
        )
        return self.session.execute(stmt).scalar_one_or_none()


class SqlAlchemyContainerRepository(SqlAlchemyOwnedRepository[Container]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Container)

    def get_by_name(self, user_id: int, zone_id: int, name: str) -> Container | None:
        stmt = (
            select(Container)
            .where(_column(Container, "user_id") == user_id)
            .where(_column(Container, "zone_id") == zone_id)
            .where(func.lower(_column(Container, "name")) == name.strip().lower())
            .order_by(_column(Container, "id"))
            .limit(1)
        )
        return self.session.execute(stmt).scalar_one_or_none()


class SqlAlchemyItemRepository[TItem: InventoryItem](SqlAlchemyOwnedRepository[TItem]):
    """Item store whose updates are always scoped by id and owner."""

    def update_owned(
        self,
        item_id: int,
        *,
        user_id: int,
        values: Mapping[str, object],
    ) -> int:
        stmt = (
            update(self._entity_cls)
            .where(_column(self._entity_cls, "id") == item_id)
            .where(_column(self._entity_cls, "user_id") == user_id)
            .values({**values, "updated_at": _utcnow()})
            .execution_options(synchronize_session="evaluate")
        )
        try:
            result = cast("CursorResult[object]", self.session.execute(stmt))
        except IntegrityError as exc:
            raise DuplicateItemError(str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            raise StoreMutationError(str(exc)) from exc
        return result.rowcount


class SqlAlchemyCardRepository(SqlAlchemyItemRepository[Card]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Card)


class SqlAlchemyComicRepository(SqlAlchemyItemRepository[Comic]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Comic)
