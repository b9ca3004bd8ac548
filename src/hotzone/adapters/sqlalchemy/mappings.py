"""SQLAlchemy mapping metadata for the inventory domain model."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from functools import cache
from typing import Any

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Float,
    ForeignKey,
    Integer,
    String,
    Table,
    TypeDecorator,
    UniqueConstraint,
    orm,
)

from hotzone.domain.model import Card, Comic, Container, User, Zone

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


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def _timestamps() -> tuple[Column[datetime], Column[datetime]]:
    return (
        Column("created_at", UTCDateTime(), nullable=True),
        Column("updated_at", UTCDateTime(), nullable=True),
    )


def _common_item_columns() -> tuple[Column[Any], ...]:
    return (
        Column("grade", Float, nullable=True),
        Column("condition", String, nullable=True),
        Column("quantity", Integer, nullable=False, default=1),
        Column("price", Float, nullable=True),
        Column("cost", Float, nullable=True),
        Column("description", String, nullable=True),
    )


# Accounts and locations ------------------------------------------------------

user_table = Table(
    "user",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("display_name", String, nullable=False),
    Column("email", String, nullable=True),
    *_timestamps(),
)

zone_table = Table(
    "zone",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("name", String, nullable=False),
    *_timestamps(),
    UniqueConstraint("user_id", "name"),
)

container_table = Table(
    "container",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("zone_id", Integer, ForeignKey("zone.id", ondelete="CASCADE"), nullable=False),
    Column("name", String, nullable=False),
    *_timestamps(),
    UniqueConstraint("zone_id", "name"),
)

# Items -----------------------------------------------------------------------

card_table = Table(
    "card",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("container_id", Integer, ForeignKey("container.id"), nullable=False),
    Column("player", String, nullable=False),
    Column("team", String, nullable=True),
    Column("manufacturer", String, nullable=False),
    Column("sport", String, nullable=False),
    Column("year", Integer, nullable=False),
    Column("number", String, nullable=False),
    Column("number_out_of", Integer, nullable=True),
    Column("is_rookie", Boolean, nullable=False, default=False),
    *_common_item_columns(),
    *_timestamps(),
    UniqueConstraint(
        "user_id",
        "container_id",
        "player",
        "manufacturer",
        "sport",
        "year",
        "number",
    ),
)

comic_table = Table(
    "comic",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("container_id", Integer, ForeignKey("container.id"), nullable=False),
    Column("title", String, nullable=False),
    Column("publisher", String, nullable=False),
    Column("issue", Integer, nullable=False),
    Column("year", Integer, nullable=False),
    *_common_item_columns(),
    *_timestamps(),
    UniqueConstraint("user_id", "container_id", "title", "publisher", "issue", "year"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(User, user_table)
    mapper_registry.map_imperatively(Zone, zone_table)
    mapper_registry.map_imperatively(Container, container_table)
    mapper_registry.map_imperatively(Card, card_table)
    mapper_registry.map_imperatively(Comic, comic_table)

    orm.configure_mappers()
    return mapper_registry
