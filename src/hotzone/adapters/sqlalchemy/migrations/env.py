"""Alembic environment for the inventory store.

``upgrade_head`` hands in a live connection through ``config.attributes``;
the ``alembic`` command line falls back to the configured database URI.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from alembic import context
from sqlalchemy import create_engine, pool

from hotzone.adapters.sqlalchemy.mappings import mapper_registry, start_mappers
from hotzone.config import get_database_config

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection

log = logging.getLogger("alembic.env")

start_mappers()

# SQLite cannot ALTER most constraints in place, hence batch mode.
_MIGRATION_OPTIONS: dict[str, object] = {
    "target_metadata": mapper_registry.metadata,
    "render_as_batch": True,
    "compare_type": True,
}


def _database_url() -> str:
    return context.config.get_main_option("sqlalchemy.url") or get_database_config().uri


def _run_with(connection: Connection) -> None:
    context.configure(connection=connection, **_MIGRATION_OPTIONS)
    with context.begin_transaction():
        context.run_migrations()


def run_offline() -> None:
    context.configure(url=_database_url(), literal_binds=True, **_MIGRATION_OPTIONS)
    with context.begin_transaction():
        context.run_migrations()


def run_online() -> None:
    shared: Connection | None = context.config.attributes.get("connection")
    if shared is not None:
        _run_with(shared)
        return

    engine = create_engine(_database_url(), poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            _run_with(connection)
    finally:
        engine.dispose()


if context.is_offline_mode():
    log.info("Emitting migration SQL for %s", _database_url())
    run_offline()
else:
    run_online()
