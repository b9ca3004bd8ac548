"""SQLAlchemy adapter package for the inventory store."""

from __future__ import annotations

from .mappings import mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyCardRepository,
    SqlAlchemyComicRepository,
    SqlAlchemyContainerRepository,
    SqlAlchemyUserRepository,
    SqlAlchemyZoneRepository,
)
from .unit_of_work import (
    SqlAlchemyInventoryUnitOfWork,
    StartupError,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyCardRepository",
    "SqlAlchemyComicRepository",
    "SqlAlchemyContainerRepository",
    "SqlAlchemyInventoryUnitOfWork",
    "SqlAlchemyUserRepository",
    "SqlAlchemyZoneRepository",
    "StartupError",
    "is_started",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
