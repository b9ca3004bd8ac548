"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import (
    CardRepository,
    ComicRepository,
    ContainerRepository,
    DuplicateItemError,
    ItemRepository,
    OwnedRepository,
    Repository,
    StoreMutationError,
    UserRepository,
    ZoneRepository,
)
from .spreadsheet import (
    ParsedWorkbook,
    SheetData,
    SheetRow,
    SpreadsheetParseError,
    SpreadsheetReader,
    SpreadsheetWriter,
)
from .unit_of_work import (
    InventoryRepositories,
    InventoryUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "CardRepository",
    "ComicRepository",
    "ContainerRepository",
    "DuplicateItemError",
    "InventoryRepositories",
    "InventoryUnitOfWork",
    "ItemRepository",
    "OwnedRepository",
    "ParsedWorkbook",
    "Repository",
    "RepositoryCollection",
    "SheetData",
    "SheetRow",
    "SpreadsheetParseError",
    "SpreadsheetReader",
    "SpreadsheetWriter",
    "StoreMutationError",
    "UnitOfWork",
    "UserRepository",
    "ZoneRepository",
]
