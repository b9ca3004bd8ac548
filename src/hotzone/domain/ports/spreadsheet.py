"""Ports for the two-sheet spreadsheet codec."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Mapping

    from hotzone.domain.model import ItemCategory


class SpreadsheetParseError(ValueError):
    """Raised when uploaded bytes cannot be read as an inventory workbook."""


@dataclass(frozen=True, slots=True)
class SheetRow:
    """One data row keyed by header name; ``row_number`` is the 1-based sheet row."""

    row_number: int
    values: Mapping[str, object]


@dataclass(slots=True)
class ParsedWorkbook:
    """Rows per category; a category is absent when its sheet is missing."""

    rows_by_category: dict[ItemCategory, tuple[SheetRow, ...]] = field(
        default_factory=dict["ItemCategory", tuple[SheetRow, ...]]
    )

    def rows_for(self, category: ItemCategory) -> tuple[SheetRow, ...]:
        return self.rows_by_category.get(category, ())

    def has_sheet(self, category: ItemCategory) -> bool:
        return category in self.rows_by_category


@dataclass(frozen=True, slots=True)
class SheetData:
    """Column order plus rows to write into one sheet."""

    columns: tuple[str, ...]
    rows: tuple[Mapping[str, object], ...] = ()


class SpreadsheetReader(Protocol):
    """Parse file bytes into named-field rows per category sheet."""

    def __call__(self, data: bytes) -> ParsedWorkbook: ...


class SpreadsheetWriter(Protocol):
    """Serialize sheets (one per category) into file bytes."""

    def __call__(self, sheets: Mapping[ItemCategory, SheetData]) -> bytes: ...
