"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ItemCategory(StrEnum):
    """Inventory item category; each category has its own table and sheet."""

    CARD = "card"
    COMIC = "comic"

    @property
    def sheet_name(self) -> str:
        return _SHEET_NAMES[self]

    @property
    def plural(self) -> str:
        return f"{self.value}s"


_SHEET_NAMES: dict[ItemCategory, str] = {
    ItemCategory.CARD: "Cards",
    ItemCategory.COMIC: "Comics",
}
