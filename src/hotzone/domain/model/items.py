"""Collectible item entities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from hotzone.domain.model.base import InventoryItem
from hotzone.domain.model.enums import ItemCategory


@dataclass(eq=False, kw_only=True)
class Card(InventoryItem):
    CATEGORY: ClassVar[ItemCategory] = ItemCategory.CARD

    player: str
    manufacturer: str
    sport: str
    year: int
    number: str
    team: str | None = None
    number_out_of: int | None = None
    is_rookie: bool = False


@dataclass(eq=False, kw_only=True)
class Comic(InventoryItem):
    CATEGORY: ClassVar[ItemCategory] = ItemCategory.COMIC

    title: str
    publisher: str
    issue: int
    year: int


ITEM_CLASS_BY_CATEGORY: dict[ItemCategory, type[InventoryItem]] = {
    ItemCategory.CARD: Card,
    ItemCategory.COMIC: Comic,
}
