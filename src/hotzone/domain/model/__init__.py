"""Domain model for the collectibles inventory."""

from __future__ import annotations

from .base import Entity, InventoryItem, OwnedEntity
from .enums import ItemCategory
from .items import ITEM_CLASS_BY_CATEGORY, Card, Comic
from .locations import Container, User, Zone

__all__ = [
    "ITEM_CLASS_BY_CATEGORY",
    "Card",
    "Comic",
    "Container",
    "Entity",
    "InventoryItem",
    "ItemCategory",
    "OwnedEntity",
    "User",
    "Zone",
]
