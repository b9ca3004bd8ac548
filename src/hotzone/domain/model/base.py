"""
Base building blocks:
store-assigned identity, ownership, category contract.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from datetime import datetime

    from hotzone.domain.model.enums import ItemCategory


@dataclass(eq=False, kw_only=True)
class Entity:
    """Identity is assigned by the store on first flush."""

    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_persisted(self) -> bool:
        return self.id is not None


@dataclass(eq=False, kw_only=True)
class OwnedEntity(Entity):
    """Entity belonging to exactly one user; never shared."""

    user_id: int

    def is_owned_by(self, user_id: int) -> bool:
        return self.user_id == user_id


@dataclass(eq=False, kw_only=True)
class InventoryItem(OwnedEntity):
    """Fields shared by every collectible regardless of category."""

    CATEGORY: ClassVar[ItemCategory]

    container_id: int
    grade: float | None = None
    condition: str | None = None
    quantity: int = 1
    price: float | None = None
    cost: float | None = None
    description: str | None = None

    @property
    def category(self) -> ItemCategory:
        return self.CATEGORY
