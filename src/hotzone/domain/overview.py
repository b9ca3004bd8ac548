"""Read-side summaries of one user's inventory.

Counts are record counts (one card row is one item, whatever its quantity).
Zones and containers are listed by name; recent items are newest first.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Final

from hotzone.domain.model import Card, ItemCategory

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from hotzone.domain.model import Comic, Container, InventoryItem, Zone

RECENT_ITEMS_LIMIT: Final[int] = 5

_OLDEST: Final[datetime] = datetime.min.replace(tzinfo=UTC)


@dataclass(frozen=True, slots=True)
class ContainerSummary:
    id: int | None
    name: str
    zone_name: str
    card_count: int
    comic_count: int

    @property
    def item_count(self) -> int:
        return self.card_count + self.comic_count

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "zone_name": self.zone_name,
            "cards": self.card_count,
            "comics": self.comic_count,
            "items": self.item_count,
        }


@dataclass(frozen=True, slots=True)
class ZoneSummary:
    id: int | None
    name: str
    container_count: int
    item_count: int

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "containers": self.container_count,
            "items": self.item_count,
        }


@dataclass(frozen=True, slots=True)
class RecentItem:
    category: ItemCategory
    id: int | None
    label: str
    quantity: int
    created_at: datetime | None

    def to_dict(self) -> dict[str, object]:
        return {
            "category": self.category.value,
            "id": self.id,
            "label": self.label,
            "quantity": self.quantity,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True, slots=True)
class InventoryStats:
    zones: int
    containers: int
    cards: int
    comics: int
    recent: tuple[RecentItem, ...] = ()

    @property
    def items(self) -> int:
        return self.cards + self.comics

    def to_dict(self) -> dict[str, object]:
        return {
            "zones": self.zones,
            "containers": self.containers,
            "cards": self.cards,
            "comics": self.comics,
            "items": self.items,
            "recent": [item.to_dict() for item in self.recent],
        }


def _items_per_container(items: Iterable[InventoryItem]) -> Counter[int]:
    return Counter(item.container_id for item in items)


def _by_name[T: (Zone, Container)](entities: Iterable[T]) -> list[T]:
    return sorted(entities, key=lambda entity: (entity.name.lower(), entity.id or 0))


def summarize_containers(
    containers: Iterable[Container],
    zones: Iterable[Zone],
    cards: Iterable[Card],
    comics: Iterable[Comic],
) -> list[ContainerSummary]:
    """Containers ordered by zone name, then container name."""

    zone_names = {zone.id: zone.name for zone in zones}
    card_counts = _items_per_container(cards)
    comic_counts = _items_per_container(comics)
    summaries = [
        ContainerSummary(
            id=container.id,
            name=container.name,
            zone_name=zone_names.get(container.zone_id, ""),
            card_count=card_counts[container.id] if container.id is not None else 0,
            comic_count=comic_counts[container.id] if container.id is not None else 0,
        )
        for container in _by_name(containers)
    ]
    return sorted(summaries, key=lambda summary: summary.zone_name.lower())


def summarize_zones(
    zones: Iterable[Zone],
    containers: Sequence[Container],
    cards: Iterable[Card],
    comics: Iterable[Comic],
) -> list[ZoneSummary]:
    items_per_container = _items_per_container(cards) + _items_per_container(comics)
    container_counts: Counter[int] = Counter()
    item_counts: Counter[int] = Counter()
    for container in containers:
        container_counts[container.zone_id] += 1
        if container.id is not None:
            item_counts[container.zone_id] += items_per_container[container.id]
    return [
        ZoneSummary(
            id=zone.id,
            name=zone.name,
            container_count=container_counts[zone.id] if zone.id is not None else 0,
            item_count=item_counts[zone.id] if zone.id is not None else 0,
        )
        for zone in _by_name(zones)
    ]


def item_label(item: InventoryItem) -> str:
    if isinstance(item, Card):
        return f"{item.year} {item.manufacturer} {item.player} #{item.number}"
    comic: Comic = item  # pyright: ignore[reportAssignmentType]
    return f"{comic.title} #{comic.issue} ({comic.publisher}, {comic.year})"


def recent_items(
    items: Iterable[InventoryItem],
    *,
    limit: int = RECENT_ITEMS_LIMIT,
) -> tuple[RecentItem, ...]:
    newest = sorted(
        items,
        key=lambda item: (item.created_at or _OLDEST, item.id or 0),
        reverse=True,
    )
    return tuple(
        RecentItem(
            category=item.category,
            id=item.id,
            label=item_label(item),
            quantity=item.quantity,
            created_at=item.created_at,
        )
        for item in newest[:limit]
    )


def inventory_stats(
    zones: Sequence[Zone],
    containers: Sequence[Container],
    cards: Sequence[Card],
    comics: Sequence[Comic],
    *,
    recent_limit: int = RECENT_ITEMS_LIMIT,
) -> InventoryStats:
    """Dashboard totals plus the most recently added items across both categories."""

    return InventoryStats(
        zones=len(zones),
        containers=len(containers),
        cards=len(cards),
        comics=len(comics),
        recent=recent_items([*cards, *comics], limit=recent_limit),
    )
