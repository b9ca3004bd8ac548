"""Flatten stored items into sheets that re-import without changes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from hotzone.domain.model import ItemCategory
from hotzone.domain.ports.spreadsheet import SheetData
from hotzone.domain.reconciliation.fields import (
    CONTAINER_COLUMN,
    ID_COLUMN,
    ZONE_COLUMN,
    schema_for,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from datetime import date

    from hotzone.domain.model import Container, InventoryItem, Zone

EXPORT_FILENAME_PREFIX: Final[str] = "hotzone-items"


def export_filename(today: date) -> str:
    return f"{EXPORT_FILENAME_PREFIX}-{today.isoformat()}.xlsx"


def _export_value(value: object) -> object:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    return value


def export_row(
    record: InventoryItem,
    *,
    containers: Mapping[int | None, Container],
    zones: Mapping[int | None, Zone],
) -> dict[str, object]:
    """One sheet row for ``record``, keyed by export column."""

    container = containers.get(record.container_id)
    zone = zones.get(container.zone_id) if container is not None else None
    row: dict[str, object] = {
        ID_COLUMN: record.id,
        CONTAINER_COLUMN: container.name if container is not None else "",
        ZONE_COLUMN: zone.name if zone is not None else "",
    }
    for name in schema_for(record.category).field_names:
        row[name] = _export_value(getattr(record, name))
    return row


def build_export_sheets(
    cards: Iterable[InventoryItem],
    comics: Iterable[InventoryItem],
    containers: Iterable[Container],
    zones: Iterable[Zone],
) -> dict[ItemCategory, SheetData]:
    """Build both category sheets; a category without records still gets its header."""

    containers_by_id = {container.id: container for container in containers}
    zones_by_id = {zone.id: zone for zone in zones}
    records_by_category = {ItemCategory.CARD: cards, ItemCategory.COMIC: comics}
    return {
        category: SheetData(
            columns=schema_for(category).export_columns,
            rows=tuple(
                export_row(record, containers=containers_by_id, zones=zones_by_id)
                for record in records
            ),
        )
        for category, records in records_by_category.items()
    }
