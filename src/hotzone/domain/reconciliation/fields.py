"""Per-category field schema shared by planning, keys, comparison and export.

The order of ``CategorySchema.fields`` is significant: composite keys
serialize fields in exactly this order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Final

from hotzone.domain.model import ItemCategory

from .normalize import normalize_cell

if TYPE_CHECKING:
    from collections.abc import Mapping

    from hotzone.domain.model import InventoryItem

ID_COLUMN: Final[str] = "id"
CONTAINER_COLUMN: Final[str] = "container_name"
ZONE_COLUMN: Final[str] = "zone_name"
CONTAINER_ID_FIELD: Final[str] = "container_id"


class FieldKind(StrEnum):
    TEXT = "text"
    INTEGER = "integer"
    DECIMAL = "decimal"
    FLAG = "flag"


@dataclass(frozen=True, slots=True)
class FieldSpec:
    name: str
    kind: FieldKind
    required: bool = False
    default: int | None = None


@dataclass(frozen=True, slots=True)
class CategorySchema:
    """Field layout of one item category."""

    category: ItemCategory
    specific: tuple[FieldSpec, ...]
    common: tuple[FieldSpec, ...]

    @property
    def fields(self) -> tuple[FieldSpec, ...]:
        return self.specific + self.common

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)

    @property
    def required_fields(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields if spec.required)

    @property
    def tracked_fields(self) -> tuple[str, ...]:
        """Fields compared when deciding whether an identified row changes a record."""
        return (CONTAINER_ID_FIELD, *self.field_names)

    @property
    def export_columns(self) -> tuple[str, ...]:
        leading = ("grade", "condition", "quantity")
        trailing = tuple(spec.name for spec in self.common if spec.name not in leading)
        specific = tuple(spec.name for spec in self.specific)
        return (ID_COLUMN, CONTAINER_COLUMN, ZONE_COLUMN, *leading, *specific, *trailing)

    def missing_required(self, values: Mapping[str, object]) -> tuple[str, ...]:
        return tuple(name for name in self.required_fields if normalize_cell(values.get(name)) is None)

    def missing_required_message(self) -> str:
        names = self.required_fields
        listed = ", ".join(names[:-1]) + f", or {names[-1]}" if len(names) > 1 else names[0]
        return f"Missing required fields: {listed}"


COMMON_FIELDS: Final[tuple[FieldSpec, ...]] = (
    FieldSpec("grade", FieldKind.DECIMAL),
    FieldSpec("condition", FieldKind.TEXT),
    FieldSpec("quantity", FieldKind.INTEGER, default=1),
    FieldSpec("price", FieldKind.DECIMAL),
    FieldSpec("cost", FieldKind.DECIMAL),
    FieldSpec("description", FieldKind.TEXT),
)

CARD_SCHEMA: Final[CategorySchema] = CategorySchema(
    category=ItemCategory.CARD,
    specific=(
        FieldSpec("player", FieldKind.TEXT, required=True),
        FieldSpec("team", FieldKind.TEXT),
        FieldSpec("manufacturer", FieldKind.TEXT, required=True),
        FieldSpec("sport", FieldKind.TEXT, required=True),
        FieldSpec("year", FieldKind.INTEGER, required=True),
        FieldSpec("number", FieldKind.TEXT, required=True),
        FieldSpec("number_out_of", FieldKind.INTEGER),
        FieldSpec("is_rookie", FieldKind.FLAG),
    ),
    common=COMMON_FIELDS,
)

COMIC_SCHEMA: Final[CategorySchema] = CategorySchema(
    category=ItemCategory.COMIC,
    specific=(
        FieldSpec("title", FieldKind.TEXT, required=True),
        FieldSpec("publisher", FieldKind.TEXT, required=True),
        FieldSpec("issue", FieldKind.INTEGER, required=True),
        FieldSpec("year", FieldKind.INTEGER, required=True),
    ),
    common=COMMON_FIELDS,
)

_SCHEMAS: Final[dict[ItemCategory, CategorySchema]] = {
    ItemCategory.CARD: CARD_SCHEMA,
    ItemCategory.COMIC: COMIC_SCHEMA,
}


def schema_for(category: ItemCategory) -> CategorySchema:
    return _SCHEMAS[category]


def record_field_values(record: InventoryItem) -> dict[str, object]:
    """Return the tracked field values of a stored record, container id included."""

    schema = schema_for(record.category)
    return {name: getattr(record, name) for name in schema.tracked_fields}
