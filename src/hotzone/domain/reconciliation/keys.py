"""Composite identity keys for rows and records without an explicit id.

Keys fold formatting noise away before serialization:
- text is trimmed and lower-cased, blank text becomes ``None``
- integers and decimals are parsed (unparseable values become ``None``)
- the rookie flag is coerced to a boolean

Fields are serialized in the category's schema order, so the same logical item
always yields the same key whether it came from a spreadsheet cell or a stored
record. Keys are bucketed per category by the caller.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Final

from .fields import CONTAINER_ID_FIELD, FieldKind, FieldSpec, record_field_values, schema_for
from .normalize import (
    InvalidFieldValueError,
    coerce_decimal,
    coerce_flag,
    coerce_int,
    coerce_text,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from hotzone.domain.model import InventoryItem, ItemCategory

type CompositeKey = str

KEY_DECIMAL_PLACES: Final[int] = 4


def composite_key(
    category: ItemCategory,
    container_id: int | str,
    values: Mapping[str, object],
) -> CompositeKey:
    """Serialize identity-bearing fields into a deterministic key. Never raises."""

    parts: list[list[object]] = [[CONTAINER_ID_FIELD, container_id]]
    for spec in schema_for(category).fields:
        parts.append([spec.name, _key_value(spec, values.get(spec.name))])
    return json.dumps(parts, separators=(",", ":"), ensure_ascii=False)


def record_key(record: InventoryItem) -> CompositeKey:
    return composite_key(record.category, record.container_id, record_field_values(record))


def _key_value(spec: FieldSpec, value: object) -> object:
    match spec.kind:
        case FieldKind.TEXT:
            text = coerce_text(value)
            return text.lower() if text is not None else None
        case FieldKind.INTEGER:
            number = _lenient(coerce_int, spec.name, value)
            return spec.default if number is None else number
        case FieldKind.DECIMAL:
            return _canonical_decimal(_lenient(coerce_decimal, spec.name, value))
        case FieldKind.FLAG:
            return coerce_flag(value)


def _lenient[T](coerce: Callable[[str, object], T | None], name: str, value: object) -> T | None:
    try:
        return coerce(name, value)
    except InvalidFieldValueError:
        return None


def _canonical_decimal(number: float | None) -> int | float | None:
    """Round to ``KEY_DECIMAL_PLACES``.

    Rounding and the comparator's 1e-4 tolerance can disagree right at a rounding
    boundary (1.00004999 vs 1.00005001); cell values are never that precise.
    """

    if number is None:
        return None
    rounded = round(number, KEY_DECIMAL_PLACES)
    return int(rounded) if rounded.is_integer() else rounded
