"""Equivalence of normalized values and of whole records.

Comparison is exact for text (case-sensitive). Case folding belongs to the
composite key builder only, so a casing edit on an identified row is a real
update while it still collides with an existing item when no id is given.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from .fields import record_field_values, schema_for
from .normalize import normalize_cell

if TYPE_CHECKING:
    from collections.abc import Mapping

    from hotzone.domain.model import InventoryItem

NUMERIC_TOLERANCE: Final[float] = 1e-4


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def values_equal(left: object, right: object) -> bool:
    normalized_left = normalize_cell(left)
    normalized_right = normalize_cell(right)

    if normalized_left is None and normalized_right is None:
        return True
    if normalized_left is None or normalized_right is None:
        return False
    if _is_number(normalized_left) and _is_number(normalized_right):
        return abs(normalized_left - normalized_right) < NUMERIC_TOLERANCE  # pyright: ignore[reportOperatorIssue]
    if isinstance(normalized_left, bool) or isinstance(normalized_right, bool):
        return (
            isinstance(normalized_left, bool)
            and isinstance(normalized_right, bool)
            and normalized_left == normalized_right
        )
    return normalized_left == normalized_right


def changed_fields(record: InventoryItem, fields: Mapping[str, object]) -> tuple[str, ...]:
    """Return the tracked fields whose incoming value differs from ``record``."""

    schema = schema_for(record.category)
    current = record_field_values(record)
    return tuple(
        name for name in schema.tracked_fields if not values_equal(current[name], fields.get(name))
    )


def records_equivalent(record: InventoryItem, fields: Mapping[str, object]) -> bool:
    return not changed_fields(record, fields)
