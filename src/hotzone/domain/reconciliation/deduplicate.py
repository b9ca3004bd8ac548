"""Intra-batch duplicate detection.

Responsibilities of this stage:
- group the rows of one category by composite key
- flag every member of a group with more than one row
- avoid persistence/database lookups

Rows whose container could not be resolved never reach this stage.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .keys import CompositeKey

DUPLICATE_IN_BATCH_MESSAGE: Final[str] = (
    "Duplicate entry: this row is identical to another row in the same upload"
)


@dataclass(frozen=True, slots=True)
class BatchDuplicates:
    """Row numbers grouped by composite key for one category.

    ``duplicate_rows`` is fixed when grouping finishes, so per-row lookups are O(1).
    """

    rows_by_key: dict[CompositeKey, list[int]] = field(
        default_factory=dict["CompositeKey", list[int]]
    )
    duplicate_rows: frozenset[int] = frozenset()

    @property
    def duplicate_groups(self) -> tuple[tuple[int, ...], ...]:
        return tuple(
            tuple(row_numbers) for row_numbers in self.rows_by_key.values() if len(row_numbers) > 1
        )

    def is_duplicate(self, row_number: int) -> bool:
        return row_number in self.duplicate_rows


def find_batch_duplicates(keyed_rows: Iterable[tuple[int, CompositeKey]]) -> BatchDuplicates:
    """Group ``(row_number, key)`` pairs and expose colliding rows."""

    rows_by_key: dict[CompositeKey, list[int]] = {}
    for row_number, key in keyed_rows:
        rows_by_key.setdefault(key, []).append(row_number)
    duplicate_rows = frozenset(
        row_number
        for row_numbers in rows_by_key.values()
        if len(row_numbers) > 1
        for row_number in row_numbers
    )
    return BatchDuplicates(rows_by_key=rows_by_key, duplicate_rows=duplicate_rows)
