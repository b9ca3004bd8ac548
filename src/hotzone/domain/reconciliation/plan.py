"""Reconciliation plan types shared by planner, executor and engine.

The plan is the contract between:
- row classification (pure, read-only against the snapshot)
- store mutation (executor)
- result reporting (engine)

Every row ends up in exactly one partition of the plan.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Literal

from hotzone.domain.model import ItemCategory

from .fields import CONTAINER_COLUMN, ID_COLUMN, ZONE_COLUMN
from .normalize import coerce_text

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .normalize import CellValue

type FieldSet = dict[str, CellValue]


@dataclass(frozen=True, slots=True)
class BatchRow:
    """One spreadsheet line for one category, still in raw cell form."""

    category: ItemCategory
    row_number: int
    values: Mapping[str, object]

    @property
    def raw_id(self) -> object:
        return self.values.get(ID_COLUMN)

    @property
    def container_name(self) -> str | None:
        return coerce_text(self.values.get(CONTAINER_COLUMN))

    @property
    def zone_name(self) -> str | None:
        return coerce_text(self.values.get(ZONE_COLUMN))


class OutcomeKind(StrEnum):
    UPDATE = "update"
    CREATE = "create"
    NOOP = "noop"
    REJECT = "reject"


class RejectReason(StrEnum):
    MISSING_CONTAINER = "missing_container"
    CONTAINER_NOT_FOUND = "container_not_found"
    MISSING_REQUIRED_FIELDS = "missing_required_fields"
    INVALID_VALUE = "invalid_value"
    UNKNOWN_ID = "unknown_id"
    DUPLICATE_IN_BATCH = "duplicate_in_batch"
    DUPLICATE_EXISTING = "duplicate_existing"


@dataclass(frozen=True, slots=True, kw_only=True)
class UpdateOutcome:
    """Identified row whose fields differ from the stored record."""

    row: BatchRow
    target_id: int
    fields: FieldSet
    changed: tuple[str, ...] = ()
    kind: Literal[OutcomeKind.UPDATE] = OutcomeKind.UPDATE


@dataclass(frozen=True, slots=True, kw_only=True)
class CreateOutcome:
    """Row without id that matches no existing item."""

    row: BatchRow
    fields: FieldSet
    kind: Literal[OutcomeKind.CREATE] = OutcomeKind.CREATE


@dataclass(frozen=True, slots=True, kw_only=True)
class NoOpOutcome:
    """Identified row equivalent to the stored record; dropped silently."""

    row: BatchRow
    target_id: int
    kind: Literal[OutcomeKind.NOOP] = OutcomeKind.NOOP


@dataclass(frozen=True, slots=True, kw_only=True)
class RejectOutcome:
    row: BatchRow
    reason: RejectReason
    message: str
    kind: Literal[OutcomeKind.REJECT] = OutcomeKind.REJECT


type RowOutcome = UpdateOutcome | CreateOutcome | NoOpOutcome | RejectOutcome


@dataclass(frozen=True, slots=True)
class RowError:
    """User-facing error tied to one spreadsheet row (row 0 means the whole file)."""

    row: int
    category: ItemCategory
    message: str

    def to_dict(self) -> dict[str, object]:
        return {"row": self.row, "category": self.category.value, "message": self.message}

    @classmethod
    def from_reject(cls, outcome: RejectOutcome) -> RowError:
        return cls(row=outcome.row.row_number, category=outcome.row.category, message=outcome.message)


@dataclass(slots=True)
class ReconciliationPlan:
    """Aggregate plan for one reconciliation pass."""

    updates: list[UpdateOutcome] = field(default_factory=list["UpdateOutcome"])
    creates: list[CreateOutcome] = field(default_factory=list["CreateOutcome"])
    duplicates: list[RejectOutcome] = field(default_factory=list["RejectOutcome"])
    rejections: list[RejectOutcome] = field(default_factory=list["RejectOutcome"])
    noops: list[NoOpOutcome] = field(default_factory=list["NoOpOutcome"])

    def add(self, outcome: RowOutcome) -> None:
        match outcome:
            case UpdateOutcome():
                self.updates.append(outcome)
            case CreateOutcome():
                self.creates.append(outcome)
            case NoOpOutcome():
                self.noops.append(outcome)
            case RejectOutcome(reason=RejectReason.DUPLICATE_IN_BATCH):
                self.duplicates.append(outcome)
            case RejectOutcome():
                self.rejections.append(outcome)

    def updates_for(self, category: ItemCategory) -> tuple[UpdateOutcome, ...]:
        return tuple(update for update in self.updates if update.row.category is category)

    def creates_for(self, category: ItemCategory) -> tuple[CreateOutcome, ...]:
        return tuple(create for create in self.creates if create.row.category is category)

    def errors(self) -> list[RowError]:
        """Rejected rows as errors, ordered by category then row number."""

        order = {category: index for index, category in enumerate(ItemCategory)}
        rejects = sorted(
            (*self.duplicates, *self.rejections),
            key=lambda outcome: (order[outcome.row.category], outcome.row.row_number),
        )
        return [RowError.from_reject(outcome) for outcome in rejects]

    def counts(self) -> Mapping[str, int]:
        return {
            "updates": len(self.updates),
            "creates": len(self.creates),
            "noops": len(self.noops),
            "duplicates": len(self.duplicates),
            "rejections": len(self.rejections),
        }
