"""Apply a reconciliation plan against the store.

Updates run before creates, cards before comics, one row at a time. Each
successful mutation is committed on its own and a failed one is rolled back,
so a failure never undoes rows that were already applied. Per-row store
failures are collected as ``RowError``s; the executor always runs the full plan.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from hotzone.domain.model import ITEM_CLASS_BY_CATEGORY, ItemCategory
from hotzone.domain.ports.persistence import DuplicateItemError, StoreMutationError

from .plan import RowError

if TYPE_CHECKING:
    from hotzone.domain.ports.unit_of_work import InventoryUnitOfWork

    from .plan import BatchRow, CreateOutcome, ReconciliationPlan, UpdateOutcome

log = logging.getLogger(__name__)

_DUPLICATE_MESSAGES: Final[dict[ItemCategory, str]] = {
    ItemCategory.CARD: (
        "Duplicate card (same player, manufacturer, sport, year, number "
        "already exists in this container)"
    ),
    ItemCategory.COMIC: (
        "Duplicate comic (same title, publisher, issue, year already exists in this container)"
    ),
}


@dataclass(slots=True)
class CategoryCounts:
    cards: int = 0
    comics: int = 0

    def increment(self, category: ItemCategory) -> None:
        if category is ItemCategory.CARD:
            self.cards += 1
        else:
            self.comics += 1

    def for_category(self, category: ItemCategory) -> int:
        return self.cards if category is ItemCategory.CARD else self.comics

    @property
    def total(self) -> int:
        return self.cards + self.comics

    def to_dict(self) -> dict[str, int]:
        return {"cards": self.cards, "comics": self.comics}


@dataclass(slots=True)
class ExecutionResult:
    """Summary of store mutations performed for one plan."""

    created: CategoryCounts = field(default_factory=CategoryCounts)
    updated: CategoryCounts = field(default_factory=CategoryCounts)
    errors: list[RowError] = field(default_factory=list["RowError"])

    def add_error(self, row: BatchRow, message: str) -> None:
        self.errors.append(RowError(row=row.row_number, category=row.category, message=message))


def not_found_message(category: ItemCategory, item_id: object) -> str:
    return f"No {category.value} found with id: {item_id} (or it belongs to another user)"


def execute_plan(
    plan: ReconciliationPlan,
    *,
    uow: InventoryUnitOfWork,
    user_id: int,
) -> ExecutionResult:
    """Apply updates, then creates, collecting per-row errors."""

    result = ExecutionResult()
    for category in ItemCategory:
        updates = plan.updates_for(category)
        log.info("Applying %s %s updates", len(updates), category.value)
        for update in updates:
            _apply_update(update, uow=uow, user_id=user_id, result=result)
    for category in ItemCategory:
        creates = plan.creates_for(category)
        log.info("Applying %s %s creates", len(creates), category.value)
        for create in creates:
            _apply_create(create, uow=uow, user_id=user_id, result=result)
    return result


def _apply_update(
    update: UpdateOutcome,
    *,
    uow: InventoryUnitOfWork,
    user_id: int,
    result: ExecutionResult,
) -> None:
    category = update.row.category
    repository = uow.repositories.items(category)
    try:
        affected = repository.update_owned(update.target_id, user_id=user_id, values=update.fields)
        if affected == 0:
            uow.rollback()
            result.add_error(update.row, not_found_message(category, update.target_id))
            return
        uow.commit()
    except DuplicateItemError as exc:
        uow.rollback()
        log.warning(
            "Update of %s id=%s hit a uniqueness constraint: %s",
            category.value,
            update.target_id,
            exc,
        )
        result.add_error(update.row, _DUPLICATE_MESSAGES[category])
        return
    except StoreMutationError as exc:
        uow.rollback()
        log.warning("Update of %s id=%s failed: %s", category.value, update.target_id, exc)
        result.add_error(update.row, f"Update failed: {exc}")
        return
    result.updated.increment(category)


def _apply_create(
    create: CreateOutcome,
    *,
    uow: InventoryUnitOfWork,
    user_id: int,
    result: ExecutionResult,
) -> None:
    category = create.row.category
    repository = uow.repositories.items(category)
    item = ITEM_CLASS_BY_CATEGORY[category](user_id=user_id, **create.fields)  # pyright: ignore[reportArgumentType]
    try:
        repository.add(item)
        uow.commit()
    except DuplicateItemError as exc:
        uow.rollback()
        log.warning(
            "Create of %s from row %s hit a uniqueness constraint: %s",
            category.value,
            create.row.row_number,
            exc,
        )
        result.add_error(create.row, _DUPLICATE_MESSAGES[category])
        return
    except StoreMutationError as exc:
        uow.rollback()
        log.warning(
            "Create of %s from row %s failed: %s", category.value, create.row.row_number, exc
        )
        result.add_error(create.row, f"Create failed: {exc}")
        return
    result.created.increment(category)
