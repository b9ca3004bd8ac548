"""Orchestrator for one bulk spreadsheet reconciliation pass.

The engine composes stage callables but does not prescribe concrete adapters:
the spreadsheet codec and the unit of work are injected, and the planning and
execution stages can be swapped for tests.

Flow: parse → load snapshot and container catalog → plan → execute → result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Final, Protocol

from hotzone.domain.model import ItemCategory
from hotzone.domain.ports.spreadsheet import SpreadsheetParseError

from .executor import CategoryCounts, ExecutionResult, execute_plan
from .plan import BatchRow, RowError
from .planner import ContainerDirectory, RecordSnapshot, plan_upload

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from hotzone.domain.ports.spreadsheet import ParsedWorkbook, SpreadsheetReader
    from hotzone.domain.ports.unit_of_work import InventoryUnitOfWork

    from .plan import ReconciliationPlan

log = logging.getLogger(__name__)

MISSING_SHEETS_MESSAGE: Final[str] = 'Spreadsheet must contain "Cards" and/or "Comics" sheets'


class ImportStatus(StrEnum):
    """``failure`` only when the file could not be read at all."""

    SUCCESS = "success"
    PARTIAL = "partial"
    FAILURE = "failure"


@dataclass(slots=True)
class ImportResult:
    status: ImportStatus
    created: CategoryCounts = field(default_factory=CategoryCounts)
    updated: CategoryCounts = field(default_factory=CategoryCounts)
    errors: list[RowError] = field(default_factory=list["RowError"])

    @classmethod
    def failed(cls, message: str) -> ImportResult:
        return cls(
            status=ImportStatus.FAILURE,
            errors=[RowError(row=0, category=ItemCategory.CARD, message=message)],
        )

    @classmethod
    def from_execution(
        cls,
        execution: ExecutionResult,
        *,
        rejected: Sequence[RowError],
    ) -> ImportResult:
        errors = [*rejected, *execution.errors]
        return cls(
            status=ImportStatus.PARTIAL if errors else ImportStatus.SUCCESS,
            created=execution.created,
            updated=execution.updated,
            errors=errors,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "status": self.status.value,
            "created": self.created.to_dict(),
            "updated": self.updated.to_dict(),
            "errors": [error.to_dict() for error in self.errors],
        }


class PlanUpload(Protocol):
    def __call__(
        self,
        rows_by_category: Mapping[ItemCategory, Sequence[BatchRow]],
        *,
        snapshots: Mapping[ItemCategory, RecordSnapshot],
        directory: ContainerDirectory,
    ) -> ReconciliationPlan: ...


class ExecutePlan(Protocol):
    def __call__(
        self,
        plan: ReconciliationPlan,
        *,
        uow: InventoryUnitOfWork,
        user_id: int,
    ) -> ExecutionResult: ...


def batch_rows(workbook: ParsedWorkbook) -> dict[ItemCategory, tuple[BatchRow, ...]]:
    return {
        category: tuple(
            BatchRow(category=category, row_number=sheet_row.row_number, values=sheet_row.values)
            for sheet_row in workbook.rows_for(category)
        )
        for category in ItemCategory
    }


def load_snapshots(uow: InventoryUnitOfWork, *, user_id: int) -> dict[ItemCategory, RecordSnapshot]:
    """Load every record owned by ``user_id`` once, indexed per category."""

    return {
        category: RecordSnapshot.build(
            category,
            uow.repositories.items(category).list_for_user(user_id),
            user_id=user_id,
        )
        for category in ItemCategory
    }


def load_container_directory(uow: InventoryUnitOfWork, *, user_id: int) -> ContainerDirectory:
    return ContainerDirectory(
        uow.repositories.containers.list_for_user(user_id),
        uow.repositories.zones.list_for_user(user_id),
    )


@dataclass(slots=True)
class ReconciliationEngine:
    """Run a full reconciliation pass from file bytes to store mutations."""

    read_workbook: SpreadsheetReader
    unit_of_work_factory: Callable[[], InventoryUnitOfWork]
    plan: PlanUpload = plan_upload
    execute: ExecutePlan = execute_plan

    def reconcile(self, data: bytes, *, user_id: int) -> ImportResult:
        """Reconcile an uploaded workbook against the records owned by ``user_id``."""

        try:
            workbook = self.read_workbook(data)
        except SpreadsheetParseError as exc:
            log.warning("Spreadsheet could not be parsed: %s", exc)
            return ImportResult.failed(f"Failed to process file: {exc}")
        if not any(workbook.has_sheet(category) for category in ItemCategory):
            log.warning("Spreadsheet has neither a Cards nor a Comics sheet")
            return ImportResult.failed(MISSING_SHEETS_MESSAGE)

        rows_by_category = batch_rows(workbook)
        log.info(
            "Loaded %s card rows and %s comic rows from spreadsheet",
            len(rows_by_category[ItemCategory.CARD]),
            len(rows_by_category[ItemCategory.COMIC]),
        )

        with self.unit_of_work_factory() as uow:
            snapshots = load_snapshots(uow, user_id=user_id)
            directory = load_container_directory(uow, user_id=user_id)
            log.info(
                "Snapshot for user %s: %s cards, %s comics, %s containers",
                user_id,
                len(snapshots[ItemCategory.CARD]),
                len(snapshots[ItemCategory.COMIC]),
                len(directory),
            )

            plan = self.plan(rows_by_category, snapshots=snapshots, directory=directory)
            log.info("Reconciliation plan: %s", dict(plan.counts()))

            execution = self.execute(plan, uow=uow, user_id=user_id)

        result = ImportResult.from_execution(execution, rejected=plan.errors())
        log.info(
            "Finished import: status=%s, created=%s, updated=%s, errors=%s",
            result.status.value,
            result.created.to_dict(),
            result.updated.to_dict(),
            len(result.errors),
        )
        return result
