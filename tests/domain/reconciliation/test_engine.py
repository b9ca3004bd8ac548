from __future__ import annotations

from hotzone.adapters.spreadsheet import read_workbook
from hotzone.domain.model import ItemCategory
from hotzone.domain.ports.spreadsheet import ParsedWorkbook, SpreadsheetParseError
from hotzone.domain.reconciliation import ImportStatus, ReconciliationEngine
from hotzone.domain.reconciliation.engine import MISSING_SHEETS_MESSAGE
from hotzone.domain.reconciliation.executor import ExecutionResult
from hotzone.domain.reconciliation.plan import ReconciliationPlan
from tests.helpers.inventory import (
    USER_ID,
    FakeInventoryUnitOfWork,
    build_workbook,
    card_row,
    comic_row,
    make_comic,
    seeded_unit_of_work,
)


def _engine(uow: FakeInventoryUnitOfWork) -> ReconciliationEngine:
    return ReconciliationEngine(read_workbook=read_workbook, unit_of_work_factory=lambda: uow)


def test_new_card_and_changed_comic_are_applied() -> None:
    uow = seeded_unit_of_work(comics=[make_comic(id=7, price=450.0)])
    data = build_workbook(
        cards=[card_row()],
        comics=[comic_row(id=7, price=525)],
    )

    result = _engine(uow).reconcile(data, user_id=USER_ID)

    assert result.to_dict() == {
        "status": "success",
        "created": {"cards": 1, "comics": 0},
        "updated": {"cards": 0, "comics": 1},
        "errors": [],
    }
    assert uow.repositories.comics.items[0].price == 525.0


def test_unknown_container_yields_partial_with_row_error() -> None:
    uow = seeded_unit_of_work()
    data = build_workbook(cards=[card_row(container_name="Nonexistent Box")])

    result = _engine(uow).reconcile(data, user_id=USER_ID)

    assert result.status is ImportStatus.PARTIAL
    assert result.created.total == 0
    assert result.updated.total == 0
    assert [error.to_dict() for error in result.errors] == [
        {"row": 2, "category": "card", "message": 'Container "Nonexistent Box" not found'}
    ]


def test_unchanged_identified_rows_are_silent_successes() -> None:
    uow = seeded_unit_of_work(comics=[make_comic(id=42)])
    data = build_workbook(comics=[comic_row(id="42")])

    result = _engine(uow).reconcile(data, user_id=USER_ID)

    assert result.status is ImportStatus.SUCCESS
    assert result.updated.total == 0
    assert result.errors == []
    assert uow.repositories.comics.updated == []


def test_identical_rows_in_one_upload_create_nothing() -> None:
    uow = seeded_unit_of_work()
    data = build_workbook(cards=[card_row(), card_row(number=1)])

    result = _engine(uow).reconcile(data, user_id=USER_ID)

    assert result.status is ImportStatus.PARTIAL
    assert result.created.total == 0
    assert [error.row for error in result.errors] == [2, 3]
    assert uow.repositories.cards.items == []


def test_blank_rows_are_skipped_but_keep_row_numbers() -> None:
    uow = seeded_unit_of_work()
    blank = dict.fromkeys(card_row())
    data = build_workbook(cards=[card_row(), blank, card_row(number="2", container_name="Nope")])

    result = _engine(uow).reconcile(data, user_id=USER_ID)

    assert result.created.cards == 1
    assert [error.row for error in result.errors] == [4]


def test_unreadable_file_is_a_failure() -> None:
    uow = seeded_unit_of_work()

    result = _engine(uow).reconcile(b"definitely not a workbook", user_id=USER_ID)

    assert result.status is ImportStatus.FAILURE
    assert result.created.total == 0
    assert len(result.errors) == 1
    assert result.errors[0].row == 0
    assert result.errors[0].message.startswith("Failed to process file:")


def test_workbook_without_inventory_sheets_is_a_failure() -> None:
    uow = seeded_unit_of_work()
    data = build_workbook(extra_sheets=["Sheet1"])

    result = _engine(uow).reconcile(data, user_id=USER_ID)

    assert result.status is ImportStatus.FAILURE
    assert [error.message for error in result.errors] == [MISSING_SHEETS_MESSAGE]


def test_engine_passes_snapshot_to_injected_stages() -> None:
    uow = seeded_unit_of_work(comics=[make_comic(id=42)])
    observed: dict[str, object] = {}

    def reader(data: bytes) -> ParsedWorkbook:
        if not data:
            raise SpreadsheetParseError("empty")
        return ParsedWorkbook(rows_by_category={ItemCategory.COMIC: ()})

    def planner(rows_by_category, *, snapshots, directory):  # noqa: ANN001, ANN202
        observed["comics"] = len(snapshots[ItemCategory.COMIC])
        observed["containers"] = len(directory)
        return ReconciliationPlan()

    def executor(plan, *, uow, user_id):  # noqa: ANN001, ANN202
        observed["user_id"] = user_id
        return ExecutionResult()

    engine = ReconciliationEngine(
        read_workbook=reader,
        unit_of_work_factory=lambda: uow,
        plan=planner,
        execute=executor,
    )
    result = engine.reconcile(b"x", user_id=USER_ID)

    assert result.status is ImportStatus.SUCCESS
    assert observed == {"comics": 1, "containers": 1, "user_id": USER_ID}
