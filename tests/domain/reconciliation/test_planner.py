from __future__ import annotations

import pytest

from hotzone.domain.model import ItemCategory
from hotzone.domain.reconciliation.plan import (
    BatchRow,
    CreateOutcome,
    NoOpOutcome,
    RejectOutcome,
    RejectReason,
    UpdateOutcome,
)
from hotzone.domain.reconciliation.planner import (
    EXISTING_DUPLICATE_MESSAGE,
    ContainerDirectory,
    RecordSnapshot,
    classify_row,
    normalize_identifier,
    plan_upload,
    resolve_container,
)
from tests.helpers.inventory import (
    OTHER_USER_ID,
    USER_ID,
    card_row,
    comic_row,
    make_card,
    make_comic,
    make_container,
    make_zone,
)


def _card(row_number: int = 2, **cells: object) -> BatchRow:
    return BatchRow(category=ItemCategory.CARD, row_number=row_number, values=card_row(**cells))


def _comic(row_number: int = 2, **cells: object) -> BatchRow:
    return BatchRow(category=ItemCategory.COMIC, row_number=row_number, values=comic_row(**cells))


def _snapshot(category: ItemCategory, *records: object) -> RecordSnapshot:
    return RecordSnapshot.build(category, records, user_id=USER_ID)  # pyright: ignore[reportArgumentType]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(42, "42"), (42.0, "42"), ("042", "42"), (" 42 ", "42"), ("abc", "abc"), (None, None), ("", None)],
)
def test_normalize_identifier(raw: object, expected: str | None) -> None:
    assert normalize_identifier(raw) == expected


def test_new_row_against_empty_snapshot_is_a_create() -> None:
    outcome = classify_row(_card(), container_id=100, snapshot=RecordSnapshot(ItemCategory.CARD))

    assert isinstance(outcome, CreateOutcome)
    assert outcome.fields["container_id"] == 100
    assert outcome.fields["year"] == 1989
    assert outcome.fields["is_rookie"] is True
    assert outcome.fields["quantity"] == 1


def test_identified_row_matching_record_is_a_noop() -> None:
    comic = make_comic(id=42)
    outcome = classify_row(
        _comic(id="42"),
        container_id=100,
        snapshot=_snapshot(ItemCategory.COMIC, comic),
    )

    assert isinstance(outcome, NoOpOutcome)
    assert outcome.target_id == 42


def test_identified_row_with_changed_price_is_an_update() -> None:
    comic = make_comic(id=42)
    outcome = classify_row(
        _comic(id=42.0, price=500),
        container_id=100,
        snapshot=_snapshot(ItemCategory.COMIC, comic),
    )

    assert isinstance(outcome, UpdateOutcome)
    assert outcome.target_id == 42
    assert outcome.changed == ("price",)
    assert outcome.fields["price"] == 500.0


def test_casing_edit_on_identified_row_is_an_update() -> None:
    card = make_card(id=5)
    outcome = classify_row(
        _card(id=5, manufacturer="UPPER DECK"),
        container_id=100,
        snapshot=_snapshot(ItemCategory.CARD, card),
    )

    assert isinstance(outcome, UpdateOutcome)
    assert outcome.changed == ("manufacturer",)


def test_unknown_id_is_rejected_and_never_created() -> None:
    outcome = classify_row(
        _card(id="99"),
        container_id=100,
        snapshot=_snapshot(ItemCategory.CARD, make_card(id=1)),
    )

    assert isinstance(outcome, RejectOutcome)
    assert outcome.reason is RejectReason.UNKNOWN_ID
    assert outcome.message == "No card found with id: 99 (or it belongs to another user)"


def test_id_owned_by_another_user_is_not_found() -> None:
    foreign = make_card(id=7, user_id=OTHER_USER_ID)
    outcome = classify_row(
        _card(id=7),
        container_id=100,
        snapshot=_snapshot(ItemCategory.CARD, foreign),
    )

    assert isinstance(outcome, RejectOutcome)
    assert outcome.reason is RejectReason.UNKNOWN_ID


def test_row_without_id_matching_existing_key_is_rejected() -> None:
    outcome = classify_row(
        _card(manufacturer="upper deck"),
        container_id=100,
        snapshot=_snapshot(ItemCategory.CARD, make_card(id=1)),
    )

    assert isinstance(outcome, RejectOutcome)
    assert outcome.reason is RejectReason.DUPLICATE_EXISTING
    assert outcome.message == EXISTING_DUPLICATE_MESSAGE


def test_missing_required_fields_are_rejected() -> None:
    outcome = classify_row(
        _comic(publisher="  "),
        container_id=100,
        snapshot=RecordSnapshot(ItemCategory.COMIC),
    )

    assert isinstance(outcome, RejectOutcome)
    assert outcome.reason is RejectReason.MISSING_REQUIRED_FIELDS
    assert outcome.message == "Missing required fields: title, publisher, issue, or year"


def test_non_numeric_value_in_numeric_field_is_rejected() -> None:
    outcome = classify_row(
        _card(grade="mint"),
        container_id=100,
        snapshot=RecordSnapshot(ItemCategory.CARD),
    )

    assert isinstance(outcome, RejectOutcome)
    assert outcome.reason is RejectReason.INVALID_VALUE
    assert outcome.message == "Invalid value for grade: mint"


def test_resolve_container_reports_blank_and_unknown_names() -> None:
    directory = ContainerDirectory([make_container()])

    blank = resolve_container(_card(container_name=" "), directory)
    unknown = resolve_container(_card(container_name="Nonexistent Box"), directory)
    found = resolve_container(_card(container_name="box a"), directory)

    assert isinstance(blank, RejectOutcome)
    assert blank.message == "Missing container_name"
    assert isinstance(unknown, RejectOutcome)
    assert unknown.message == 'Container "Nonexistent Box" not found'
    assert found is directory.resolve("Box A")


def test_container_directory_uses_zone_to_disambiguate() -> None:
    office = make_zone(id=10, name="Office")
    garage = make_zone(id=11, name="Garage")
    office_box = make_container(id=100, zone_id=10, name="Long Box")
    garage_box = make_container(id=101, zone_id=11, name="Long Box")
    directory = ContainerDirectory([office_box, garage_box], [office, garage])

    assert directory.resolve("long box") is office_box
    assert directory.resolve("Long Box", zone_name="garage") is garage_box
    assert directory.resolve("Long Box", zone_name="Attic") is office_box
    assert len(directory) == 2


def test_plan_upload_rejects_every_member_of_a_duplicate_pair() -> None:
    rows = {ItemCategory.CARD: (_card(row_number=2), _card(row_number=3), _card(4, number="2"))}
    plan = plan_upload(
        rows,
        snapshots={},
        directory=ContainerDirectory([make_container()]),
    )

    assert [outcome.row.row_number for outcome in plan.duplicates] == [2, 3]
    assert [create.row.row_number for create in plan.creates] == [4]
    assert {error.row for error in plan.errors()} == {2, 3}
    assert all("same upload" in error.message for error in plan.errors())


def test_unresolved_rows_are_not_grouped_as_duplicates() -> None:
    rows = {
        ItemCategory.CARD: (
            _card(row_number=2, container_name="Nowhere"),
            _card(row_number=3, container_name="Nowhere"),
        )
    }
    plan = plan_upload(rows, snapshots={}, directory=ContainerDirectory([make_container()]))

    assert plan.duplicates == []
    assert [reject.reason for reject in plan.rejections] == [
        RejectReason.CONTAINER_NOT_FOUND,
        RejectReason.CONTAINER_NOT_FOUND,
    ]


def test_plan_errors_are_ordered_cards_first_then_by_row() -> None:
    rows = {
        ItemCategory.COMIC: (_comic(row_number=2, container_name=None),),
        ItemCategory.CARD: (
            _card(row_number=5, container_name=None),
            _card(row_number=3, player=None),
        ),
    }
    plan = plan_upload(rows, snapshots={}, directory=ContainerDirectory([make_container()]))

    assert [(error.category, error.row) for error in plan.errors()] == [
        (ItemCategory.CARD, 3),
        (ItemCategory.CARD, 5),
        (ItemCategory.COMIC, 2),
    ]


def test_plan_counts_partitions() -> None:
    comic = make_comic(id=42)
    rows = {
        ItemCategory.CARD: (_card(row_number=2),),
        ItemCategory.COMIC: (_comic(row_number=2, id=42), _comic(row_number=3, id=43, issue=301)),
    }
    plan = plan_upload(
        rows,
        snapshots={ItemCategory.COMIC: _snapshot(ItemCategory.COMIC, comic)},
        directory=ContainerDirectory([make_container()]),
    )

    assert plan.counts() == {
        "updates": 0,
        "creates": 1,
        "noops": 1,
        "duplicates": 0,
        "rejections": 1,
    }
