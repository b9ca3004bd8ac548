from __future__ import annotations

from datetime import date

from hotzone.domain.export import build_export_sheets, export_filename
from hotzone.domain.model import ItemCategory
from tests.helpers.inventory import make_card, make_comic, make_container, make_zone


def test_export_filename_uses_iso_date() -> None:
    assert export_filename(date(2024, 3, 9)) == "hotzone-items-2024-03-09.xlsx"


def test_card_sheet_columns_and_values() -> None:
    card = make_card(id=3, grade=9.5, team=None, is_rookie=False)
    sheets = build_export_sheets([card], [], [make_container()], [make_zone()])

    cards = sheets[ItemCategory.CARD]
    assert cards.columns == (
        "id",
        "container_name",
        "zone_name",
        "grade",
        "condition",
        "quantity",
        "player",
        "team",
        "manufacturer",
        "sport",
        "year",
        "number",
        "number_out_of",
        "is_rookie",
        "price",
        "cost",
        "description",
    )
    row = cards.rows[0]
    assert row["id"] == 3
    assert row["container_name"] == "Box A"
    assert row["zone_name"] == "Office"
    assert row["grade"] == 9.5
    assert row["team"] == ""
    assert row["is_rookie"] == "No"
    assert row["price"] == ""


def test_empty_category_still_has_columns() -> None:
    sheets = build_export_sheets([], [make_comic(id=1)], [make_container()], [make_zone()])

    assert sheets[ItemCategory.CARD].rows == ()
    assert sheets[ItemCategory.CARD].columns[0] == "id"
    assert sheets[ItemCategory.COMIC].columns[6:10] == ("title", "publisher", "issue", "year")
    assert sheets[ItemCategory.COMIC].rows[0]["price"] == 450.0


def test_unknown_container_exports_blank_location() -> None:
    sheets = build_export_sheets([make_card(id=1, container_id=999)], [], [], [])

    row = sheets[ItemCategory.CARD].rows[0]
    assert row["container_name"] == ""
    assert row["zone_name"] == ""
