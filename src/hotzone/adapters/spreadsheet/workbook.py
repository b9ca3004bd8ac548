"""Read and write the two-sheet inventory workbook with openpyxl."""

from __future__ import annotations

import logging
from io import BytesIO
from typing import TYPE_CHECKING
from zipfile import BadZipFile

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from hotzone.domain.model import ItemCategory
from hotzone.domain.ports.spreadsheet import (
    ParsedWorkbook,
    SheetRow,
    SpreadsheetParseError,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from openpyxl.workbook.workbook import Workbook as WorkbookType
    from openpyxl.worksheet._read_only import ReadOnlyWorksheet
    from openpyxl.worksheet.worksheet import Worksheet

    from hotzone.domain.ports.spreadsheet import SheetData

log = logging.getLogger(__name__)

_FIRST_DATA_ROW = 2


def _sheet_by_name(workbook: WorkbookType, name: str) -> ReadOnlyWorksheet | None:
    if name in workbook.sheetnames:
        return workbook[name]  # pyright: ignore[reportReturnType]
    target = name.strip().lower()
    for sheet_name in workbook.sheetnames:
        if sheet_name.strip().lower() == target:
            return workbook[sheet_name]  # pyright: ignore[reportReturnType]
    return None


def _header_name(value: object) -> str | None:
    if value is None:
        return None
    name = str(value).strip().lower()
    return name or None


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _sheet_rows(sheet: ReadOnlyWorksheet) -> tuple[SheetRow, ...]:
    rows = sheet.iter_rows(values_only=True)
    header = next(rows, None)
    if header is None:
        return ()
    columns = [_header_name(value) for value in header]

    parsed: list[SheetRow] = []
    for row_number, cells in enumerate(rows, start=_FIRST_DATA_ROW):
        if all(_is_blank(value) for value in cells):
            continue
        values: dict[str, object] = {}
        for column, value in zip(columns, cells, strict=False):
            if column is not None and column not in values:
                values[column] = value
        parsed.append(SheetRow(row_number=row_number, values=values))
    return tuple(parsed)


def read_workbook(data: bytes) -> ParsedWorkbook:
    """Parse uploaded ``.xlsx`` bytes into rows per category sheet.

    A category whose sheet is missing is absent from the result; fully blank
    rows are skipped but keep their row numbers.
    """

    try:
        workbook = load_workbook(BytesIO(data), read_only=True, data_only=True)
    except (InvalidFileException, BadZipFile, OSError, KeyError, ValueError) as exc:
        raise SpreadsheetParseError(f"Could not read workbook: {exc}") from exc

    try:
        rows_by_category: dict[ItemCategory, tuple[SheetRow, ...]] = {}
        for category in ItemCategory:
            sheet = _sheet_by_name(workbook, category.sheet_name)
            if sheet is None:
                log.debug("Workbook has no %s sheet", category.sheet_name)
                continue
            rows_by_category[category] = _sheet_rows(sheet)
    finally:
        workbook.close()
    return ParsedWorkbook(rows_by_category=rows_by_category)


def _append_rows(
    sheet: Worksheet,
    columns: Sequence[str],
    rows: Iterable[Mapping[str, object]],
) -> None:
    sheet.append(list(columns))
    for row in rows:
        sheet.append([row.get(column, "") for column in columns])


def write_workbook(sheets: Mapping[ItemCategory, SheetData]) -> bytes:
    """Serialize both category sheets; a missing category gets an empty sheet."""

    workbook = Workbook()
    default_sheet = workbook.active
    if default_sheet is not None:
        workbook.remove(default_sheet)

    for category in ItemCategory:
        sheet = workbook.create_sheet(title=category.sheet_name)
        data = sheets.get(category)
        if data is None:
            continue
        _append_rows(sheet, data.columns, data.rows)

    stream = BytesIO()
    workbook.save(stream)
    workbook.close()
    return stream.getvalue()
