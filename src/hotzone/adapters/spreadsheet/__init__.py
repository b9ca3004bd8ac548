"""Public interface for the openpyxl spreadsheet adapter."""

from __future__ import annotations

from .workbook import read_workbook, write_workbook

__all__ = [
    "read_workbook",
    "write_workbook",
]
