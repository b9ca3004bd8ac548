"""Cell value normalization.

Spreadsheet cells arrive as blanks, numbers, text or booleans depending on how
the file was edited. Everything here is pure:

- ``normalize_cell`` produces a comparable ``CellValue``
- ``coerce_*`` turn a raw cell into the typed value stored for a field
"""

from __future__ import annotations

import math
from typing import Final

type CellValue = str | int | float | bool | None

_TRUE_FLAG_TEXT: Final[frozenset[str]] = frozenset({"yes", "true"})
_MAX_EXACT_INTEGER: Final[float] = 2.0**53


class InvalidFieldValueError(ValueError):
    """Raised when a non-blank cell cannot be read as the field's numeric type."""

    def __init__(self, field: str, value: object) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Invalid value for {field}: {value}")


def render_number(number: float) -> str:
    """Shortest text form of a number; integral values render without a fraction."""

    if isinstance(number, int):
        return str(number)
    if number.is_integer() and abs(number) < _MAX_EXACT_INTEGER:
        return str(int(number))
    return repr(number)


def _round_trip_number(text: str) -> int | float | None:
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number) or render_number(number) != text:
        return None
    return int(number) if number.is_integer() else number


def normalize_cell(value: object) -> CellValue:
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    text = value if isinstance(value, str) else str(value)
    trimmed = text.strip()
    if not trimmed:
        return None
    number = _round_trip_number(trimmed)
    return trimmed if number is None else number


def coerce_flag(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_FLAG_TEXT
    return False


def coerce_text(value: object) -> str | None:
    normalized = normalize_cell(value)
    if normalized is None:
        return None
    if isinstance(normalized, bool):
        return "Yes" if normalized else "No"
    if isinstance(normalized, (int, float)):
        return render_number(normalized)
    return normalized


def _as_number(field: str, value: object) -> int | float | None:
    normalized = normalize_cell(value)
    if normalized is None:
        return None
    if isinstance(normalized, bool):
        raise InvalidFieldValueError(field, value)
    if isinstance(normalized, (int, float)):
        return normalized
    try:
        number = float(normalized)
    except ValueError as exc:
        raise InvalidFieldValueError(field, normalized) from exc
    if not math.isfinite(number):
        raise InvalidFieldValueError(field, normalized)
    return number


def coerce_int(field: str, value: object) -> int | None:
    number = _as_number(field, value)
    if number is None:
        return None
    if isinstance(number, float):
        if not number.is_integer():
            raise InvalidFieldValueError(field, value)
        return int(number)
    return number


def coerce_decimal(field: str, value: object) -> float | None:
    number = _as_number(field, value)
    return None if number is None else float(number)
