from __future__ import annotations

import math
import re
from datetime import date, datetime, timedelta
from typing import Any

import numpy as np
import pandas as pd

from .cells import CellKind, classify_cell

"""Field normalizers for raw worksheet cells.

Pure functions, one per field family. Each returns ``None`` when the value is
absent or cannot be interpreted; deciding whether that is an error is left to
the row processor.

Date handling covers the two encodings found in the exports:
- the spreadsheet's native day-count (1 = 1900-01-01, with the historical
  1900 leap-year defect: counts >= 60 are one day too high)
- free text in ``D/M/Y`` or ``M/D/Y`` order, optionally followed by a time
"""

__all__ = [
    "normalize_string",
    "normalize_points",
    "normalize_date",
    "day_count_to_iso",
]

DAY_COUNT_EPOCH = datetime(1900, 1, 1)
LEAP_BUG_THRESHOLD = 60  # 1900-02-29 does not exist but the encoding counts it

_ABSENT_TEXT = {"", "null", "undefined"}
_TEXT_DATE_RE = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{2,4})", re.ASCII)
# Leading decimal number, the rest of the text is ignored ("100pts" -> 100)
_LEADING_NUMBER_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)
_WHITESPACE_RE = re.compile(r"\s")

MIN_YEAR = 1900
MAX_YEAR = 2100


def _format_number(value: Any) -> str:
    # 12345678901.0 -> "12345678901": identifiers stored as numeric cells
    if isinstance(value, (float, np.floating)) and float(value).is_integer():
        return str(int(value))
    return str(value)


def normalize_string(value: Any) -> str | None:
    """Trim text; absent or blank values become None."""
    kind = classify_cell(value)
    if kind is CellKind.EMPTY:
        return None
    if kind is CellKind.NUMBER:
        return _format_number(value)
    text = str(value).strip()
    return text or None


def normalize_points(value: Any) -> float | None:
    """Parse a points value, accepting a decimal comma.

    Whitespace is dropped and the first comma becomes the decimal point; the
    leading number of what remains is the value (``"100 pts"`` -> 100.0,
    ``"1.234,56"`` -> 1.234).

    Returns None for absent, unparseable, non-finite or negative values.
    Zero is a valid result and is returned as ``0.0``.
    """
    kind = classify_cell(value)
    if kind is CellKind.EMPTY or kind is CellKind.OTHER or kind is CellKind.DATE_LIKE:
        return None

    text = _WHITESPACE_RE.sub("", str(value).strip())
    text = text.replace(",", ".", 1)
    match = _LEADING_NUMBER_RE.match(text)
    if match is None:
        return None
    number = float(match.group(0))

    if not math.isfinite(number):
        return None
    if number < 0:
        return None
    if number == 0:
        return 0.0  # "-0" included
    return number


def day_count_to_iso(count: float) -> str | None:
    """Convert a spreadsheet day-count to ``YYYY-MM-DD``.

    >>> day_count_to_iso(44927)
    '2023-01-01'
    """
    days = float(count)
    if not math.isfinite(days):
        return None
    if days >= LEAP_BUG_THRESHOLD:
        days -= 1
    try:
        converted = DAY_COUNT_EPOCH + timedelta(days=days - 1)
    except OverflowError:
        return None
    return converted.date().isoformat()


def _build_iso_date(year: int, month: int, day: int) -> str | None:
    """Strict round-trip: the components must describe a real calendar day."""
    try:
        built = date(year, month, day)
    except ValueError:
        return None
    if (built.year, built.month, built.day) != (year, month, day):
        return None
    return built.isoformat()


def _day_month_first(first: int, second: int, year: int) -> str | None:
    # D/M, then M/D
    if 1 <= first <= 31 and 1 <= second <= 12:
        result = _build_iso_date(year, second, first)
        if result is not None:
            return result
    if 1 <= first <= 12 and 1 <= second <= 31:
        return _build_iso_date(year, first, second)
    return None


def _text_to_iso(text: str) -> str | None:
    date_part = text.strip().split(" ", 1)[0]
    match = _TEXT_DATE_RE.fullmatch(date_part)
    if match is None:
        return None

    first, second, year = (int(g) for g in match.groups())
    if year < 100:
        year += 2000

    if not (1 <= first <= 31) or not (1 <= second <= 31):
        return None
    if year < MIN_YEAR or year > MAX_YEAR:
        return None

    if first > 12 and second <= 12:
        return _build_iso_date(year, second, first)
    if second > 12 and first <= 12:
        return _build_iso_date(year, first, second)
    # Ambiguous: day/month wins unless it is not a real date
    return _day_month_first(first, second, year)


def _date_like_to_iso(value: Any) -> str | None:
    if value is pd.NaT:
        return None
    if isinstance(value, np.datetime64):
        if np.isnat(value):
            return None
        value = pd.Timestamp(value)
    try:
        if isinstance(value, datetime):
            return value.date().isoformat()
        return value.isoformat()
    except (ValueError, AttributeError):
        return None


def normalize_date(value: Any) -> str | None:
    """Normalize a sale date to ``YYYY-MM-DD`` or None.

    Dispatch order: absent-like, date-like object, day-count number, text.
    """
    kind = classify_cell(value)
    if kind is CellKind.EMPTY:
        return None
    if kind is CellKind.DATE_LIKE:
        return _date_like_to_iso(value)
    if kind is CellKind.NUMBER:
        return day_count_to_iso(value)
    if kind is CellKind.TEXT:
        if value.strip().lower() in _ABSENT_TEXT:
            return None
        return _text_to_iso(value)
    return None
