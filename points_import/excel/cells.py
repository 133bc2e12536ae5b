from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from datetime import date
from enum import Enum
from typing import Any

import numpy as np

"""Raw cell classification.

Worksheet cells arrive loosely typed (whatever pandas/openpyxl produced).
``classify_cell`` maps every value onto one CellKind so that the field
normalizers can dispatch on an explicit, closed set of shapes.
"""

__all__ = [
    "CellKind",
    "classify_cell",
    "is_blank_row",
]


class CellKind(Enum):
    """Shape of a raw worksheet cell.

    - EMPTY: None, NaN, blank text, or an empty container
    - TEXT: non-blank string
    - NUMBER: int/float (never bool), including numpy scalars
    - DATE_LIKE: date/datetime/Timestamp/datetime64, NaT included
    - OTHER: anything else (bools, non-empty containers, unknown objects)
    """
    EMPTY = "empty"
    TEXT = "text"
    NUMBER = "number"
    DATE_LIKE = "date_like"
    OTHER = "other"


def classify_cell(value: Any) -> CellKind:
    if value is None:
        return CellKind.EMPTY
    if isinstance(value, str):
        return CellKind.TEXT if value.strip() else CellKind.EMPTY
    # NaT is a datetime subclass; it stays DATE_LIKE and fails validation later
    if isinstance(value, (date, np.datetime64)):
        return CellKind.DATE_LIKE
    if isinstance(value, (bool, np.bool_)):
        return CellKind.OTHER
    if isinstance(value, (int, float, np.integer, np.floating)):
        if isinstance(value, (float, np.floating)) and math.isnan(value):
            return CellKind.EMPTY
        return CellKind.NUMBER
    if isinstance(value, (Mapping, Sequence)) and len(value) == 0:
        return CellKind.EMPTY
    return CellKind.OTHER


def is_blank_row(row: Sequence[Any] | None) -> bool:
    """True when the row has no cells or every cell is EMPTY."""
    if not row:
        return True
    return all(classify_cell(cell) is CellKind.EMPTY for cell in row)
