from __future__ import annotations

import math
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

"""Spreadsheet reader.

Loads the first sheet of a workbook into a RawWorksheet: a list of rows, each
a list of plain Python cell values (None, str, int, float, datetime). No
header is applied here; header discovery happens later because the header
row position varies between exports.
"""

__all__ = [
    "SpreadsheetReadError",
    "read_first_sheet",
    "to_cell_value",
]


class SpreadsheetReadError(Exception):
    """Raised when the file cannot be opened or has no usable sheet."""


def to_cell_value(value: Any) -> Any:
    """Convert a pandas/numpy cell into a plain Python value.

    NaN/NaT -> None, numpy scalars -> Python scalars, Timestamp -> datetime,
    integral floats -> int.
    """
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, np.datetime64):
        if np.isnat(value):
            return None
        return pd.Timestamp(value).to_pydatetime()
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float):
        if math.isnan(value):
            return None
        if value.is_integer():
            return int(value)
    return value


def read_first_sheet(path: Path, keep_na_strings: list[str] | None = None) -> list[list[Any]]:
    """Read the first sheet of ``path`` as a list of raw rows.

    Parameters
    ----------
    path: spreadsheet path (xlsx/xlsm; xls through xlrd)
    keep_na_strings: pandas NA strings kept as text. None keeps every string
        (only empty cells are absent); ``[]`` applies pandas' default NaN
        conversion ('NA', 'N/A', 'null', ...); ``['NA']`` applies it to all
        but 'NA'.

    Raises
    ------
    SpreadsheetReadError: file missing/unreadable, workbook without sheets, empty first sheet
    """
    # pandas._libs.parsers.STR_NA_VALUES holds the default NA string set
    import pandas._libs.parsers as parsers

    path = Path(path)
    if not path.exists():
        raise SpreadsheetReadError(f"file not found: {path}")

    # Empty cells arrive as "" and must always read as absent
    if keep_na_strings is None:
        na_values = [""]
    else:
        na_values = list((parsers.STR_NA_VALUES - set(keep_na_strings)) | {""})

    try:
        xls = pd.ExcelFile(path)
    except ImportError as e:  # .xls needs xlrd, .xlsx/.xlsm need openpyxl
        raise SpreadsheetReadError(
            f"cannot open spreadsheet {path.name}: reader library not installed: {e}"
        ) from e
    except Exception as e:
        raise SpreadsheetReadError(f"cannot open spreadsheet {path.name}: {e}") from e

    with xls:
        if not xls.sheet_names:
            raise SpreadsheetReadError(f"workbook has no sheets: {path.name}")
        sheet_name = xls.sheet_names[0]
        # dtype=object keeps each cell as read (no per-column float coercion)
        df = xls.parse(
            sheet_name,
            header=None,
            dtype=object,
            keep_default_na=False,
            na_values=na_values,
        )

    if df.shape[0] == 0:
        raise SpreadsheetReadError(f"sheet '{sheet_name}' is empty")

    return [[to_cell_value(v) for v in row] for row in df.itertuples(index=False, name=None)]
