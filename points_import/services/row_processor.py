from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from datetime import date
from typing import Any

from ..excel.cells import CellKind, classify_cell
from ..excel.columns import CanonicalField
from ..excel.normalizers import normalize_date, normalize_points, normalize_string
from ..models.import_item import DEFAULT_EXECUTIVE_NAME, ImportItem
from ..models.processed_row import ProcessedRow, RowErrorType

"""Row processor: one worksheet row -> one ProcessedRow.

Validation order per row:
1. cnpj/points column indices resolved
2. CNPJ present
3. executive name (defaulted, never an error)
4. points present, numeric and >= 0
5. sale date present and valid

Only when every check passes an ImportItem is built. Expected validation
failures are returned as ProcessedRow.failure values; unexpected exceptions
are caught by ``process_row`` and turned into UNEXPECTED row errors.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "MSG_MISSING_COLUMNS",
    "MSG_MISSING_CNPJ",
    "MSG_INVALID_POINTS",
    "process_row",
    "validate_row",
]

MSG_MISSING_COLUMNS = "required column indices not found"
MSG_MISSING_CNPJ = "CNPJ/CPF is required"
MSG_INVALID_POINTS = "points missing or invalid"

_OPTIONAL_FIELDS: tuple[tuple[str, CanonicalField], ...] = (
    ("sale_id", CanonicalField.SALE_ID),
    ("agency_name", CanonicalField.AGENCY_NAME),
    ("branch", CanonicalField.BRANCH),
    ("store", CanonicalField.STORE),
    ("supplier", CanonicalField.SUPPLIER),
    ("product_name", CanonicalField.PRODUCT_NAME),
    ("company", CanonicalField.COMPANY),
)


def _cell(row: Sequence[Any], columns: Mapping[CanonicalField, int], field: CanonicalField) -> Any:
    """Raw cell for ``field``; None when the column is unresolved or the row is short."""
    index = columns.get(field)
    if index is None or index >= len(row):
        return None
    return row[index]


def _describe_raw(value: Any) -> str:
    if classify_cell(value) is CellKind.EMPTY:
        return "absent"
    if isinstance(value, date):
        return json.dumps(value.isoformat())
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(value)


def validate_row(
    row: Sequence[Any],
    row_number: int,
    columns: Mapping[CanonicalField, int],
    *,
    default_executive_name: str = DEFAULT_EXECUTIVE_NAME,
    log: logging.Logger | None = None,
) -> ProcessedRow:
    """Validate one non-blank row and build its ProcessedRow."""
    log = log or logger

    if CanonicalField.CNPJ not in columns or CanonicalField.POINTS not in columns:
        return ProcessedRow.failure(row_number, RowErrorType.MISSING_COLUMNS, MSG_MISSING_COLUMNS)

    cnpj = normalize_string(_cell(row, columns, CanonicalField.CNPJ))
    if cnpj is None:
        return ProcessedRow.failure(row_number, RowErrorType.MISSING_CNPJ, MSG_MISSING_CNPJ)

    executive_name = normalize_string(_cell(row, columns, CanonicalField.EXECUTIVE_NAME))
    if not executive_name:
        executive_name = default_executive_name

    points = normalize_points(_cell(row, columns, CanonicalField.POINTS))
    if points is None:
        return ProcessedRow.failure(row_number, RowErrorType.INVALID_POINTS, MSG_INVALID_POINTS)
    if points == 0:
        log.warning("row %d: zero points for cnpj=%s", row_number, cnpj)

    # saleDate is optional in the ledger shape but mandatory for import
    raw_date = _cell(row, columns, CanonicalField.SALE_DATE)
    sale_date = normalize_date(raw_date)
    if sale_date is None:
        return ProcessedRow.failure(
            row_number,
            RowErrorType.INVALID_DATE,
            f"sale date missing or invalid. Value: {_describe_raw(raw_date)}",
        )

    optional = {
        attr: normalize_string(_cell(row, columns, field)) for attr, field in _OPTIONAL_FIELDS
    }
    item = ImportItem(
        sale_date=sale_date,
        cnpj=cnpj,
        executive_name=executive_name,
        points=points,
        **optional,
    )
    return ProcessedRow.success(row_number, item)


def process_row(
    row: Sequence[Any],
    row_number: int,
    columns: Mapping[CanonicalField, int],
    *,
    default_executive_name: str = DEFAULT_EXECUTIVE_NAME,
    log: logging.Logger | None = None,
) -> ProcessedRow:
    """Validate one row; never raises."""
    try:
        return validate_row(
            row,
            row_number,
            columns,
            default_executive_name=default_executive_name,
            log=log,
        )
    except Exception as e:
        (log or logger).exception("row %d: unexpected error", row_number)
        message = str(e) or "unknown error while processing row"
        return ProcessedRow.failure(row_number, RowErrorType.UNEXPECTED, message)
