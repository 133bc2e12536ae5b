from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from ..models.config_models import DEFAULT_HEADER_ROW_HINT, DEFAULT_HEADER_SCAN_LIMIT
from .columns import COLUMN_MAPPING, CanonicalField, is_recognized_header

"""Header row discovery.

The exports usually carry a few title/filter rows before the header, which
conventionally sits on the 4th row. The locator tries that row first, then
scans the top of the sheet, and finally falls back to the first row.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "HeaderLocation",
    "header_cells",
    "locate_header",
]


@dataclass(frozen=True)
class HeaderLocation:
    row_index: int  # 0-based index within the worksheet
    headers: list[str]  # lower-cased, trimmed cell labels ("" for empty cells)


def header_cells(row: Sequence[Any] | None) -> list[str]:
    """Lower-case and trim every cell of a candidate header row."""
    if not row:
        return []
    return ["" if cell is None else str(cell).strip().lower() for cell in row]


def locate_header(
    rows: Sequence[Sequence[Any]],
    mapping: Mapping[str, CanonicalField] = COLUMN_MAPPING,
    *,
    row_hint: int = DEFAULT_HEADER_ROW_HINT,
    scan_limit: int = DEFAULT_HEADER_SCAN_LIMIT,
) -> HeaderLocation:
    """Pick the header row of a worksheet. Never raises.

    1. ``row_hint`` when the sheet has more rows than that index
    2. first recognized row among the first ``scan_limit`` rows
    3. row 0
    """
    if len(rows) > row_hint:
        candidate = header_cells(rows[row_hint])
        if is_recognized_header(candidate, mapping):
            logger.debug("header found on conventional row %d", row_hint + 1)
            return HeaderLocation(row_hint, candidate)

    for index in range(min(scan_limit, len(rows))):
        candidate = header_cells(rows[index])
        if is_recognized_header(candidate, mapping):
            logger.debug("header found on row %d", index + 1)
            return HeaderLocation(index, candidate)

    logger.warning("no recognizable header row, using the first row")
    first = header_cells(rows[0]) if rows else []
    return HeaderLocation(0, first)
