from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .import_item import ImportItem
from .processed_row import ProcessedRow

"""Aggregate result of processing one spreadsheet."""

__all__ = [
    "SpreadsheetProcessResult",
]


@dataclass(frozen=True)
class SpreadsheetProcessResult:
    """All processed rows of one file plus summary counts.

    Counts are derived from ``rows`` so that
    ``valid_rows + error_rows == total_rows == len(rows)`` always holds.
    Fully blank rows are never part of ``rows``.
    """
    rows: list[ProcessedRow] = field(default_factory=list)

    @property
    def total_rows(self) -> int:
        return len(self.rows)

    @property
    def valid_rows(self) -> int:
        return sum(1 for r in self.rows if r.data is not None)

    @property
    def error_rows(self) -> int:
        return sum(1 for r in self.rows if r.error is not None)

    @property
    def items(self) -> list[ImportItem]:
        """Validated ImportItems in sheet order."""
        return [r.data for r in self.rows if r.data is not None]

    @property
    def errors(self) -> list[ProcessedRow]:
        return [r for r in self.rows if r.error is not None]

    def to_dict(self) -> dict[str, Any]:
        return {
            "rows": [r.to_dict() for r in self.rows],
            "totalRows": self.total_rows,
            "validRows": self.valid_rows,
            "errorRows": self.error_rows,
        }
