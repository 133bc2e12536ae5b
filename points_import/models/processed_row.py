from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .import_item import ImportItem

"""ProcessedRow model: the per-row outcome of the import pipeline.

Each data row after the header yields exactly one ProcessedRow carrying
either a validated ImportItem or a row-scoped error message. Row errors are
values, never exceptions: they are folded into the aggregate result.
"""

__all__ = [
    "ProcessedRow",
    "RowErrorType",
]


class RowErrorType(Enum):
    """Classification of row-scoped validation failures.

    Values are UPPER_SNAKE so they can be written as-is to the JSON Lines
    error log.
    """
    MISSING_COLUMNS = "MISSING_COLUMNS"
    MISSING_CNPJ = "MISSING_CNPJ"
    INVALID_POINTS = "INVALID_POINTS"
    INVALID_DATE = "INVALID_DATE"
    UNEXPECTED = "UNEXPECTED"


@dataclass(frozen=True)
class ProcessedRow:
    """Outcome of one data row.

    ``row_number`` is the 1-indexed absolute position of the row in the
    source sheet (header and skipped blank rows keep their numbers).
    Exactly one of ``data`` / ``error`` is populated.
    """
    row_number: int
    data: ImportItem | None = None
    error: str | None = None
    error_type: RowErrorType | None = None

    def __post_init__(self) -> None:
        if (self.data is None) == (self.error is None):
            raise ValueError(
                f"row {self.row_number}: exactly one of data/error must be set"
            )

    @classmethod
    def success(cls, row_number: int, item: ImportItem) -> ProcessedRow:
        return cls(row_number=row_number, data=item)

    @classmethod
    def failure(cls, row_number: int, error_type: RowErrorType, message: str) -> ProcessedRow:
        return cls(row_number=row_number, error=message, error_type=error_type)

    @property
    def is_valid(self) -> bool:
        return self.data is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "rowNumber": self.row_number,
            "data": self.data.to_dict() if self.data is not None else None,
            "error": self.error,
        }
