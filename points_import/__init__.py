"""Agency points spreadsheet import pipeline.

>>> from points_import import process
>>> result = process("vendas.xlsx")  # doctest: +SKIP
>>> result.valid_rows, result.error_rows  # doctest: +SKIP
"""

from .models import ImportConfig, ImportItem, ProcessedRow, SpreadsheetProcessResult
from .services.spreadsheet_processor import SpreadsheetProcessingError, process

__all__ = [
    "ImportConfig",
    "ImportItem",
    "ProcessedRow",
    "SpreadsheetProcessResult",
    "SpreadsheetProcessingError",
    "process",
]

__version__ = "0.1.0"
