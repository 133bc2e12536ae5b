"""Domain models for the agency points import pipeline.

This package contains the value objects exchanged between the pipeline
stages and handed back to callers.
"""

from .config_models import ImportConfig
from .error_record import ErrorRecord
from .import_item import DEFAULT_EXECUTIVE_NAME, ImportItem
from .process_result import SpreadsheetProcessResult
from .processed_row import ProcessedRow, RowErrorType

__all__ = [
    # Configuration models
    "ImportConfig",
    # Pipeline models
    "DEFAULT_EXECUTIVE_NAME",
    "ImportItem",
    "ProcessedRow",
    "RowErrorType",
    "SpreadsheetProcessResult",
    # Error log
    "ErrorRecord",
]
