from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from .process_result import SpreadsheetProcessResult

"""ExcelFile domain model and FileStatus enum.

The ExcelFile represents one spreadsheet handled by the CLI, tracking its
status from discovery to success/failed together with the pipeline result.
"""


class FileStatus(Enum):
    """Status of a spreadsheet during a CLI run.

    State transitions: pending -> processing -> (success | failed)

    - SUCCESS: the pipeline returned a result (row errors may still exist)
    - FAILED: the pipeline raised a fatal, file-level error
    """
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class ExcelFile:
    """Processing context for a single spreadsheet file."""
    path: Path
    name: str
    status: FileStatus = FileStatus.PENDING
    result: SpreadsheetProcessResult | None = None  # Set only on success
    start_time: datetime | None = None
    end_time: datetime | None = None
    error: str | None = None  # Fatal failure reason

    @property
    def elapsed_seconds(self) -> float:
        if self.start_time is None or self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time).total_seconds()
