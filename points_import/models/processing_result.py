from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Run-level result models for the operator CLI.

The pipeline returns one SpreadsheetProcessResult per file; when the CLI
processes a batch of files it folds those into a ProcessingResult so that a
single SUMMARY line can be printed for the whole run.
"""


@dataclass(frozen=True)
class FileStat:
    """Per-file statistics collected by the CLI."""
    file_name: str
    status: str  # success/failed
    total_rows: int
    valid_rows: int
    error_rows: int
    elapsed_seconds: float
    error: str | None = None  # fatal failure reason, only when status == failed


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results of one CLI run."""
    success_files: int
    failed_files: int
    total_rows: int
    valid_rows: int
    error_rows: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None

    @property
    def rows_per_sec(self) -> float:
        if self.elapsed_seconds <= 0:
            return 0.0
        return self.total_rows / self.elapsed_seconds
