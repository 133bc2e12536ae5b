from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import FILE_LEVEL_ROW, ErrorRecord
from ..models.process_result import SpreadsheetProcessResult

"""Import error log.

Rejected rows and failed files are buffered as ErrorRecords and flushed as
JSON Lines to ``<log_dir>/import-errors-YYYYMMDD-HHMMSS.log`` (UTC), one
file per CLI run. The file is only created when there is something to write.
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
]

DEFAULT_LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """In-memory buffer for error records. ``flush`` appends JSON Lines.

    - the file path is decided on first access
    - no thread safety (the CLI is sequential)
    """
    def __init__(self, logs_dir: Path | str = DEFAULT_LOGS_DIR) -> None:
        self._logs_dir = Path(logs_dir)
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"import-errors-{stamp}.log"
        return self._file_path

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def add_row_errors(self, file_name: str, result: SpreadsheetProcessResult) -> int:
        """Buffer one record per rejected row; returns how many were added."""
        added = 0
        for row in result.errors:
            error_type = row.error_type.value if row.error_type is not None else "VALIDATION"
            self.append(ErrorRecord.create(file_name, row.row_number, error_type, row.error or ""))
            added += 1
        return added

    def add_file_error(self, file_name: str, message: str) -> None:
        self.append(ErrorRecord.create(file_name, FILE_LEVEL_ROW, "FILE_ERROR", message))

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered records; returns the log path, or None when empty."""
        if not self._records:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
