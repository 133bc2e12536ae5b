from __future__ import annotations

from ..models.process_result import SpreadsheetProcessResult
from ..models.processing_result import ProcessingResult

"""Summary line rendering.

Format of the run summary:
SUMMARY files={done}/{total} success={success} failed={failed} rows={rows}
valid={valid} errors={errors} elapsed_sec={elapsed} throughput_rps={rps}
"""

__all__ = [
    "render_file_line",
    "render_summary_line",
]


def _format_number(value: float) -> str:
    # Integral values without decimals, tiny values without scientific notation
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 3))


def render_file_line(file_name: str, result: SpreadsheetProcessResult) -> str:
    """One line per processed file, e.g. ``file=a.xlsx total=10 valid=9 errors=1``."""
    return (
        f"file={file_name} "
        f"total={result.total_rows} "
        f"valid={result.valid_rows} "
        f"errors={result.error_rows}"
    )


def render_summary_line(total_files: int, result: ProcessingResult) -> str:
    """Render the SUMMARY line of a CLI run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = ProcessingResult(
        ...     success_files=1, failed_files=0, total_rows=1000, valid_rows=990,
        ...     error_rows=10, start_time=start, end_time=end, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(1, result)
        'SUMMARY files=1/1 success=1 failed=0 rows=1000 valid=990 errors=10 elapsed_sec=2 throughput_rps=500'
    """
    done = result.success_files + result.failed_files
    return (
        f"SUMMARY files={done}/{total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"rows={result.total_rows} "
        f"valid={result.valid_rows} "
        f"errors={result.error_rows} "
        f"elapsed_sec={_format_number(result.elapsed_seconds)} "
        f"throughput_rps={_format_number(result.rows_per_sec)}"
    )
