from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from ..logging.error_log import ErrorLogBuffer
from ..models.config_models import ImportConfig
from ..models.excel_file import ExcelFile, FileStatus
from ..models.process_result import SpreadsheetProcessResult
from ..models.processing_result import FileStat, ProcessingResult
from .progress import ProgressTracker
from .spreadsheet_processor import SpreadsheetProcessingError, process
from .summary import render_file_line

"""Batch orchestration for the operator CLI.

Runs the pipeline over a list of spreadsheets, one at a time:
- a fatal error on one file is recorded and the run moves on
- rejected rows go to the error log buffer
- optionally each result is written as JSON next to the run
- per-file statistics are folded into a ProcessingResult
"""

logger = logging.getLogger(__name__)

SPREADSHEET_SUFFIXES = {".xlsx", ".xlsm", ".xls"}


class ProcessingError(Exception):
    """Fatal error that prevents the run from starting."""


def scan_spreadsheets(directory: Path) -> list[Path]:
    """Return spreadsheet files of ``directory`` (non-recursive), sorted by name.

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"directory not found: {directory}")

    if not directory.is_dir():
        raise ProcessingError(f"path is not a directory: {directory}")

    try:
        return sorted(
            p for p in directory.iterdir()
            if p.is_file() and p.suffix.lower() in SPREADSHEET_SUFFIXES and not p.name.startswith("~$")
        )
    except OSError as e:
        raise ProcessingError(f"error reading directory {directory}: {e}") from e


def collect_paths(paths: list[Path], config: ImportConfig) -> list[Path]:
    """Expand CLI arguments (files and/or directories) into spreadsheet paths.

    With no arguments the configured ``source_directory`` is scanned.
    """
    if not paths:
        return scan_spreadsheets(Path(config.source_directory))

    collected: list[Path] = []
    for p in paths:
        if p.is_dir():
            collected.extend(scan_spreadsheets(p))
        else:
            # Missing files are kept: process() reports them as a file failure
            collected.append(p)
    return collected


def _write_json(result_dir: Path, file_path: Path, result: SpreadsheetProcessResult) -> Path:
    result_dir.mkdir(parents=True, exist_ok=True)
    out = result_dir / f"{file_path.stem}.result.json"
    out.write_text(json.dumps(result.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8")
    return out


def process_single_file(file_path: Path, config: ImportConfig) -> ExcelFile:
    """Run the pipeline on one file, turning a fatal error into a FAILED ExcelFile."""
    start_time = datetime.now(UTC)
    try:
        result = process(file_path, config=config)
    except SpreadsheetProcessingError as e:
        return ExcelFile(
            path=file_path,
            name=file_path.name,
            status=FileStatus.FAILED,
            start_time=start_time,
            end_time=datetime.now(UTC),
            error=str(e),
        )
    return ExcelFile(
        path=file_path,
        name=file_path.name,
        status=FileStatus.SUCCESS,
        result=result,
        start_time=start_time,
        end_time=datetime.now(UTC),
    )


def process_files(
    file_paths: list[Path],
    config: ImportConfig,
    error_log: ErrorLogBuffer,
    *,
    result_dir: Path | None = None,
) -> ProcessingResult:
    """Process every file and aggregate run statistics.

    Args:
        file_paths: Spreadsheets to process, in order
        config: Pipeline configuration
        error_log: Buffer receiving row and file errors (not flushed here)
        result_dir: When set, each successful result is written there as JSON

    Returns:
        ProcessingResult with per-file stats
    """
    start_time = datetime.now(UTC)
    file_stats: list[FileStat] = []
    success_count = failed_count = 0
    total_rows = valid_rows = error_rows = 0

    with ProgressTracker(len(file_paths)) as progress:
        for file_path in file_paths:
            progress.start_file(file_path)
            excel = process_single_file(file_path, config)

            if excel.status is FileStatus.SUCCESS and excel.result is not None:
                result = excel.result
                success_count += 1
                total_rows += result.total_rows
                valid_rows += result.valid_rows
                error_rows += result.error_rows
                error_log.add_row_errors(excel.name, result)
                logger.info(render_file_line(excel.name, result))
                if result_dir is not None:
                    out = _write_json(result_dir, excel.path, result)
                    logger.debug("result written to %s", out)
                progress.finish_file(result.valid_rows, result.error_rows)
                file_stats.append(
                    FileStat(
                        file_name=excel.name,
                        status=excel.status.value,
                        total_rows=result.total_rows,
                        valid_rows=result.valid_rows,
                        error_rows=result.error_rows,
                        elapsed_seconds=excel.elapsed_seconds,
                    )
                )
            else:
                failed_count += 1
                error_log.add_file_error(excel.name, excel.error or "unknown error")
                logger.debug("file=%s marked failed", excel.name)
                progress.finish_file()
                file_stats.append(
                    FileStat(
                        file_name=excel.name,
                        status=excel.status.value,
                        total_rows=0,
                        valid_rows=0,
                        error_rows=0,
                        elapsed_seconds=excel.elapsed_seconds,
                        error=excel.error,
                    )
                )

    end_time = datetime.now(UTC)
    return ProcessingResult(
        success_files=success_count,
        failed_files=failed_count,
        total_rows=total_rows,
        valid_rows=valid_rows,
        error_rows=error_rows,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
    )
