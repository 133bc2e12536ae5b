from __future__ import annotations

import logging
from pathlib import Path

from ..excel.cells import is_blank_row
from ..excel.columns import (
    CanonicalField,
    MissingColumnsError,
    build_column_mapping,
    require_columns,
    resolve_columns,
)
from ..excel.header import locate_header
from ..excel.reader import SpreadsheetReadError, read_first_sheet
from ..models.config_models import ImportConfig
from ..models.process_result import SpreadsheetProcessResult
from ..models.processed_row import ProcessedRow
from .row_processor import process_row

"""Spreadsheet processing service: file path -> SpreadsheetProcessResult.

This is the single entry point of the pipeline:

    read first sheet -> locate header -> resolve columns -> process rows

File-level problems (missing/unreadable file, no sheet, empty sheet,
mandatory columns not found) abort the whole call with
SpreadsheetProcessingError; row problems are recorded in the result and
never abort.
"""

_module_logger = logging.getLogger(__name__)

__all__ = [
    "SpreadsheetProcessingError",
    "process",
]


class SpreadsheetProcessingError(Exception):
    """Fatal, file-level failure. No partial result is available."""


def _log_resolved(log: logging.Logger, columns: dict[CanonicalField, int], headers: list[str]) -> None:
    summary = ", ".join(f'{f.value}=[{i}]"{headers[i]}"' for f, i in columns.items())
    log.debug("mapped columns: %s", summary)
    if CanonicalField.EXECUTIVE_NAME not in columns:
        log.warning("promoter column not found, rows will use the default executive name")
    if CanonicalField.SALE_DATE not in columns:
        log.warning("sale date column not found, every row will be rejected")


def process(
    file_path: str | Path,
    *,
    config: ImportConfig | None = None,
    logger: logging.Logger | None = None,
) -> SpreadsheetProcessResult:
    """Process one spreadsheet file.

    Args:
        file_path: Path to the spreadsheet (first sheet is used)
        config: Pipeline settings; defaults apply when omitted
        logger: Observer for diagnostic events; module logger when omitted

    Returns:
        SpreadsheetProcessResult with one ProcessedRow per non-blank data row

    Raises:
        SpreadsheetProcessingError: For fatal errors that prevent processing
    """
    cfg = config or ImportConfig.default()
    log = logger or _module_logger
    path = Path(file_path)

    try:
        log.info("processing spreadsheet: %s", path)
        rows = read_first_sheet(path, keep_na_strings=cfg.keep_na_strings)

        mapping = build_column_mapping(cfg.column_aliases)
        header = locate_header(
            rows,
            mapping,
            row_hint=cfg.header_row_hint,
            scan_limit=cfg.header_scan_limit,
        )
        columns = resolve_columns(header.headers, mapping)
        require_columns(columns, header.headers, mapping)
        _log_resolved(log, columns, header.headers)

        processed: list[ProcessedRow] = []
        for index in range(header.row_index + 1, len(rows)):
            row = rows[index]
            if is_blank_row(row):
                continue
            processed.append(
                process_row(
                    row,
                    index + 1,  # 1-indexed sheet row
                    columns,
                    default_executive_name=cfg.default_executive_name,
                    log=log,
                )
            )
    except (SpreadsheetReadError, MissingColumnsError) as e:
        log.error("failed to process spreadsheet %s: %s", path.name, e)
        raise SpreadsheetProcessingError(f"failed to process spreadsheet: {e}") from e
    except Exception as e:
        log.exception("unexpected failure processing %s", path.name)
        raise SpreadsheetProcessingError(f"failed to process spreadsheet: {e}") from e

    result = SpreadsheetProcessResult(rows=processed)
    log.info(
        "processed %s: total=%d valid=%d errors=%d",
        path.name,
        result.total_rows,
        result.valid_rows,
        result.error_rows,
    )
    return result
