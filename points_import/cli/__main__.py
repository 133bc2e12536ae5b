from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from points_import.config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from points_import.logging.error_log import ErrorLogBuffer
from points_import.logging.init import log_summary, setup_logging
from points_import.models.config_models import ImportConfig
from points_import.services.orchestrator import ProcessingError, collect_paths, process_files
from points_import.services.summary import render_summary_line

"""CLI entrypoint.

Operator tool around the pipeline:
- Load .env, then the YAML config (``POINTS_IMPORT_CONFIG`` overrides the path)
- Collect spreadsheets from the arguments or from ``source_directory``
- Process each file, log per-file lines and one SUMMARY line
- Flush rejected rows / failed files to the JSON Lines error log
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

CONFIG_ENV_VAR = "POINTS_IMPORT_CONFIG"


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv; a broken file only produces a warning."""
    try:
        if path.exists():
            load_dotenv(dotenv_path=path, override=override)
    except OSError as e:  # pragma: no cover
        logging.getLogger(__name__).warning("failed to load .env: %s", e)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Agency points spreadsheet importer")
    p.add_argument("paths", nargs="*", type=Path, help="Spreadsheet files or directories (default: source_directory)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print detected header & first rows then exit")
    p.add_argument("--json-dir", type=Path, default=None, help="Write each result as JSON into this directory")
    return p.parse_args(argv)


def _resolve_config(explicit_paths: bool) -> ImportConfig:
    """Load the config file; without one, defaults are fine when paths were given."""
    config_path = Path(os.getenv(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH)
    if not config_path.exists() and explicit_paths and os.getenv(CONFIG_ENV_VAR) is None:
        return ImportConfig.default()
    return load_config(config_path)


def _inspect_data(paths: list[Path], cfg: ImportConfig) -> int:
    from points_import.excel.columns import build_column_mapping, resolve_columns
    from points_import.excel.header import locate_header
    from points_import.excel.reader import SpreadsheetReadError, read_first_sheet

    mapping = build_column_mapping(cfg.column_aliases)
    for f in paths:
        print(f"FILE: {f.name}")
        try:
            rows = read_first_sheet(f, keep_na_strings=cfg.keep_na_strings)
        except SpreadsheetReadError as e:
            print(f"  read_error: {e}")
            continue
        header = locate_header(rows, mapping, row_hint=cfg.header_row_hint, scan_limit=cfg.header_scan_limit)
        columns = resolve_columns(header.headers, mapping)
        print(f"  HEADER: row={header.row_index + 1} cols={[h for h in header.headers if h]}")
        print(f"  MAPPED: { {fld.value: i for fld, i in columns.items()} }")
        for row in rows[header.row_index + 1:header.row_index + 4]:
            # datetime cells are not JSON friendly; isoformat keeps the output readable
            print("    ", [v.isoformat() if hasattr(v, "isoformat") else v for v in row])
    return 0


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # Only read sys.argv when no list was given ([] means "no arguments")
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        for h in logger.handlers:
            h.setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
        logger.debug("debug mode enabled")

    try:
        cfg = _resolve_config(explicit_paths=bool(args.paths))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    try:
        file_paths = collect_paths(args.paths, cfg)
    except ProcessingError as e:
        logger.error(str(e))
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(file_paths, cfg)

    logger.info(f"Processing {len(file_paths)} spreadsheet(s)")
    error_log = ErrorLogBuffer(cfg.log_dir)
    result = process_files(file_paths, cfg, error_log, result_dir=args.json_dir)

    try:
        log_path = error_log.flush()
    except OSError as e:
        logger.warning(f"could not write error log: {e}")
    else:
        if log_path is not None:
            logger.info(f"error log written to {log_path}")

    summary_line = render_summary_line(len(file_paths), result)
    log_summary(summary_line.removeprefix("SUMMARY "))

    if result.failed_files > 0 or result.error_rows > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
