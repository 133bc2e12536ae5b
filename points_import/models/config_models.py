from __future__ import annotations

from dataclasses import dataclass, field

from .import_item import DEFAULT_EXECUTIVE_NAME

"""Config dataclasses for the agency points import pipeline.

These are the typed domain view of ``config/import.yml``. The loader in
points_import/config/loader.py validates the raw YAML and builds them;
the pipeline itself only ever sees an ImportConfig.
"""

DEFAULT_HEADER_ROW_HINT = 3  # 4th row: conventional header position of the export
DEFAULT_HEADER_SCAN_LIMIT = 10


@dataclass(frozen=True)
class ImportConfig:
    """Root configuration object for the import pipeline.

    Every field has a default so that ``process()`` can run without a
    config file at all.
    """
    source_directory: str = "./data"  # Directory scanned by the CLI when no paths are given
    header_row_hint: int = DEFAULT_HEADER_ROW_HINT  # Row index tried first for the header
    header_scan_limit: int = DEFAULT_HEADER_SCAN_LIMIT  # Rows scanned when the hint misses
    default_executive_name: str = DEFAULT_EXECUTIVE_NAME
    column_aliases: dict[str, str] = field(default_factory=dict)  # extra spelling -> canonical field
    keep_na_strings: list[str] | None = None  # None: no text becomes NaN; list: pandas NA strings minus these
    log_dir: str = "logs"

    @classmethod
    def default(cls) -> ImportConfig:
        return cls()
