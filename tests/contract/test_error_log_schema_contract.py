from __future__ import annotations

import json
from pathlib import Path

import jsonschema
import pytest

from points_import.config.loader import SCHEMA_PATH
from points_import.logging.error_log import ErrorLogBuffer
from points_import.models import ErrorRecord

"""Error log JSON Lines contract: every record matches error_log_schema.json."""

ERROR_LOG_SCHEMA_PATH = SCHEMA_PATH.parent / "error_log_schema.json"


@pytest.fixture()
def schema() -> dict:
    return json.loads(ERROR_LOG_SCHEMA_PATH.read_text(encoding="utf-8"))


def test_valid_example(schema):
    record = {
        "timestamp": "2025-09-26T10:12:33Z",
        "file": "vendas.xlsx",
        "row": 7,
        "error_type": "INVALID_DATE",
        "message": 'sale date missing or invalid. Value: "31/02/2024"',
    }
    jsonschema.validate(record, schema)


def test_rejects_extra_key(schema):
    record = {
        "timestamp": "2025-09-26T10:12:33Z",
        "file": "vendas.xlsx",
        "row": 7,
        "error_type": "INVALID_DATE",
        "message": "x",
        "extra": "not allowed",
    }
    with pytest.raises(jsonschema.exceptions.ValidationError):
        jsonschema.validate(record, schema)


def test_rejects_row_below_sentinel(schema):
    record = ErrorRecord("2025-09-26T10:12:33Z", "vendas.xlsx", -2, "FILE_ERROR", "x")
    with pytest.raises(jsonschema.exceptions.ValidationError):
        jsonschema.validate(json.loads(record.to_json_line()), schema)


def test_written_records_match_schema(schema, tmp_path: Path):
    buf = ErrorLogBuffer(tmp_path)
    buf.append(ErrorRecord.create("vendas.xlsx", 12, "MISSING_CNPJ", "CNPJ/CPF is required"))
    buf.add_file_error("quebrado.xlsx", "failed to process spreadsheet: sheet 'Vendas' is empty")
    for line in buf.flush().read_text(encoding="utf-8").splitlines():
        jsonschema.validate(json.loads(line), schema)
