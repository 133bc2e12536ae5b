# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Any, Callable

import pandas as pd
import pytest

from points_import.logging.init import reset_logging

HEADER = [
    "DATA", "VENDAID", "CNPJCPF", "AGENCIA", "POSTO", "FILIAL",
    "PROMOTOR", "FORNECEDOR", "PRODUTO", "EMPRESA", "PONTOS",
]

VALID_ROW = [
    "15/03/2024", "V001", "12345678901", "Agencia X", "Loja1", "FilialA",
    "João", "Fornecedor Y", "Produto Z", "Empresa W", "100,50",
]

TITLE_ROWS = [
    ["Relatório de vendas"],
    ["Período: março/2024"],
    [None],
]


def write_workbook(path: Path, rows: list[list[Any]], sheet_name: str = "Vendas") -> Path:
    """Write raw rows (no header handling) to the first sheet of ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    return path


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("POINTS_IMPORT_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
header_row_hint: 3
header_scan_limit: 10
default_executive_name: Sem Promotor
column_aliases:
  cod venda: saleId
log_dir: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def make_points_file(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a points sheet with the header on the 4th row."""
    def _make(
        data_rows: list[list[Any]],
        *,
        header: list[str] | None = None,
        name: str = "pontos.xlsx",
        directory: Path | None = None,
        title_rows: list[list[Any]] | None = None,
    ) -> Path:
        rows = list(TITLE_ROWS if title_rows is None else title_rows)
        rows.append(list(HEADER if header is None else header))
        rows.extend(data_rows)
        return write_workbook((directory or tmp_path) / name, rows)
    return _make


@pytest.fixture()
def xlsx_writer() -> Callable[..., Path]:
    return write_workbook


@pytest.fixture()
def valid_row() -> list[Any]:
    """A fresh copy of a fully valid data row matching HEADER."""
    return list(VALID_ROW)
