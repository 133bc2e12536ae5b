#!/usr/bin/env python3
"""Synthetic points spreadsheet generator.

Produces a workbook in the layout exported by the agencies:
- Rows 1-3: title / filter rows (ignored by the importer)
- Row 4: header row
- Row 5+: data rows, with a configurable share of broken rows

Useful to exercise the importer on large sheets and to eyeball row errors.
"""
from __future__ import annotations

import argparse
import sys
from datetime import date, timedelta
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

HEADER = [
    "DATA", "VENDAID", "CNPJ/CPF", "AGÊNCIA", "POSTO", "FILIAL",
    "PROMOTOR", "FORNECEDOR", "PRODUTO", "EMPRESA", "PONTOS",
]

AGENCIES = ["Agência Norte", "Agência Sul", "Viagens Centro", "Turismo Litoral"]
PROMOTERS = ["João", "Maria", "Ana", "Carlos", None]
SUPPLIERS = ["Fornecedor A", "Fornecedor B", "Operadora C"]
PRODUCTS = ["Pacote Nacional", "Pacote Internacional", "Seguro Viagem", "Hotel"]


def _sale_date(rng: np.random.Generator, style: str) -> Any:
    day = date(2023, 1, 1) + timedelta(days=int(rng.integers(0, 730)))
    if style == "text":
        return day.strftime("%d/%m/%Y")
    if style == "serial":
        # spreadsheet day-count, including the 1900 leap-year offset
        return (day - date(1899, 12, 30)).days
    return pd.Timestamp(day)


def generate_rows(rows: int, error_ratio: float, seed: int = 42) -> list[list[Any]]:
    """Build data rows; roughly ``error_ratio`` of them are deliberately invalid."""
    rng = np.random.default_rng(seed)
    styles = ["text", "serial", "native"]
    data: list[list[Any]] = []
    for i in range(rows):
        points = f"{rng.uniform(0, 500):.2f}".replace(".", ",")
        row = [
            _sale_date(rng, styles[i % len(styles)]),
            f"V{i + 1:06d}",
            f"{rng.integers(10**10, 10**11 - 1)}",
            rng.choice(AGENCIES),
            f"Loja {rng.integers(1, 20)}",
            f"Filial {rng.integers(1, 5)}",
            PROMOTERS[int(rng.integers(0, len(PROMOTERS)))],
            rng.choice(SUPPLIERS),
            rng.choice(PRODUCTS),
            "Empresa W",
            points,
        ]
        if rng.random() < error_ratio:
            broken = int(rng.integers(0, 3))
            if broken == 0:
                row[2] = None  # missing CNPJ
            elif broken == 1:
                row[10] = "-" + points  # negative points
            else:
                row[0] = "31/02/2024"  # impossible date
        data.append(row)
        if rng.random() < 0.01:
            data.append([None] * len(HEADER))  # blank separator row
    return data


def create_points_file(output_path: Path, rows: int, error_ratio: float, seed: int = 42) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    sheet: list[list[Any]] = [
        ["Relatório de vendas"] + [None] * (len(HEADER) - 1),
        ["Período: 2023-2024"] + [None] * (len(HEADER) - 1),
        [None] * len(HEADER),
        HEADER,
    ]
    sheet.extend(generate_rows(rows, error_ratio, seed))
    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        pd.DataFrame(sheet).to_excel(writer, sheet_name="Vendas", header=False, index=False)
    print(f"Created points file: {output_path} ({rows:,} data rows)")


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a synthetic agency points spreadsheet")
    parser.add_argument("output", type=Path, help="Output .xlsx path")
    parser.add_argument("--rows", type=int, default=10_000, help="Number of data rows (default: 10,000)")
    parser.add_argument("--error-ratio", type=float, default=0.05, help="Share of invalid rows (default: 0.05)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    if not 0 <= args.error_ratio <= 1:
        print("Error: --error-ratio must be between 0 and 1", file=sys.stderr)
        return 1

    create_points_file(args.output, args.rows, args.error_ratio, args.seed)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
