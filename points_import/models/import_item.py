from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""ImportItem model for the agency points import pipeline.

An ImportItem is the validated form of one spreadsheet row, ready to be
handed to the points-ledger collaborator. Only rows that passed every
mandatory check (CNPJ, points, sale date) become an ImportItem.
"""

__all__ = [
    "DEFAULT_EXECUTIVE_NAME",
    "ImportItem",
]

DEFAULT_EXECUTIVE_NAME = "Sem Promotor"


@dataclass(frozen=True)
class ImportItem:
    """Validated ledger source record built from one data row.

    Attributes:
        sale_date: Sale date as ``YYYY-MM-DD``. Declared optional in the
            ledger shape but always populated here (rows without a valid
            date are rejected).
        cnpj: Company/person identifier as found in the sheet, trimmed.
        executive_name: Promoter name, ``DEFAULT_EXECUTIVE_NAME`` when absent.
        points: Non-negative points value. ``0.0`` is a legal value.
    """
    sale_date: str
    cnpj: str
    executive_name: str
    points: float
    sale_id: str | None = None
    agency_name: str | None = None
    branch: str | None = None
    store: str | None = None
    supplier: str | None = None
    product_name: str | None = None
    company: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the camelCase payload consumed by the ledger importer."""
        return {
            "saleId": self.sale_id,
            "saleDate": self.sale_date,
            "cnpj": self.cnpj,
            "agencyName": self.agency_name,
            "branch": self.branch,
            "store": self.store,
            "executiveName": self.executive_name,
            "supplier": self.supplier,
            "productName": self.product_name,
            "company": self.company,
            "points": self.points,
        }
