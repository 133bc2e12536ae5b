from __future__ import annotations

import re
import unicodedata
from collections.abc import Mapping, Sequence
from enum import Enum
from types import MappingProxyType

"""Column mapping: header spellings -> canonical fields.

The exports are produced by several agencies and their header rows differ in
case, accents and punctuation (``CNPJ/CPF``, ``cnpjcpf``, ``Agência``,
``AGENCIA``...). Each recognized spelling maps onto one CanonicalField; a
header row is resolved to ``{CanonicalField: column index}``.
"""

__all__ = [
    "CanonicalField",
    "COLUMN_MAPPING",
    "REQUIRED_FIELDS",
    "MissingColumnsError",
    "build_column_mapping",
    "normalize_column_name",
    "is_recognized_header",
    "resolve_columns",
    "require_columns",
]


class MissingColumnsError(Exception):
    """Raised when mandatory columns cannot be found in the header row."""


class CanonicalField(str, Enum):
    SALE_ID = "saleId"
    SALE_DATE = "saleDate"
    CNPJ = "cnpj"
    AGENCY_NAME = "agencyName"
    BRANCH = "branch"
    STORE = "store"
    EXECUTIVE_NAME = "executiveName"
    SUPPLIER = "supplier"
    PRODUCT_NAME = "productName"
    COMPANY = "company"
    POINTS = "points"


# Order matters: spellings are tried top to bottom and the first one found
# claims the field.
COLUMN_MAPPING: Mapping[str, CanonicalField] = MappingProxyType({
    "data": CanonicalField.SALE_DATE,
    "data venda": CanonicalField.SALE_DATE,
    "data da venda": CanonicalField.SALE_DATE,
    "vendaid": CanonicalField.SALE_ID,
    "venda id": CanonicalField.SALE_ID,
    "id venda": CanonicalField.SALE_ID,
    "cnpjcpf": CanonicalField.CNPJ,
    "cnpj/cpf": CanonicalField.CNPJ,
    "cpf/cnpj": CanonicalField.CNPJ,
    "cnpj": CanonicalField.CNPJ,
    "agencia": CanonicalField.AGENCY_NAME,
    "agência": CanonicalField.AGENCY_NAME,
    "posto": CanonicalField.STORE,
    "filial": CanonicalField.BRANCH,
    "promotor": CanonicalField.EXECUTIVE_NAME,
    "executivo": CanonicalField.EXECUTIVE_NAME,
    "fornecedor": CanonicalField.SUPPLIER,
    "produto": CanonicalField.PRODUCT_NAME,
    "empresa": CanonicalField.COMPANY,
    "pontos": CanonicalField.POINTS,
    "pontuação": CanonicalField.POINTS,
})

REQUIRED_FIELDS: tuple[CanonicalField, ...] = (CanonicalField.CNPJ, CanonicalField.POINTS)

# Substring used by the last-resort sale date lookup ("data", "data emissao"...)
SALE_DATE_HINT = "data"

_STRIP_RE = re.compile(r"[\s/\-_]+")


def normalize_column_name(name: object) -> str:
    """Lower-case, drop whitespace, ``/ - _`` and accents.

    >>> normalize_column_name("CNPJ-CPF")
    'cnpjcpf'
    >>> normalize_column_name(" Agência ")
    'agencia'
    """
    text = "" if name is None else str(name)
    text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    return _STRIP_RE.sub("", text.lower().strip())


def build_column_mapping(aliases: Mapping[str, str] | None = None) -> Mapping[str, CanonicalField]:
    """Return COLUMN_MAPPING extended with configured aliases.

    Aliases are appended after the built-in spellings, so they never take a
    field away from a built-in spelling present in the same header row.
    """
    if not aliases:
        return COLUMN_MAPPING
    merged: dict[str, CanonicalField] = dict(COLUMN_MAPPING)
    for spelling, field_name in aliases.items():
        key = spelling.lower().strip()
        if key not in merged:
            merged[key] = CanonicalField(field_name)
    return MappingProxyType(merged)


def is_recognized_header(
    headers: Sequence[str], mapping: Mapping[str, CanonicalField] = COLUMN_MAPPING
) -> bool:
    """True when at least one header cell normalized-matches a known spelling."""
    known = {normalize_column_name(s) for s in mapping}
    return any(normalize_column_name(h) in known for h in headers if h)


def _find_exact(headers: Sequence[str], spelling: str) -> int | None:
    expected = spelling.lower().strip()
    for idx, header in enumerate(headers):
        if str(header).strip() == expected:
            return idx
    return None


def _find_normalized(headers: Sequence[str], spelling: str) -> int | None:
    expected = normalize_column_name(spelling)
    for idx, header in enumerate(headers):
        if normalize_column_name(header) == expected:
            return idx
    return None


def _find_sale_date_fallback(headers: Sequence[str]) -> int | None:
    for idx, header in enumerate(headers):
        if SALE_DATE_HINT in normalize_column_name(header):
            return idx
    return None


def resolve_columns(
    headers: Sequence[str], mapping: Mapping[str, CanonicalField] = COLUMN_MAPPING
) -> dict[CanonicalField, int]:
    """Resolve canonical fields to column indices.

    ``headers`` are expected lower-cased and trimmed (see header.locate_header).
    Exact match first, then normalized match; a resolved field is never
    overwritten by a later spelling.
    """
    resolved: dict[CanonicalField, int] = {}
    for spelling, field in mapping.items():
        if field in resolved:
            continue
        index = _find_exact(headers, spelling)
        if index is None:
            index = _find_normalized(headers, spelling)
        if index is not None:
            resolved[field] = index

    if CanonicalField.SALE_DATE not in resolved:
        index = _find_sale_date_fallback(headers)
        if index is not None:
            resolved[CanonicalField.SALE_DATE] = index
    return resolved


def require_columns(
    resolved: Mapping[CanonicalField, int],
    headers: Sequence[str],
    mapping: Mapping[str, CanonicalField] = COLUMN_MAPPING,
) -> None:
    """Raise MissingColumnsError unless every REQUIRED_FIELDS entry resolved.

    The message lists what was searched and what the header row contained so
    the operator can fix the sheet without opening a debugger.
    """
    missing = [f for f in REQUIRED_FIELDS if f not in resolved]
    if not missing:
        return

    searched = "; ".join(
        f"{f.value}: {', '.join(s for s, target in mapping.items() if target is f)}"
        for f in missing
    )
    found = ", ".join(f.value for f in resolved) or "none"
    header_cells = ", ".join(f'[{i}]"{h}"' for i, h in enumerate(headers) if h) or "none"
    raise MissingColumnsError(
        f"required columns not found: {', '.join(f.value for f in missing)} "
        f"(searched {searched}). Columns found: {found}. "
        f"Header cells: {header_cells}"
    )
