"""Shared test utilities.

Builders for in-memory uploads: workbooks written with pandas + openpyxl
and delimited text in a chosen encoding.
"""

from __future__ import annotations

import io
from typing import Any

import pandas as pd


def xlsx_bytes(rows: list[dict[str, Any]], columns: list[str] | None = None) -> bytes:
    """Write rows to a single-sheet .xlsx workbook and return its bytes."""
    buffer = io.BytesIO()
    pd.DataFrame(rows, columns=columns).to_excel(buffer, index=False, engine="openpyxl")
    return buffer.getvalue()


def csv_bytes(
    rows: list[dict[str, Any]],
    columns: list[str] | None = None,
    encoding: str = "utf-8",
) -> bytes:
    """Write rows as comma-separated text encoded with ``encoding``."""
    return pd.DataFrame(rows, columns=columns).to_csv(index=False).encode(encoding)
