from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.company_row import COMPANY_HEADERS, NormalizedCompanyRow

"""Spreadsheet writer for exporting updated company rows."""

__all__ = [
    "SheetWriteError",
    "company_rows_to_table",
    "write_sheet",
]

OUTPUT_SHEET_NAME = "Sheet1"
OUTPUT_SUFFIXES = {".xlsx", ".csv"}


class SheetWriteError(Exception):
    """Raised when the output spreadsheet cannot be written."""


def company_rows_to_table(rows: Sequence[NormalizedCompanyRow]) -> tuple[list[str], list[list[Any]]]:
    """Convert company rows back to ``(headers, rows)`` in export column order."""
    table = [[r.to_dict()[h] for h in COMPANY_HEADERS] for r in rows]
    return list(COMPANY_HEADERS), table


def write_sheet(path: Path, headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> Path:
    """Write a single-sheet .xlsx (or .csv) file, creating parent directories."""
    suffix = path.suffix.lower()
    if suffix not in OUTPUT_SUFFIXES:
        raise SheetWriteError(f"unsupported output type: {path.name}")
    df = pd.DataFrame(list(rows), columns=list(headers))
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if suffix == ".csv":
            df.to_csv(path, index=False)
        else:
            df.to_excel(path, sheet_name=OUTPUT_SHEET_NAME, index=False)
    except OSError as e:
        raise SheetWriteError(f"failed to write {path}: {e}") from e
    return path
