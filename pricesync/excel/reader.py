from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

"""Spreadsheet reader.

Decodes the first sheet of a workbook (or a CSV file) into a header row and
positional data rows:

- row 1 is the header row; header cells are stripped strings
- empty cells (NaN) become None
- strings matching a null sentinel (case-insensitive, trimmed) become None
- rows where every cell is empty are skipped
- numpy scalars are converted to plain Python values
"""

__all__ = [
    "SheetReadError",
    "SheetHeaderError",
    "SheetData",
    "EXCEL_SUFFIXES",
    "read_sheet",
]

EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}


class SheetReadError(Exception):
    """Raised when a spreadsheet file is missing, unsupported or unreadable."""


class SheetHeaderError(Exception):
    """Raised when the header row (1st line) is missing or empty."""


@dataclass
class SheetData:
    sheet_name: str
    headers: list[str]
    rows: list[list[Any]]  # positional, aligned with headers


def _load_frame(path: Path) -> tuple[str, pd.DataFrame]:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return path.stem, pd.read_csv(path, header=None, dtype=object, skip_blank_lines=True)
    if suffix in EXCEL_SUFFIXES:
        xls = pd.ExcelFile(path)
        # only the first sheet is read
        name = xls.sheet_names[0]
        return str(name), xls.parse(name, header=None)
    raise SheetReadError(f"unsupported spreadsheet type: {path.name}")


def _clean_cell(value: Any, null_sentinels: set[str] | None) -> Any:
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, str) and null_sentinels and value.strip().upper() in null_sentinels:
        return None
    return value


def read_sheet(path: Path, null_sentinels: Iterable[str] | None = None) -> SheetData:
    """Read the first sheet of ``path`` into headers and rows.

    Parameters
    ----------
    path: .xlsx / .xls / .csv file
    null_sentinels: strings treated as empty cells (e.g. ['N/A'])

    Raises
    ------
    SheetReadError: file missing, unsupported suffix or decode failure
    SheetHeaderError: no header row
    """
    if not path.exists():
        raise SheetReadError(f"file not found: {path}")
    try:
        sheet_name, df = _load_frame(path)
    except SheetReadError:
        raise
    except Exception as e:
        raise SheetReadError(f"failed to read {path.name}: {e}") from e

    sentinels = {s.strip().upper() for s in null_sentinels} if null_sentinels else None

    if df.shape[0] < 1:
        raise SheetHeaderError(f"sheet '{sheet_name}' in {path.name} has no header row")
    headers = ["" if pd.isna(c) else str(c).strip() for c in df.iloc[0].tolist()]
    if not any(headers):
        raise SheetHeaderError(f"sheet '{sheet_name}' in {path.name} has an empty header row")

    rows: list[list[Any]] = []
    for _, raw in df.iloc[1:].iterrows():
        if raw.isna().all():
            continue
        cells = [_clean_cell(v, sentinels) for v in raw.tolist()]
        if all(c is None for c in cells):
            continue
        rows.append(cells)
    return SheetData(sheet_name=sheet_name, headers=headers, rows=rows)
