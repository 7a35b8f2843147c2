"""Spreadsheet reading and writing (pandas)."""

from .reader import SheetData, SheetHeaderError, SheetReadError, read_sheet
from .writer import SheetWriteError, company_rows_to_table, write_sheet

__all__ = [
    "SheetData",
    "SheetHeaderError",
    "SheetReadError",
    "read_sheet",
    "SheetWriteError",
    "company_rows_to_table",
    "write_sheet",
]
