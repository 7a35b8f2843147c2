from __future__ import annotations

import math
import numbers
import re
from decimal import Decimal
from typing import Any

"""Numeric parsing for spreadsheet cells.

Cells arrive as numbers, currency-formatted strings ("$1,234.56"), blanks, or
NaN when pandas read an empty cell. ``parse_number`` folds all of them into
a number or None and never raises. Decimals come back as float.
"""

__all__ = [
    "parse_number",
]

# Currency symbols, thousands separators and any whitespace
_STRIP_RE = re.compile(r"[$€£¥,\s]")
_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(value: Any) -> float | int | None:
    """Convert a cell value to a number.

    >>> parse_number("$1,234.56")
    1234.56
    >>> parse_number(42)
    42
    >>> parse_number("") is None, parse_number("abc") is None
    (True, True)
    """
    if value is None:
        return None
    # bool is an int subclass but is not a spreadsheet number
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        return None if math.isnan(value) else value
    if isinstance(value, Decimal):
        return None if value.is_nan() else float(value)
    if isinstance(value, numbers.Real):
        # math.isnan overflows on ints past the float range; NaN is unequal to itself
        return None if value != value else value
    if isinstance(value, str):
        cleaned = _STRIP_RE.sub("", value)
        if not _FLOAT_RE.fullmatch(cleaned):
            return None
        return float(cleaned)
    return None
