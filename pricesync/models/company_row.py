from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""NormalizedCompanyRow model.

One catalog row from the company export after normalization. Field names are
snake_case here; ``to_dict`` maps them back to the export's header names so
updated rows can be written out as a spreadsheet again.
"""

__all__ = [
    "COMPANY_HEADERS",
    "NormalizedCompanyRow",
]

# Header names of the company export, in export column order
COMPANY_HEADERS = ["MPN", "Item", "Description", "PreferredVendor", "Cost", "Price", "U/M"]


@dataclass(frozen=True)
class NormalizedCompanyRow:
    """Company catalog row (MPN and Item non-empty, Cost/Price >= 0)."""
    mpn: str
    item: str
    cost: float
    price: float
    description: str | None = None
    preferred_vendor: str | None = None
    um: str | None = None  # unit of measure ("U/M" column)

    def to_dict(self) -> dict[str, Any]:
        """Return the row keyed by export header names."""
        return {
            "MPN": self.mpn,
            "Item": self.item,
            "Description": self.description,
            "PreferredVendor": self.preferred_vendor,
            "Cost": self.cost,
            "Price": self.price,
            "U/M": self.um,
        }
