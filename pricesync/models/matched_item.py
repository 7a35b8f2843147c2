from __future__ import annotations

from dataclasses import dataclass

from .company_row import NormalizedCompanyRow
from .vendor_row import NormalizedVendorRow

"""MatchedItem model: one company row joined (or not) to a vendor row by MPN."""

__all__ = [
    "MatchedItem",
]


@dataclass(frozen=True)
class MatchedItem:
    """Result of looking up one company row in the vendor data.

    ``is_orphaned`` and ``cost_difference`` are derived from ``vendor_row`` so
    ``is_orphaned == (vendor_row is None)`` always holds.
    """
    company_row: NormalizedCompanyRow
    vendor_row: NormalizedVendorRow | None = None

    @property
    def mpn(self) -> str:
        return self.company_row.mpn

    @property
    def is_orphaned(self) -> bool:
        return self.vendor_row is None

    @property
    def cost_difference(self) -> float | None:
        """Company cost minus vendor cost; None when orphaned."""
        if self.vendor_row is None:
            return None
        return self.company_row.cost - self.vendor_row.cost
