from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""NormalizedVendorRow model.

One vendor price-list row after extraction, validation and normalization.
``unit_cost`` is derived from ``cost`` and ``unit_divider`` on every access
and has no backing field, so it can never drift from its inputs.
"""

__all__ = [
    "NormalizedVendorRow",
]


@dataclass(frozen=True)
class NormalizedVendorRow:
    mpn: str  # join key, always a string
    cost: float  # packaged cost (>= 0)
    unit_divider: float = 1  # units per package (> 0)

    @property
    def unit_cost(self) -> float:
        """Per-unit cost: ``cost / unit_divider``."""
        return self.cost / self.unit_divider

    def to_dict(self) -> dict[str, Any]:
        return {
            "MPN": self.mpn,
            "Cost": self.cost,
            "UnitDivider": self.unit_divider,
            "UnitCost": self.unit_cost,
        }
