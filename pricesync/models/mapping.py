from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

"""Column mapping models for vendor price lists.

A vendor sheet has no fixed layout, so the caller picks which column holds
each semantic field. The picked columns arrive as
``{"MPN": {"name": ..., "index": ...}, "Cost": {...}, "Unit Divider"?: {...}}``
and are held here as a typed ``VendorMapping``. Company exports need no
mapping: the header name is the field key.
"""

__all__ = [
    "MPN_FIELD",
    "COST_FIELD",
    "UNIT_DIVIDER_FIELD",
    "VENDOR_FIELDS",
    "MappingError",
    "ColumnMapping",
    "VendorMapping",
]

MPN_FIELD = "MPN"
COST_FIELD = "Cost"
UNIT_DIVIDER_FIELD = "Unit Divider"
VENDOR_FIELDS = (MPN_FIELD, COST_FIELD, UNIT_DIVIDER_FIELD)


class MappingError(ValueError):
    """Raised when a mapping dict is missing a required field or is malformed."""


@dataclass(frozen=True)
class ColumnMapping:
    """Source column for one semantic field."""
    name: str  # header display name
    index: int  # zero-based column position

    @staticmethod
    def from_dict(field: str, data: Any) -> ColumnMapping:
        if isinstance(data, ColumnMapping):
            return data
        if not isinstance(data, Mapping):
            raise MappingError(f"mapping for {field} must be an object, got {type(data).__name__}")
        index = data.get("index")
        if isinstance(index, bool) or not isinstance(index, int):
            raise MappingError(f"mapping for {field} needs an integer index, got {index!r}")
        return ColumnMapping(name=str(data.get("name") or ""), index=index)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "index": self.index}


@dataclass(frozen=True)
class VendorMapping:
    """Column-index mapping used to extract vendor rows."""
    mpn: ColumnMapping
    cost: ColumnMapping
    unit_divider: ColumnMapping | None = None

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> VendorMapping:
        """Build from the ``{"MPN": ..., "Cost": ..., "Unit Divider": ...}`` form.

        Raises:
            MappingError: If MPN or Cost is absent or an entry is malformed
        """
        for field in (MPN_FIELD, COST_FIELD):
            if data.get(field) is None:
                raise MappingError(f"{field} column mapping is required")
        divider = data.get(UNIT_DIVIDER_FIELD)
        return VendorMapping(
            mpn=ColumnMapping.from_dict(MPN_FIELD, data[MPN_FIELD]),
            cost=ColumnMapping.from_dict(COST_FIELD, data[COST_FIELD]),
            unit_divider=ColumnMapping.from_dict(UNIT_DIVIDER_FIELD, divider) if divider is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        out = {MPN_FIELD: self.mpn.to_dict(), COST_FIELD: self.cost.to_dict()}
        if self.unit_divider is not None:
            out[UNIT_DIVIDER_FIELD] = self.unit_divider.to_dict()
        return out
