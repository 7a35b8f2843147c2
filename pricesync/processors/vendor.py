from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from jsonschema import Draft202012Validator

from ..models.mapping import MappingError, VendorMapping
from ..models.processing_result import ProcessResult
from ..models.vendor_row import NormalizedVendorRow
from .numbers import parse_number
from .pipeline import (
    ConstraintViolation,
    RequiredFieldMissing,
    RowPipeline,
    StructuralError,
    UnparsableNumber,
    cell_to_text,
    check_final_shape,
    is_blank,
    parse_row,
    process_rows,
)

"""Vendor price-list rows.

Vendor sheets have arbitrary layouts, so fields are pulled by column index
through a ``VendorMapping``. The normalized row carries a per-unit cost
derived from the packaged cost and the optional unit divider.
"""

__all__ = [
    "VENDOR_PIPELINE",
    "parse_vendor_row",
    "process_vendor_rows",
]

logger = logging.getLogger(__name__)

VENDOR_ROW_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["MPN", "Cost", "UnitDivider", "UnitCost"],
    "properties": {
        "MPN": {"type": "string", "minLength": 1},
        "Cost": {"type": "number", "minimum": 0},
        "UnitDivider": {"type": "number", "exclusiveMinimum": 0},
        "UnitCost": {"type": "number", "minimum": 0},
    },
}
_validator = Draft202012Validator(VENDOR_ROW_SCHEMA)


def _coerce_mapping(mapping: VendorMapping | Mapping[str, Any] | None, row_number: int) -> VendorMapping:
    if mapping is None:
        raise StructuralError("Mapping configuration is required", row=row_number)
    if isinstance(mapping, VendorMapping):
        return mapping
    if not isinstance(mapping, Mapping):
        raise StructuralError(
            f"Mapping configuration must be an object, got {type(mapping).__name__}", row=row_number
        )
    try:
        return VendorMapping.from_dict(mapping)
    except MappingError as e:
        raise StructuralError(str(e), row=row_number) from e


def extract_vendor_row(row: Sequence[Any], mapping: Any, row_index: int) -> dict[str, Any]:
    """Pull MPN, Cost and Unit Divider from their mapped columns.

    Cost and Unit Divider go through ``parse_number``; an unmapped or
    out-of-range divider column yields None.
    """
    row_number = row_index + 1
    mapping = _coerce_mapping(mapping, row_number)

    for field, column in (("MPN", mapping.mpn), ("Cost", mapping.cost)):
        if column.index < 0 or column.index >= len(row):
            raise StructuralError(
                f"{field} column index {column.index} is out of bounds (row has {len(row)} columns)",
                row=row_number,
            )

    divider_raw = None
    if mapping.unit_divider is not None and 0 <= mapping.unit_divider.index < len(row):
        divider_raw = row[mapping.unit_divider.index]

    raw = {
        "MPN": row[mapping.mpn.index],
        "Cost": parse_number(row[mapping.cost.index]),
        "UnitDivider": parse_number(divider_raw),
    }
    logger.debug(f"[VendorProcessor] Row {row_number} extracted: {raw}")
    return raw


def validate_vendor_row(raw: dict[str, Any], row_index: int) -> dict[str, Any]:
    row_number = row_index + 1
    if is_blank(raw.get("MPN")):
        raise RequiredFieldMissing("MPN is required but was empty or missing", row=row_number)
    cost = raw.get("Cost")
    if cost is None:
        raise UnparsableNumber("Cost value could not be converted to a number", row=row_number)
    if cost < 0:
        raise ConstraintViolation(f"Cost cannot be negative, got: {cost}", row=row_number)
    divider = raw.get("UnitDivider")
    if divider is not None and divider <= 0:
        raise ConstraintViolation(f"Unit Divider must be positive, got: {divider}", row=row_number)
    return raw


def normalize_vendor_row(validated: dict[str, Any]) -> NormalizedVendorRow:
    divider = validated.get("UnitDivider")
    row = NormalizedVendorRow(
        mpn=cell_to_text(validated["MPN"]),
        cost=validated["Cost"],
        unit_divider=1 if divider is None else divider,
    )
    check_final_shape(_validator, row.to_dict())
    return row


VENDOR_PIPELINE: RowPipeline[NormalizedVendorRow] = RowPipeline(
    name="VendorProcessor",
    extract=extract_vendor_row,
    validate=validate_vendor_row,
    normalize=normalize_vendor_row,
)


def parse_vendor_row(
    row: Sequence[Any], mapping: VendorMapping | Mapping[str, Any] | None, row_index: int = 0
) -> NormalizedVendorRow:
    """Parse a single vendor row.

    Example:
        >>> parse_vendor_row(["ABC123", "Widget", 10.5, 2],
        ...                  {"MPN": {"index": 0}, "Cost": {"index": 2}, "Unit Divider": {"index": 3}}).unit_cost
        5.25
    """
    return parse_row(VENDOR_PIPELINE, row, mapping, row_index)


def process_vendor_rows(
    rows: Iterable[Sequence[Any]], mapping: VendorMapping | Mapping[str, Any] | None
) -> ProcessResult[NormalizedVendorRow]:
    return process_rows(VENDOR_PIPELINE, rows, mapping)
