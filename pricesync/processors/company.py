from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from jsonschema import Draft202012Validator

from ..models.company_row import NormalizedCompanyRow
from ..models.processing_result import ProcessResult
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

"""Company catalog rows.

Catalog exports use fixed header names, so a row is zipped with the header
list and fields are read by name (MPN, Item, Description, PreferredVendor,
Cost, Price, U/M).
"""

__all__ = [
    "COMPANY_PIPELINE",
    "parse_company_row",
    "process_company_rows",
]

COMPANY_ROW_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["MPN", "Item", "Cost", "Price"],
    "properties": {
        "MPN": {"type": "string", "minLength": 1},
        "Item": {"type": "string", "minLength": 1},
        "Description": {"type": ["string", "null"]},
        "PreferredVendor": {"type": ["string", "null"]},
        "Cost": {"type": "number", "minimum": 0},
        "Price": {"type": "number", "minimum": 0},
        "U/M": {"type": ["string", "null"]},
    },
}
_validator = Draft202012Validator(COMPANY_ROW_SCHEMA)


def extract_company_row(row: Sequence[Any], headers: Sequence[str] | None, row_index: int) -> dict[str, Any]:
    row_number = row_index + 1
    if not headers:
        raise StructuralError("Headers are required for company row extraction", row=row_number)
    if len(row) != len(headers):
        raise StructuralError(
            f"Row has {len(row)} columns but headers has {len(headers)} columns", row=row_number
        )
    return dict(zip(headers, row))


def _parse_amount(raw: dict[str, Any], field: str, row_number: int) -> float:
    value = raw.get(field)
    amount = parse_number(value)
    if amount is None:
        raise UnparsableNumber(
            f"{field} value {value!r} (type: {type(value).__name__}) could not be converted to a number",
            row=row_number,
        )
    if amount < 0:
        raise ConstraintViolation(f"{field} cannot be negative, got: {amount}", row=row_number)
    return amount


def validate_company_row(raw: dict[str, Any], row_index: int) -> dict[str, Any]:
    row_number = row_index + 1
    if is_blank(raw.get("MPN")):
        raise RequiredFieldMissing("MPN is required but was empty or missing", row=row_number)
    item = raw.get("Item")
    if item is None or cell_to_text(item).strip() == "":
        raise RequiredFieldMissing("Item name is required but was empty or missing", row=row_number)
    cost = _parse_amount(raw, "Cost", row_number)
    price = _parse_amount(raw, "Price", row_number)
    return {
        "MPN": raw["MPN"],
        "Item": item,
        "Description": raw.get("Description"),
        "PreferredVendor": raw.get("PreferredVendor"),
        "Cost": cost,
        "Price": price,
        "U/M": raw.get("U/M"),
    }


def _optional_text(value: Any) -> str | None:
    if is_blank(value):
        return None
    return cell_to_text(value)


def normalize_company_row(validated: dict[str, Any]) -> NormalizedCompanyRow:
    row = NormalizedCompanyRow(
        mpn=cell_to_text(validated["MPN"]).strip(),
        item=cell_to_text(validated["Item"]).strip(),
        cost=validated["Cost"],
        price=validated["Price"],
        description=_optional_text(validated.get("Description")),
        preferred_vendor=_optional_text(validated.get("PreferredVendor")),
        um=_optional_text(validated.get("U/M")),
    )
    check_final_shape(_validator, row.to_dict())
    return row


COMPANY_PIPELINE: RowPipeline[NormalizedCompanyRow] = RowPipeline(
    name="CompanyProcessor",
    extract=extract_company_row,
    validate=validate_company_row,
    normalize=normalize_company_row,
)


def parse_company_row(row: Sequence[Any], headers: Sequence[str] | None, row_index: int = 0) -> NormalizedCompanyRow:
    """Parse a single company row against its header list.

    Example:
        >>> parse_company_row(["ABC123", "Widget", "Description", "Vendor", 10.5, 15.0, "EA"],
        ...                   ["MPN", "Item", "Description", "PreferredVendor", "Cost", "Price", "U/M"]).price
        15.0
    """
    return parse_row(COMPANY_PIPELINE, row, headers, row_index)


def process_company_rows(
    rows: Iterable[Sequence[Any]], headers: Sequence[str] | None
) -> ProcessResult[NormalizedCompanyRow]:
    return process_rows(COMPANY_PIPELINE, rows, headers)
