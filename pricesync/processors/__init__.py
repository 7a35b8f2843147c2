"""Row processors: numeric parsing, the shared row pipeline, and the vendor and company row kinds."""

from .company import COMPANY_PIPELINE, parse_company_row, process_company_rows
from .numbers import parse_number
from .pipeline import (
    ConstraintViolation,
    RequiredFieldMissing,
    RowPipeline,
    RowProcessingError,
    SchemaMismatch,
    StructuralError,
    UnparsableNumber,
    parse_row,
    process_rows,
)
from .vendor import VENDOR_PIPELINE, parse_vendor_row, process_vendor_rows

__all__ = [
    "parse_number",
    # Pipeline
    "RowPipeline",
    "parse_row",
    "process_rows",
    # Error taxonomy
    "RowProcessingError",
    "StructuralError",
    "RequiredFieldMissing",
    "UnparsableNumber",
    "ConstraintViolation",
    "SchemaMismatch",
    # Row kinds
    "VENDOR_PIPELINE",
    "parse_vendor_row",
    "process_vendor_rows",
    "COMPANY_PIPELINE",
    "parse_company_row",
    "process_company_rows",
]
