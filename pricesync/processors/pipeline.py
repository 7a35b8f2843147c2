from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from jsonschema import Draft202012Validator

from ..models.processing_result import ProcessResult
from ..models.row_error import RowError

"""Shared extract -> validate -> normalize pipeline for spreadsheet rows.

A row kind is described by a ``RowPipeline`` holding three plain functions.
The single-row driver (``parse_row``) and the batch driver (``process_rows``)
are written once against that shape:

- ``parse_row`` fails fast and raises a ``RowProcessingError`` whose message
  carries ``[Row N]`` context.
- ``process_rows`` never aborts: each row either lands in ``normalized`` or
  becomes a ``RowError`` in ``errors``, and processing runs to the end.
"""

__all__ = [
    "RowProcessingError",
    "StructuralError",
    "RequiredFieldMissing",
    "UnparsableNumber",
    "ConstraintViolation",
    "SchemaMismatch",
    "RowPipeline",
    "parse_row",
    "process_rows",
    "cell_to_text",
    "is_blank",
    "check_final_shape",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")

ROW_MARKER = "[Row"


class RowProcessingError(Exception):
    """Base class for row-level failures.

    ``row`` is the 1-based row number once known; the message is prefixed with
    ``[Row N]`` at that point (never twice).
    """
    kind = "ROW_ERROR"

    def __init__(self, message: str, row: int | None = None) -> None:
        if row is not None and ROW_MARKER not in message:
            message = f"[Row {row}] {message}"
        super().__init__(message)
        self.message = message
        self.row = row

    def with_row(self, row: int) -> RowProcessingError:
        """Return an equivalent error carrying row context (self if it already has it)."""
        if self.row is not None or ROW_MARKER in self.message:
            return self
        return type(self)(self.message, row=row)


class StructuralError(RowProcessingError):
    """Row/header length mismatch, missing mapping, or out-of-bounds column index."""
    kind = "STRUCTURAL_ERROR"


class RequiredFieldMissing(RowProcessingError):
    """MPN, Item, or another mandatory field is absent or blank."""
    kind = "REQUIRED_FIELD_MISSING"


class UnparsableNumber(RowProcessingError):
    """A cost/price/divider cell could not be converted to a number."""
    kind = "UNPARSABLE_NUMBER"


class ConstraintViolation(RowProcessingError):
    """Negative cost/price or non-positive unit divider."""
    kind = "CONSTRAINT_VIOLATION"


class SchemaMismatch(RowProcessingError):
    """Final-shape validation failure not covered by the other kinds."""
    kind = "SCHEMA_MISMATCH"


@dataclass(frozen=True)
class RowPipeline(Generic[T]):
    """Three-stage strategy for one row kind.

    Attributes:
        name: Label used in log messages (e.g. "VendorProcessor")
        extract: ``(row, config, row_index) -> raw dict``
        validate: ``(raw, row_index) -> validated dict``
        normalize: ``(validated) -> final row``
    """
    name: str
    extract: Callable[[Sequence[Any], Any, int], dict[str, Any]]
    validate: Callable[[dict[str, Any], int], dict[str, Any]]
    normalize: Callable[[dict[str, Any]], T]


def parse_row(pipeline: RowPipeline[T], row: Sequence[Any], config: Any, row_index: int = 0) -> T:
    """Run one row through extract, validate and normalize.

    Args:
        pipeline: Row kind to apply
        row: Positional cell values
        config: Vendor mapping or company header list
        row_index: Zero-based row index (used for error messages)

    Raises:
        RowProcessingError: On the first failing stage, with ``[Row N]`` context
    """
    row_number = row_index + 1
    try:
        raw = pipeline.extract(row, config, row_index)
        validated = pipeline.validate(raw, row_index)
        return pipeline.normalize(validated)
    except RowProcessingError as e:
        contextual = e.with_row(row_number)
        if contextual is e:
            raise
        raise contextual from e
    except Exception as e:
        raise SchemaMismatch(f"{type(e).__name__}: {e}", row=row_number) from e


def _attempt(pipeline: RowPipeline[T], row: Sequence[Any], config: Any, row_index: int) -> T | RowError:
    try:
        return parse_row(pipeline, row, config, row_index)
    except RowProcessingError as e:
        logger.debug(f"[{pipeline.name}] Row {row_index + 1} failed: {e.message}")
        return RowError(row=row_index + 1, error=e.message, kind=e.kind)


def process_rows(pipeline: RowPipeline[T], rows: Iterable[Sequence[Any]], config: Any) -> ProcessResult[T]:
    """Process every row, collecting successes and per-row errors.

    A failing row never stops the batch. Error ``row`` numbers are the 1-based
    position of the row in ``rows``. With no config nothing is attempted.
    """
    if not config:
        logger.warning(f"[{pipeline.name}] Cannot process: missing config")
        return ProcessResult()

    rows = list(rows)
    logger.info(f"[{pipeline.name}] Starting row processing for {len(rows)} rows")
    start = datetime.now(UTC)

    normalized: list[T] = []
    errors: list[RowError] = []
    for index, row in enumerate(rows):
        outcome = _attempt(pipeline, row, config, index)
        if isinstance(outcome, RowError):
            errors.append(outcome)
        else:
            normalized.append(outcome)

    elapsed_ms = (datetime.now(UTC) - start).total_seconds() * 1000
    logger.info(
        f"[{pipeline.name}] Processing completed in {elapsed_ms:.2f}ms: "
        f"{len(normalized)} successful, {len(errors)} errors"
    )
    if errors:
        logger.warning(f"[{pipeline.name}] {len(errors)} rows failed validation out of {len(rows)} total rows")
    return ProcessResult(normalized=normalized, errors=errors)


def is_blank(value: Any) -> bool:
    """True for None and the empty string (whitespace is not blank here)."""
    return value is None or value == ""


def cell_to_text(value: Any) -> str:
    """Render a cell as text; integral floats lose their ``.0`` (12345.0 -> "12345")."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def check_final_shape(validator: Draft202012Validator, record: dict[str, Any]) -> None:
    """Validate a normalized record against its JSON schema.

    Raises:
        SchemaMismatch: Listing every violation as ``field: message``
    """
    violations = sorted(validator.iter_errors(record), key=lambda err: [str(p) for p in err.path])
    if violations:
        detail = ", ".join(
            f"{'.'.join(str(p) for p in err.path) or '<row>'}: {err.message}" for err in violations
        )
        raise SchemaMismatch(f"Row validation failed: {detail}")
