from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Generic, TypeVar

from .company_row import NormalizedCompanyRow
from .matched_item import MatchedItem
from .row_error import RowError
from .vendor_row import NormalizedVendorRow

"""Result models for row processing, matching and a full reconcile run.

ProcessResult is what both row processors hand back to callers; MatchSummary
and ReconcileResult aggregate the numbers needed for the SUMMARY output line.
"""

T = TypeVar("T")


@dataclass(frozen=True)
class ProcessResult(Generic[T]):
    """Outcome of a batch: successfully normalized rows plus per-row errors."""
    normalized: list[T] = field(default_factory=list)
    errors: list[RowError] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.normalized)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def total_rows(self) -> int:
        return len(self.normalized) + len(self.errors)

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form; each normalized row is rendered with its own ``to_dict``."""
        return {
            "normalized": [r.to_dict() for r in self.normalized],
            "errors": [e.to_dict() for e in self.errors],
        }


@dataclass(frozen=True)
class MatchSummary:
    """Counts describing one matching pass."""
    total: int  # company rows
    matched: int
    orphaned: int
    unmatched_vendor: int  # vendor rows with no company counterpart
    duplicate_vendor_mpns: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ReconcileResult:
    """Aggregated output of one reconcile run."""
    vendor: ProcessResult[NormalizedVendorRow]
    company: ProcessResult[NormalizedCompanyRow]
    matched: list[MatchedItem]
    updated_rows: list[NormalizedCompanyRow]
    summary: MatchSummary
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    output_path: Path | None = None
    error_log_path: Path | None = None

    @property
    def row_errors(self) -> int:
        return self.vendor.error_count + self.company.error_count
