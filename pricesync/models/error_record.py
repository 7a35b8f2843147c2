from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

from .row_error import RowError

"""ErrorRecord model for the JSON Lines row error log.

Each rejected vendor or company row becomes one line with a fixed key set:
timestamp, file, dataset, row, error_type, message. ``row`` is 1-based within
the data rows of the sheet; -1 marks a file-level error with no row.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Spreadsheet filename being processed
        dataset: "vendor" or "company"
        row: Row number (1-based). -1 for file-level errors
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Error message as reported to the user
    """
    timestamp: str
    file: str
    dataset: str
    row: int
    error_type: str
    message: str

    @staticmethod
    def create(file: str, dataset: str, row: int, error_type: str, message: str) -> ErrorRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            dataset=dataset,
            row=row,
            error_type=error_type,
            message=message,
        )

    @staticmethod
    def from_row_error(file: str, dataset: str, error: RowError) -> ErrorRecord:
        return ErrorRecord.create(file, dataset, error.row, error.kind, error.error)

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
