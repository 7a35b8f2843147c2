from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""RowError model: one rejected input row collected by batch processing."""

__all__ = [
    "RowError",
]


@dataclass(frozen=True)
class RowError:
    """Rejected row.

    Attributes:
        row: 1-based position of the row in the batch input
        error: Message of the failure, including its ``[Row N]`` prefix
        kind: Error classification in UPPER_SNAKE_CASE (e.g. UNPARSABLE_NUMBER)
    """
    row: int
    error: str
    kind: str

    def to_dict(self) -> dict[str, Any]:
        return {"row": self.row, "error": self.error}
