from __future__ import annotations

from dataclasses import dataclass

"""Markup rule model."""

__all__ = [
    "Markup",
]


@dataclass(frozen=True)
class Markup:
    """Multiplicative markup: price = cost * multiplier (1.5 = 50% over cost)."""
    multiplier: float

    @staticmethod
    def from_percentage(percentage: float) -> Markup:
        return Markup(multiplier=1 + percentage / 100)
