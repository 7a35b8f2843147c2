from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import replace

from ..models.company_row import NormalizedCompanyRow
from ..models.markup import Markup
from ..models.matched_item import MatchedItem

"""Markup calculator: turns vendor cost into a new sell price.

Prices are recomputed from the vendor's packaged cost (``vendor_row.cost``).
Orphaned items keep their catalog cost and price untouched.
"""

__all__ = [
    "calculate_price",
    "apply_markup",
    "get_markup_for_subclass",
    "extract_subclass",
    "apply_price_updates",
    "apply_subclass_price_updates",
]

logger = logging.getLogger(__name__)

# "ABC-123:Widget Name" -> "ABC-123"
_SUBCLASS_RE = re.compile(r"^([A-Z0-9-]+):")


def calculate_price(cost: float, markup: Markup) -> float:
    return cost * markup.multiplier


def apply_markup(cost: float, percentage: float) -> float:
    """Cost raised by ``percentage`` percent (25 -> x1.25)."""
    return cost * (1 + percentage / 100)


def get_markup_for_subclass(subclass: str, markup_table: Mapping[str, Markup], default_markup: Markup) -> Markup:
    """Exact-key lookup of a subclass markup, falling back to ``default_markup``."""
    return markup_table.get(subclass, default_markup)


def extract_subclass(item_name: str) -> str:
    """Leading subclass code of an item name, or "" when there is none."""
    match = _SUBCLASS_RE.match(item_name)
    return match.group(1) if match else ""


def _reprice(item: MatchedItem, markup: Markup) -> NormalizedCompanyRow:
    if item.vendor_row is None:
        return item.company_row
    vendor_cost = item.vendor_row.cost
    return replace(item.company_row, cost=vendor_cost, price=calculate_price(vendor_cost, markup))


def apply_price_updates(matched_items: Sequence[MatchedItem], markup: Markup) -> list[NormalizedCompanyRow]:
    """Return company rows with vendor cost and recomputed price for matched items.

    The result has the same length and order as ``matched_items``.
    """
    updated = [_reprice(item, markup) for item in matched_items]
    logger.info(
        f"[Pricing] Applied markup x{markup.multiplier} to "
        f"{sum(1 for m in matched_items if not m.is_orphaned)} of {len(matched_items)} items"
    )
    return updated


def apply_subclass_price_updates(
    matched_items: Sequence[MatchedItem], markup_table: Mapping[str, Markup], default_markup: Markup
) -> list[NormalizedCompanyRow]:
    """Like ``apply_price_updates`` but the markup is chosen per item by its subclass."""
    updated: list[NormalizedCompanyRow] = []
    for item in matched_items:
        markup = get_markup_for_subclass(extract_subclass(item.company_row.item), markup_table, default_markup)
        updated.append(_reprice(item, markup))
    logger.info(f"[Pricing] Applied subclass markups ({len(markup_table)} rules) to {len(matched_items)} items")
    return updated
