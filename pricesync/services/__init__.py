"""Matching, pricing and reconcile orchestration services."""

from .matching import (
    find_duplicate_mpns,
    match_items,
    matched_only,
    orphaned_items,
    summarize_matches,
    unmatched_vendor_rows,
)
from .pricing import (
    apply_markup,
    apply_price_updates,
    apply_subclass_price_updates,
    calculate_price,
    extract_subclass,
    get_markup_for_subclass,
)

__all__ = [
    # Match engine
    "match_items",
    "orphaned_items",
    "matched_only",
    "find_duplicate_mpns",
    "unmatched_vendor_rows",
    "summarize_matches",
    # Markup calculator
    "calculate_price",
    "apply_markup",
    "get_markup_for_subclass",
    "extract_subclass",
    "apply_price_updates",
    "apply_subclass_price_updates",
]
