from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from datetime import UTC, datetime

from ..models.company_row import NormalizedCompanyRow
from ..models.matched_item import MatchedItem
from ..models.processing_result import MatchSummary
from ..models.vendor_row import NormalizedVendorRow

"""Match engine: joins company catalog rows to vendor rows by MPN.

The join is a left join over the company rows. Company order and cardinality
are preserved; vendor rows without a company counterpart do not appear in the
result. When several vendor rows share an MPN the last one wins.

Derived views (orphans, summary counts) are plain query functions over a
matched-items list; callers re-run them whenever they re-match.
"""

__all__ = [
    "match_items",
    "orphaned_items",
    "matched_only",
    "find_duplicate_mpns",
    "unmatched_vendor_rows",
    "summarize_matches",
]

logger = logging.getLogger(__name__)


def find_duplicate_mpns(vendor_rows: Sequence[NormalizedVendorRow]) -> list[str]:
    """MPNs that occur more than once in the vendor data, sorted."""
    counts = Counter(v.mpn for v in vendor_rows)
    return sorted(mpn for mpn, n in counts.items() if n > 1)


def match_items(
    company_rows: Sequence[NormalizedCompanyRow], vendor_rows: Sequence[NormalizedVendorRow]
) -> list[MatchedItem]:
    """Match every company row against the vendor rows by MPN.

    Returns:
        One MatchedItem per company row, in company order. Orphaned items have
        ``vendor_row`` None and ``cost_difference`` None; matched items have
        ``cost_difference = company cost - vendor cost``.
    """
    logger.info(f"[MatchEngine] Starting matching: {len(company_rows)} company rows, {len(vendor_rows)} vendor rows")
    start = datetime.now(UTC)

    # later rows overwrite earlier ones with the same MPN
    vendor_lookup = {v.mpn: v for v in vendor_rows}
    logger.debug(f"[MatchEngine] Vendor lookup created with {len(vendor_lookup)} entries")

    duplicates = find_duplicate_mpns(vendor_rows)
    if duplicates:
        logger.warning(
            f"[MatchEngine] {len(duplicates)} vendor MPNs appear more than once; "
            f"last occurrence used: {', '.join(duplicates[:10])}"
        )

    matched = [MatchedItem(company_row=c, vendor_row=vendor_lookup.get(c.mpn)) for c in company_rows]

    orphaned = sum(1 for m in matched if m.is_orphaned)
    elapsed_ms = (datetime.now(UTC) - start).total_seconds() * 1000
    logger.info(f"[MatchEngine] Matching completed in {elapsed_ms:.2f}ms: {len(matched)} items, {orphaned} orphaned")
    return matched


def orphaned_items(matched: Sequence[MatchedItem]) -> list[MatchedItem]:
    """Company rows with no vendor row."""
    return [m for m in matched if m.is_orphaned]


def matched_only(matched: Sequence[MatchedItem]) -> list[MatchedItem]:
    return [m for m in matched if not m.is_orphaned]


def unmatched_vendor_rows(
    company_rows: Sequence[NormalizedCompanyRow], vendor_rows: Sequence[NormalizedVendorRow]
) -> list[NormalizedVendorRow]:
    """Vendor rows whose MPN is absent from the company rows (input order)."""
    company_mpns = {c.mpn for c in company_rows}
    return [v for v in vendor_rows if v.mpn not in company_mpns]


def summarize_matches(matched: Sequence[MatchedItem], vendor_rows: Sequence[NormalizedVendorRow]) -> MatchSummary:
    orphaned = len(orphaned_items(matched))
    company_rows = [m.company_row for m in matched]
    return MatchSummary(
        total=len(matched),
        matched=len(matched) - orphaned,
        orphaned=orphaned,
        unmatched_vendor=len(unmatched_vendor_rows(company_rows, vendor_rows)),
        duplicate_vendor_mpns=find_duplicate_mpns(vendor_rows),
    )
