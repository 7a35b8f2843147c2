from __future__ import annotations

from unittest.mock import patch

from pricesync.models.company_row import NormalizedCompanyRow
from pricesync.models.vendor_row import NormalizedVendorRow
from pricesync.services.matching import (
    find_duplicate_mpns,
    match_items,
    matched_only,
    orphaned_items,
    summarize_matches,
    unmatched_vendor_rows,
)

"""Unit tests for the MPN match engine."""


def _company(mpn: str, cost: float = 10.0) -> NormalizedCompanyRow:
    return NormalizedCompanyRow(mpn=mpn, item=f"Item {mpn}", cost=cost, price=cost * 2)


def _vendor(mpn: str, cost: float = 10.0) -> NormalizedVendorRow:
    return NormalizedVendorRow(mpn=mpn, cost=cost)


def test_match_found_computes_cost_difference():
    [item] = match_items([_company("A", 15)], [_vendor("A", 12)])
    assert item.is_orphaned is False
    assert item.vendor_row == _vendor("A", 12)
    assert item.cost_difference == 3


def test_missing_mpn_is_orphaned():
    [item] = match_items([_company("B")], [_vendor("A")])
    assert item.is_orphaned is True
    assert item.vendor_row is None
    assert item.cost_difference is None


def test_left_join_preserves_company_order_and_cardinality():
    companies = [_company("C"), _company("A"), _company("Z"), _company("A")]
    vendors = [_vendor("A"), _vendor("B"), _vendor("C")]
    result = match_items(companies, vendors)
    assert [m.mpn for m in result] == ["C", "A", "Z", "A"]
    assert [m.is_orphaned for m in result] == [False, False, True, False]
    # vendor B has no company row and does not appear
    assert all(m.vendor_row is None or m.vendor_row.mpn != "B" for m in result)


def test_duplicate_vendor_mpn_last_wins():
    result = match_items([_company("A", 15)], [_vendor("A", 10), _vendor("A", 20)])
    assert result[0].vendor_row.cost == 20
    assert result[0].cost_difference == -5


def test_duplicate_vendor_mpn_logs_warning():
    with patch("pricesync.services.matching.logger") as mock_logger:
        match_items([_company("A")], [_vendor("A", 1), _vendor("A", 2), _vendor("B")])
    mock_logger.warning.assert_called_once()
    message = mock_logger.warning.call_args[0][0]
    assert "1 vendor MPNs appear more than once" in message
    assert message.endswith(": A")


def test_match_items_is_idempotent():
    companies = [_company("A", 5), _company("B", 7)]
    vendors = [_vendor("A", 4)]
    assert match_items(companies, vendors) == match_items(companies, vendors)


def test_empty_inputs():
    assert match_items([], [_vendor("A")]) == []
    assert [m.is_orphaned for m in match_items([_company("A")], [])] == [True]


def test_queries_over_matched_items():
    result = match_items([_company("A"), _company("B"), _company("C")], [_vendor("A"), _vendor("C"), _vendor("D")])
    assert [m.mpn for m in orphaned_items(result)] == ["B"]
    assert [m.mpn for m in matched_only(result)] == ["A", "C"]


def test_find_duplicate_mpns_sorted():
    vendors = [_vendor("B"), _vendor("A"), _vendor("B"), _vendor("A"), _vendor("C")]
    assert find_duplicate_mpns(vendors) == ["A", "B"]


def test_unmatched_vendor_rows():
    vendors = [_vendor("A"), _vendor("D"), _vendor("E")]
    assert [v.mpn for v in unmatched_vendor_rows([_company("A")], vendors)] == ["D", "E"]


def test_summarize_matches():
    vendors = [_vendor("A"), _vendor("A"), _vendor("D")]
    result = match_items([_company("A"), _company("B")], vendors)
    summary = summarize_matches(result, vendors)
    assert summary.total == 2
    assert summary.matched == 1
    assert summary.orphaned == 1
    assert summary.unmatched_vendor == 1
    assert summary.duplicate_vendor_mpns == ["A"]
