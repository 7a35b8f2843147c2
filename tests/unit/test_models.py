from __future__ import annotations

import dataclasses

import pytest

from pricesync.models import (
    ColumnMapping,
    MappingError,
    Markup,
    MatchedItem,
    NormalizedCompanyRow,
    NormalizedVendorRow,
    ProcessResult,
    RowError,
    VendorMapping,
)

"""Unit tests for domain models (mapping, rows, matched items, markup)."""


def test_vendor_mapping_from_dict_round_trip():
    data = {
        "MPN": {"name": "Part", "index": 0},
        "Cost": {"name": "Cost", "index": 2},
        "Unit Divider": {"name": "Pack", "index": 3},
    }
    mapping = VendorMapping.from_dict(data)
    assert mapping.mpn == ColumnMapping("Part", 0)
    assert mapping.unit_divider == ColumnMapping("Pack", 3)
    assert mapping.to_dict() == data


def test_vendor_mapping_divider_optional():
    mapping = VendorMapping.from_dict({"MPN": {"index": 0}, "Cost": {"index": 1}})
    assert mapping.unit_divider is None
    assert mapping.mpn.name == ""
    assert "Unit Divider" not in mapping.to_dict()


@pytest.mark.parametrize(
    "data",
    [
        {"Cost": {"index": 1}},
        {"MPN": {"index": 0}},
        {"MPN": {"name": "x"}, "Cost": {"index": 1}},
        {"MPN": {"index": "0"}, "Cost": {"index": 1}},
        {"MPN": {"index": True}, "Cost": {"index": 1}},
        {"MPN": 0, "Cost": {"index": 1}},
    ],
)
def test_vendor_mapping_rejects_malformed(data):
    with pytest.raises(MappingError):
        VendorMapping.from_dict(data)


def test_vendor_row_unit_cost_is_derived_and_not_settable():
    row = NormalizedVendorRow(mpn="A", cost=12.0, unit_divider=4)
    assert row.unit_cost == 3.0
    with pytest.raises(AttributeError):
        row.unit_cost = 1.0  # type: ignore[misc]
    assert "unit_cost" not in {f.name for f in dataclasses.fields(row)}
    assert dataclasses.replace(row, cost=20.0).unit_cost == 5.0


def test_vendor_row_is_immutable():
    row = NormalizedVendorRow(mpn="A", cost=1.0)
    with pytest.raises(AttributeError):
        row.cost = 2.0  # type: ignore[misc]


def test_matched_item_invariants():
    company = NormalizedCompanyRow(mpn="A", item="W", cost=15, price=20)
    vendor = NormalizedVendorRow(mpn="A", cost=20)

    matched = MatchedItem(company_row=company, vendor_row=vendor)
    assert matched.mpn == "A"
    assert matched.is_orphaned is False
    assert matched.cost_difference == -5

    orphan = MatchedItem(company_row=company)
    assert orphan.vendor_row is None
    assert orphan.is_orphaned is True
    assert orphan.cost_difference is None


def test_markup_from_percentage():
    assert Markup.from_percentage(50) == Markup(multiplier=1.5)
    assert Markup.from_percentage(0).multiplier == 1


def test_row_error_to_dict_has_collaborator_keys():
    err = RowError(row=3, error="[Row 3] MPN is required", kind="REQUIRED_FIELD_MISSING")
    assert err.to_dict() == {"row": 3, "error": "[Row 3] MPN is required"}


def test_row_error_requires_kind():
    with pytest.raises(TypeError):
        RowError(row=1, error="[Row 1] MPN is required")


def test_process_result_to_dict_renders_rows_as_records():
    vendor = ProcessResult(
        normalized=[NormalizedVendorRow(mpn="X2", cost=24, unit_divider=12)],
        errors=[RowError(row=2, error="[Row 2] MPN is required but was empty or missing", kind="REQUIRED_FIELD_MISSING")],
    )
    assert vendor.to_dict() == {
        "normalized": [{"MPN": "X2", "Cost": 24, "UnitDivider": 12, "UnitCost": 2.0}],
        "errors": [{"row": 2, "error": "[Row 2] MPN is required but was empty or missing"}],
    }

    company = ProcessResult(normalized=[NormalizedCompanyRow(mpn="X1", item="Widget", cost=8, price=12, um="EA")])
    assert company.to_dict()["normalized"] == [
        {
            "MPN": "X1",
            "Item": "Widget",
            "Description": None,
            "PreferredVendor": None,
            "Cost": 8,
            "Price": 12,
            "U/M": "EA",
        }
    ]
