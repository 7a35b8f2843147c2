# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path

import pandas as pd
import pytest

from pricesync.logging.init import reset_logging

COMPANY_HEADERS = ["MPN", "Item", "Description", "PreferredVendor", "Cost", "Price", "U/M"]


def _make_sheet(path: Path, rows: list[list[object]]) -> Path:
    """Write rows (header included) to a single-sheet workbook or CSV."""
    path.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame(rows)
    if path.suffix == ".csv":
        df.to_csv(path, header=False, index=False)
    else:
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="Sheet1", header=False, index=False)
    return path


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("PRICESYNC_CONFIG", raising=False)
        yield p


@pytest.fixture(autouse=True)
def _clean_logging():
    # handlers bind sys.stdout at setup time; capsys swaps it per test
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """vendor_file: ./data/vendor.xlsx
company_file: ./data/company.xlsx
output_file: ./out/company_updated.xlsx
vendor_mapping:
  MPN: {name: Part Number, index: 0}
  Cost: {index: 2}
  Unit Divider: {name: Pack}
markup:
  default_multiplier: 1.5
null_sentinels: [N/A]
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "pricesync.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def vendor_xlsx(temp_workdir: Path) -> Path:
    return _make_sheet(
        temp_workdir / "data" / "vendor.xlsx",
        [
            ["Part Number", "Description", "Case Cost", "Pack"],
            ["X1", "Widget", "$10.00", None],
            ["X2", "Gadget", "$24.00", 12],
            ["X3", "Gizmo", "$5.50", None],
        ],
    )


@pytest.fixture()
def company_xlsx(temp_workdir: Path) -> Path:
    return _make_sheet(
        temp_workdir / "data" / "company.xlsx",
        [
            COMPANY_HEADERS,
            ["X1", "Widget", "desc", "VendorA", 8, 12, "EA"],
            ["X2", "Gadget", "desc", "VendorA", 20, 30, "CS"],
            ["Z9", "Orphan", None, None, 3, 4.5, "EA"],
        ],
    )


@pytest.fixture()
def make_sheet():
    return _make_sheet
