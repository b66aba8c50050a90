# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Any, Callable

import pandas as pd
import pytest

from sales_window.logging.init import reset_logging

HEADER = ["Ngày", "Giờ", "Thành tiền (VNĐ)"]


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("SALES_WINDOW_CONFIG", raising=False)
        yield p


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """headers:
  date: Date
  time: Time
  amount: Amount
allowed_extensions: [".xlsx"]
query_formats: ["%d/%m/%Y %H:%M"]
transaction_formats: ["%d/%m/%Y %I:%M:%S %p", "%d/%m/%Y %H:%M:%S"]
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "report.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def sample_grid() -> list[list[Any]]:
    """Sales export: title rows, header at index 2, two rows then a total row."""
    return [
        ["BÁO CÁO DOANH SỐ", "", ""],
        ["Cửa hàng 01", "", ""],
        list(HEADER),
        ["01/05/2024", 0.5, "100,000"],
        ["01/05/2024", "13:00:00", 50000],
        ["", "", ""],
        ["Tổng cộng", "", "150,000"],
    ]


def _write_xlsx(path: Path, rows: list[list[object]], sheet_name: str = "Sheet1") -> Path:
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    return path


@pytest.fixture()
def write_xlsx() -> Callable[..., Path]:
    return _write_xlsx


@pytest.fixture()
def make_report(temp_workdir: Path) -> Callable[..., Path]:
    """Write rows to ``data/<name>`` as a single-sheet workbook."""
    def _make(name: str, rows: list[list[object]]) -> Path:
        return _write_xlsx(temp_workdir / "data" / name, rows)
    return _make
