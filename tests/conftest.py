# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path

import pandas as pd
import pytest

from sheetsql.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "out").mkdir()
        monkeypatch.chdir(p)
        # setenv first so teardown also removes values loaded from a test's .env
        for var in ("SHEETSQL_DIALECT", "SHEETSQL_SCHEMA", "SHEETSQL_ROWS_PER_INSERT"):
            monkeypatch.setenv(var, "")
            monkeypatch.delenv(var)
        yield p


@pytest.fixture(autouse=True)
def clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def make_excel() -> Callable[..., Path]:
    """Factory writing a headerless workbook: {sheet: rows} -> path."""
    def _make(directory: Path, name: str, sheets: dict[str, list[list[object]]]) -> Path:
        p = directory / name
        with pd.ExcelWriter(p, engine="openpyxl") as writer:
            for sheet, rows in sheets.items():
                pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
        return p
    return _make


@pytest.fixture()
def customers_xlsx(temp_workdir: Path, make_excel) -> Path:
    return make_excel(
        temp_workdir / "data",
        "customers.xlsx",
        {
            "Customers": [
                ["id", "Full Name", "email"],
                [1, "Alice", "alice@example.com"],
                [2, "O'Brien", None],
                [None, None, None],
                [3, "  Charlie ", "n/a"],
            ],
            "Orders": [
                ["order_id", "customer_id", "total"],
                [10, 1, 9.5],
                [11, 2, 20],
            ],
        },
    )


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source: ./data/customers.xlsx
sheets: [Customers]
has_header_row: true
options:
  dialect: postgresql
  table_name: customers
  schema_name: crm
  rows_per_insert: 2
  null_tokens: ["null", "n/a"]
columns:
  - source: Full Name
    target: full name
  - index: 2
    include: false
extra_columns:
  - target: is_active
    mode: boolean
    value: "yes"
timestamp_defaults:
  columns: [created_at]
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "sheetsql.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg
