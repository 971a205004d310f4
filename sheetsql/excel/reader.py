from __future__ import annotations

import csv
import re
from collections.abc import Iterable, Sequence
from datetime import datetime
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

"""Workbook reader.

Turns an .xlsx/.xls/.xlsm/.csv file into plain rows keyed by sheet name.
Cells are normalized to the generator's closed value set
(str | int | float | bool | datetime | None):
- NaN / NaT -> None
- pandas.Timestamp -> datetime
- numpy scalars -> Python scalars

Rows are kept positional and raw; the header row (if any) stays as row 0.
Fully blank rows are dropped. Only empty cells become None; text such as
"NA" or "null" is kept so NULL decisions stay with the generator's null tokens.
CSV rows may be ragged; short rows are padded with None.
"""

__all__ = [
    "WorkbookReadError",
    "EXCEL_SUFFIXES",
    "CSV_SUFFIXES",
    "read_workbook",
    "data_rows",
]

EXCEL_SUFFIXES = frozenset({".xlsx", ".xlsm", ".xls"})
CSV_SUFFIXES = frozenset({".csv"})

_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?$")


class WorkbookReadError(Exception):
    """Raised when a workbook cannot be located or parsed."""


def _to_cell(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, pd.Timestamp):
        return None if pd.isna(value) else value.to_pydatetime()
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, (float, datetime)):  # NaT is a datetime
        return None if pd.isna(value) else value
    return value


def _csv_cell(text: Any) -> Any:
    """Type a CSV text cell: blank -> None, numerals -> numbers, TRUE/FALSE -> bool."""
    if text is None or pd.isna(text):
        return None
    stripped = str(text).strip()
    if stripped == "":
        return None
    if _INT_RE.match(stripped):
        return int(stripped)
    if _FLOAT_RE.match(stripped):
        return float(stripped)
    upper = stripped.upper()
    if upper in ("TRUE", "FALSE"):
        return upper == "TRUE"
    return text


def _frame_to_rows(df: pd.DataFrame, convert=_to_cell) -> list[list[Any]]:
    rows: list[list[Any]] = []
    for raw in df.astype(object).itertuples(index=False, name=None):
        row = [convert(v) for v in raw]
        if all(c is None or (isinstance(c, str) and c.strip() == "") for c in row):
            continue
        rows.append(row)
    return rows


def _csv_width(path: Path) -> int:
    # widest record; pandas sizes columns from the first one
    with path.open(newline="", encoding="utf-8-sig") as f:
        return max((len(record) for record in csv.reader(f)), default=0)


def read_workbook(
    path: Path,
    target_sheets: Iterable[str] | None = None,
) -> dict[str, list[list[Any]]]:
    """Read a workbook returning raw rows keyed by sheet name.

    Parameters
    ----------
    path: workbook or CSV path
    target_sheets: restrict to these sheet names (None reads all sheets)

    A CSV file yields a single sheet named after the file stem.

    Raises:
        WorkbookReadError: missing file, unsupported suffix, or parse failure
    """
    path = Path(path)
    if not path.exists():
        raise WorkbookReadError(f"file not found: {path}")
    suffix = path.suffix.lower()
    wanted = set(target_sheets) if target_sheets is not None else None

    if suffix in CSV_SUFFIXES:
        try:
            width = _csv_width(path)
            df = pd.DataFrame()
            if width:
                df = pd.read_csv(
                    path,
                    header=None,
                    names=list(range(width)),
                    index_col=False,
                    dtype=str,
                    keep_default_na=False,
                    skip_blank_lines=True,
                )
        except Exception as e:
            raise WorkbookReadError(f"unable to read csv {path.name}: {e}") from e
        name = path.stem
        if wanted is not None and name not in wanted:
            return {}
        return {name: _frame_to_rows(df, convert=_csv_cell)}

    if suffix not in EXCEL_SUFFIXES:
        raise WorkbookReadError(
            f"unsupported file type '{suffix}' (expected .xlsx, .xls, .xlsm or .csv)"
        )

    sheets: dict[str, list[list[Any]]] = {}
    try:
        xls = pd.ExcelFile(path)
        for name in xls.sheet_names:
            if wanted is not None and str(name) not in wanted:
                continue
            # ヘッダなしで生読み (ヘッダ行の扱いは呼び出し側)
            # 空セルだけを NaN にする ("NA" などの文字列はそのまま)
            df = xls.parse(name, header=None, keep_default_na=False, na_values=[""])
            sheets[str(name)] = _frame_to_rows(df)
    except Exception as e:
        raise WorkbookReadError(f"unable to read workbook {path.name}: {e}") from e
    return sheets


def data_rows(rows: Sequence[Sequence[Any]], has_header_row: bool) -> list[Sequence[Any]]:
    """Rows after the header row (all rows when there is none)."""
    if not rows:
        return []
    return list(rows[1:]) if has_header_row else list(rows)
