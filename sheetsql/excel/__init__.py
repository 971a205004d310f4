"""Workbook reading (Excel / CSV) into raw positional rows."""

from .reader import WorkbookReadError, data_rows, read_workbook

__all__ = [
    "WorkbookReadError",
    "read_workbook",
    "data_rows",
]
