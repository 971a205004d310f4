from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from .options import Dialect

"""Result models for script generation.

InsertScript is the per-table outcome of the statement builder.
GenerationResult aggregates a CLI run over one or more sheets and feeds the
SUMMARY line.
"""

__all__ = [
    "InsertScript",
    "SheetOutcome",
    "GenerationResult",
]


@dataclass(frozen=True)
class InsertScript:
    """Generated script for one table."""
    sql: str  # "" when nothing could be generated
    row_count: int = 0  # rows that survived the blank-row filter
    statement_count: int = 0  # INSERT statements (one per batch)
    table_name: str = ""
    dialect: Dialect = Dialect.MYSQL

    @property
    def is_empty(self) -> bool:
        return self.sql == ""


@dataclass(frozen=True)
class SheetOutcome:
    sheet_name: str
    script: InsertScript
    output_path: Path | None = None  # None when written to stdout


@dataclass(frozen=True)
class GenerationResult:
    """Aggregated outcome of one run."""
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    dialect: Dialect
    sheets: list[SheetOutcome] = field(default_factory=list)

    @property
    def generated_sheets(self) -> int:
        return sum(1 for s in self.sheets if not s.script.is_empty)

    @property
    def empty_sheets(self) -> int:
        return sum(1 for s in self.sheets if s.script.is_empty)

    @property
    def total_rows(self) -> int:
        return sum(s.script.row_count for s in self.sheets)

    @property
    def total_statements(self) -> int:
        return sum(s.script.statement_count for s in self.sheets)
