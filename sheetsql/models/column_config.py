from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum

"""Column mapping models.

ColumnConfig maps one positional source column to a target column name.
ExtraColumnConfig describes a synthetic column whose single value is applied
to every generated row.
"""

__all__ = [
    "ColumnConfig",
    "ExtraColumnConfig",
    "ExtraColumnMode",
]


@dataclass(frozen=True)
class ColumnConfig:
    """Mapping for one source column (one per column of the widest row)."""
    source_index: int  # 0-based position in a Row
    source_name: str  # header text or column_N
    target_name: str  # output column name (normalized on quoting)
    include: bool = True


class ExtraColumnMode(str, Enum):
    """How an extra column's raw value is turned into SQL."""
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    SQL = "sql"  # raw expression, emitted verbatim


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class ExtraColumnConfig:
    """Synthetic column not present in the source file."""
    target_name: str
    mode: ExtraColumnMode = ExtraColumnMode.TEXT
    value: str = ""
    include: bool = True
    id: str = field(default_factory=_new_id)
