from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import replace
from pathlib import PurePath
from typing import Any

from ..models.column_config import ColumnConfig, ExtraColumnConfig, ExtraColumnMode
from ..models.options import Dialect
from ..sql.identifier import normalize_identifier
from ..sql.literal import default_timestamp_expression, format_number

"""Column inference and mapping edits.

These helpers derive the initial ColumnConfig list from a sheet and apply the
edits a user makes (renames, exclusions, extra columns) as new config lists.
Nothing here mutates its input.
"""

__all__ = [
    "infer_columns",
    "apply_column_overrides",
    "upsert_extra_column",
    "apply_timestamp_defaults",
    "default_table_name",
    "script_file_name",
    "DEFAULT_TABLE_NAME",
]

logger = logging.getLogger(__name__)

DEFAULT_TABLE_NAME = "my_table"
DEFAULT_SCRIPT_NAME = "insert_script"


def _header_text(raw: Any) -> str:
    if raw is None:
        return ""
    if isinstance(raw, float):  # 2.0 -> "2"
        return (format_number(raw) or "").strip()
    return str(raw).strip()


def infer_columns(rows: Sequence[Sequence[Any]], has_header_row: bool) -> list[ColumnConfig]:
    """Derive one ColumnConfig per column of the widest row.

    Header cells that are missing or blank (and every column when there is no
    header row) are named `column_N`, 1-based.
    """
    header: Sequence[Any] = (rows[0] if rows else []) if has_header_row else []
    width = max((len(row) for row in rows), default=0)
    width = max(width, len(header))

    columns: list[ColumnConfig] = []
    for index in range(width):
        text = _header_text(header[index]) if index < len(header) else ""
        source_name = text or f"column_{index + 1}"
        columns.append(
            ColumnConfig(
                source_index=index,
                source_name=source_name,
                target_name=normalize_identifier(source_name),
                include=True,
            )
        )
    return columns


def apply_column_overrides(
    columns: Sequence[ColumnConfig], overrides: Iterable[Mapping[str, Any]]
) -> list[ColumnConfig]:
    """Apply rename / exclude edits addressed by source name or index.

    Each override is a mapping with `source` (header text) or `index` (0-based)
    plus optional `target` and `include`. Unmatched overrides are skipped with
    a warning.
    """
    result = list(columns)
    for override in overrides:
        if "index" in override:
            matches = [i for i, c in enumerate(result) if c.source_index == override["index"]]
        else:
            source = str(override.get("source", "")).strip()
            matches = [i for i, c in enumerate(result) if c.source_name == source]
        if not matches:
            logger.warning(f"column override matched no column: {dict(override)}")
            continue
        changes: dict[str, Any] = {}
        if "target" in override:
            changes["target_name"] = str(override["target"])
        if "include" in override:
            changes["include"] = bool(override["include"])
        for i in matches:
            result[i] = replace(result[i], **changes)
    return result


def upsert_extra_column(
    extra_columns: Sequence[ExtraColumnConfig],
    target_name: str,
    mode: ExtraColumnMode | str,
    value: str,
) -> list[ExtraColumnConfig]:
    """Replace the extra column with the same target name or append a new one.

    Names are compared normalized and case-insensitively; a replaced column
    keeps its id.
    """
    key = normalize_identifier(target_name).lower()
    mode = ExtraColumnMode(mode)
    result = list(extra_columns)
    for i, column in enumerate(result):
        if normalize_identifier(column.target_name).lower() == key:
            result[i] = ExtraColumnConfig(
                target_name=target_name, mode=mode, value=value, include=True, id=column.id
            )
            return result
    result.append(ExtraColumnConfig(target_name=target_name, mode=mode, value=value, include=True))
    return result


def apply_timestamp_defaults(
    extra_columns: Sequence[ExtraColumnConfig],
    column_names: Iterable[str],
    expression: str,
    dialect: Dialect | str,
) -> list[ExtraColumnConfig]:
    """Upsert a raw-SQL timestamp extra column for each named column.

    A blank expression falls back to the dialect's current-timestamp function.

    Raises:
        ValueError: when no non-blank column name is given
    """
    names = [name.strip() for name in column_names if name and name.strip()]
    if not names:
        raise ValueError("at least one timestamp column name is required")
    sql = expression.strip() or default_timestamp_expression(dialect)
    result = list(extra_columns)
    for name in names:
        result = upsert_extra_column(result, name, ExtraColumnMode.SQL, sql)
    return result


def default_table_name(file_name: str) -> str:
    """Table name derived from a file name without its extension."""
    stem = PurePath(file_name).stem if file_name else ""
    return normalize_identifier(stem) or DEFAULT_TABLE_NAME


def script_file_name(table_name: str) -> str:
    return f"{normalize_identifier(table_name) or DEFAULT_SCRIPT_NAME}.sql"
