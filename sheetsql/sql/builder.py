from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, TypeVar

from ..models.column_config import ColumnConfig, ExtraColumnConfig
from ..models.generation_result import InsertScript
from ..models.options import GeneratorOptions
from .identifier import normalize_identifier, qualified_table_name, quote_identifier
from .literal import extra_value_to_sql, to_sql_literal

"""INSERT statement builder.

Turns materialized rows plus column / extra-column configuration into one
script of batched INSERT statements. Pure and deterministic: degenerate input
(blank table name, no included columns, no non-blank rows) yields an empty
script instead of raising.
"""

__all__ = [
    "generate_script",
    "build_insert_script",
    "chunk_rows",
    "is_blank_row",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")


def chunk_rows(items: Sequence[T], size: int) -> list[list[T]]:
    """Split items into consecutive groups of at most `size` (min 1)."""
    step = max(1, size)
    return [list(items[i:i + step]) for i in range(0, len(items), step)]


def _is_blank_cell(cell: Any) -> bool:
    return cell is None or str(cell).strip() == ""


def is_blank_row(row: Sequence[Any]) -> bool:
    """True when every cell is None or whitespace-only text."""
    return all(_is_blank_cell(cell) for cell in row)


def _included(columns: Sequence[ColumnConfig] | Sequence[ExtraColumnConfig]) -> list[Any]:
    return [c for c in columns if c.include and normalize_identifier(c.target_name)]


def generate_script(
    rows: Sequence[Sequence[Any]],
    columns: Sequence[ColumnConfig],
    extra_columns: Sequence[ExtraColumnConfig],
    options: GeneratorOptions,
) -> InsertScript:
    """Build batched INSERT statements for `rows`.

    Parameters
    ----------
    rows: data rows (header already removed), positional cells
    columns: source column mapping, used through source_index
    extra_columns: synthetic columns appended after mapped columns
    options: dialect, table/schema and coercion settings

    Returns an InsertScript whose `sql` is "" when nothing can be generated.
    """
    dialect = options.dialect
    table = normalize_identifier(options.table_name)
    empty = InsertScript(sql="", table_name=table, dialect=dialect)
    if not table:
        logger.debug("table name is blank -> no statements")
        return empty

    mapped = _included(columns)
    extras = _included(extra_columns)
    if not mapped and not extras:
        logger.debug(f"table={table} has no included columns -> no statements")
        return empty

    kept_rows = [row for row in rows if not is_blank_row(row)]
    if not kept_rows:
        logger.debug(f"table={table} has no non-blank rows -> no statements")
        return empty

    table_ref = qualified_table_name(table, options.schema_name, dialect)
    column_names = [quote_identifier(c.target_name, dialect) for c in mapped]
    column_names += [quote_identifier(c.target_name, dialect) for c in extras]
    column_list = ", ".join(column_names)

    # extra column values do not depend on the row
    extra_values = [extra_value_to_sql(c, options) for c in extras]
    tuples: list[str] = []
    for row in kept_rows:
        values = [
            to_sql_literal(row[c.source_index] if c.source_index < len(row) else None, options)
            for c in mapped
        ]
        values.extend(extra_values)
        tuples.append(f"({', '.join(values)})")

    # extra columns have no position in the target table, so they must be named
    use_column_list = options.include_column_list or bool(extras)
    head = f"INSERT INTO {table_ref} ({column_list})" if use_column_list else f"INSERT INTO {table_ref}"
    statements = [
        f"{head}\nVALUES\n" + ",\n".join(batch) + ";"
        for batch in chunk_rows(tuples, options.batch_size)
    ]
    logger.debug(
        f"table={table} rows={len(kept_rows)} statements={len(statements)} dialect={dialect.value}"
    )

    sql = "\n".join([
        f"-- Dialect: {dialect.value}",
        f"-- Rows: {len(kept_rows)}",
        "",
        "\n\n".join(statements),
    ])
    return InsertScript(
        sql=sql,
        row_count=len(kept_rows),
        statement_count=len(statements),
        table_name=table,
        dialect=dialect,
    )


def build_insert_script(
    rows: Sequence[Sequence[Any]],
    columns: Sequence[ColumnConfig],
    extra_columns: Sequence[ExtraColumnConfig],
    options: GeneratorOptions,
) -> str:
    """Return the INSERT script text, or "" when nothing can be generated."""
    return generate_script(rows, columns, extra_columns, options).sql
