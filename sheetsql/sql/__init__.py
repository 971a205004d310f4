"""SQL text generation: identifier quoting, literal encoding and INSERT building."""

from .builder import build_insert_script, chunk_rows, generate_script, is_blank_row
from .identifier import normalize_identifier, qualified_table_name, quote_identifier
from .literal import default_timestamp_expression, extra_value_to_sql, to_sql_literal

__all__ = [
    "build_insert_script",
    "generate_script",
    "chunk_rows",
    "is_blank_row",
    "normalize_identifier",
    "quote_identifier",
    "qualified_table_name",
    "to_sql_literal",
    "extra_value_to_sql",
    "default_timestamp_expression",
]
