from __future__ import annotations

import re

from ..models.options import Dialect

"""Identifier normalization and dialect-specific quoting.

An identifier that normalizes to "" is never quoted; callers treat the empty
result as "do not include".
"""

__all__ = [
    "normalize_identifier",
    "quote_identifier",
    "qualified_table_name",
]

_WHITESPACE_RUN = re.compile(r"\s+")

# dialect -> (open, close); the close character is the one doubled on escape
_QUOTE_CHARS: dict[Dialect, tuple[str, str]] = {
    Dialect.MYSQL: ("`", "`"),
    Dialect.SQLITE: ("`", "`"),
    Dialect.SQLSERVER: ("[", "]"),
    Dialect.POSTGRESQL: ('"', '"'),
}


def normalize_identifier(value: str) -> str:
    """Trim and collapse internal whitespace runs to a single underscore.

    >>> normalize_identifier("  first   name ")
    'first_name'
    """
    return _WHITESPACE_RUN.sub("_", value.strip())


def quote_identifier(identifier: str, dialect: Dialect | str) -> str:
    value = normalize_identifier(identifier)
    if not value:
        return ""
    open_char, close_char = _QUOTE_CHARS[Dialect.parse(dialect)]
    return f"{open_char}{value.replace(close_char, close_char * 2)}{close_char}"


def qualified_table_name(table: str, schema: str, dialect: Dialect | str) -> str:
    """Return `schema.table` (both quoted) or just the quoted table."""
    quoted_table = quote_identifier(table, dialect)
    if normalize_identifier(schema):
        return f"{quote_identifier(schema, dialect)}.{quoted_table}"
    return quoted_table
