from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property

"""Generator options and SQL dialect enum.

GeneratorOptions is the plain-data bundle handed to the statement builder.
Defaults mirror the values offered to a user before any edit.
"""

__all__ = [
    "Dialect",
    "GeneratorOptions",
    "DEFAULT_NULL_TOKENS",
]


class Dialect(str, Enum):
    """Supported SQL engines.

    Each dialect decides identifier quoting and boolean literal form:
    - MYSQL / SQLITE: backtick identifiers, booleans as 1/0
    - SQLSERVER: bracket identifiers, booleans as 1/0
    - POSTGRESQL: double-quoted identifiers, booleans as TRUE/FALSE
    """
    MYSQL = "mysql"
    POSTGRESQL = "postgresql"
    SQLITE = "sqlite"
    SQLSERVER = "sqlserver"

    @property
    def label(self) -> str:
        return _DIALECT_LABELS[self]

    @classmethod
    def parse(cls, text: str | Dialect) -> Dialect:
        """Resolve a dialect from its value (case-insensitive).

        Raises:
            ValueError: when the name is not a supported dialect
        """
        if isinstance(text, Dialect):
            return text
        key = str(text).strip().lower()
        key = _DIALECT_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            supported = ", ".join(d.value for d in cls)
            raise ValueError(f"unknown dialect '{text}' (supported: {supported})") from None


_DIALECT_LABELS = {
    Dialect.MYSQL: "MySQL / MariaDB",
    Dialect.POSTGRESQL: "PostgreSQL",
    Dialect.SQLITE: "SQLite",
    Dialect.SQLSERVER: "SQL Server",
}

_DIALECT_ALIASES = {
    "postgres": "postgresql",
    "mariadb": "mysql",
    "mssql": "sqlserver",
}

DEFAULT_NULL_TOKENS: tuple[str, ...] = ("null", "nil", "n/a")


@dataclass(frozen=True)
class GeneratorOptions:
    """Options controlling statement generation for one table."""
    dialect: Dialect = Dialect.MYSQL
    table_name: str = "my_table"
    schema_name: str = ""
    rows_per_insert: int = 250  # tuples per INSERT, values < 1 behave as 1
    include_column_list: bool = True
    trim_strings: bool = True
    empty_string_as_null: bool = True
    null_tokens: tuple[str, ...] = field(default=DEFAULT_NULL_TOKENS)

    def __post_init__(self) -> None:
        # accept plain strings / lists from config and callers
        object.__setattr__(self, "dialect", Dialect.parse(self.dialect))
        object.__setattr__(self, "null_tokens", tuple(self.null_tokens))

    @cached_property
    def null_token_set(self) -> frozenset[str]:
        """Null tokens trimmed and lowercased for case-insensitive matching."""
        return frozenset(t.strip().lower() for t in self.null_tokens if t.strip())

    @property
    def batch_size(self) -> int:
        return max(1, int(self.rows_per_insert))
