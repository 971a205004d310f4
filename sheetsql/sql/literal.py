from __future__ import annotations

import math
import numbers
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Any

from ..models.column_config import ExtraColumnConfig, ExtraColumnMode
from ..models.options import Dialect, GeneratorOptions

"""SQL literal encoding for cell values and extra columns.

Cell values form a closed set: str, number (int/float/Decimal), bool,
datetime/date, or None. Degenerate input never raises; it falls back to NULL.

Encoding order for a cell:
1. None -> NULL
2. datetime/date -> 'YYYY-MM-DD HH:MM:SS' (UTC, truncated to seconds)
3. bool -> TRUE/FALSE (postgresql) or 1/0
4. number -> decimal text when finite, else NULL
5. anything else -> string rules (trim, empty-as-null, null tokens, quoting)

bool is checked before number because bool is an int subclass in Python.
"""

__all__ = [
    "NULL",
    "TRUTHY_VALUES",
    "to_sql_literal",
    "string_literal",
    "boolean_literal",
    "format_number",
    "format_timestamp",
    "extra_value_to_sql",
    "default_timestamp_expression",
]

NULL = "NULL"
TIMESTAMP_FMT = "%Y-%m-%d %H:%M:%S"
TRUTHY_VALUES = frozenset({"true", "1", "yes", "y", "on"})
_DOUBLE_MAX_EXPONENT = 308

_TIMESTAMP_EXPRESSIONS = {
    Dialect.MYSQL: "NOW()",
    Dialect.POSTGRESQL: "NOW()",
    Dialect.SQLITE: "CURRENT_TIMESTAMP",
    Dialect.SQLSERVER: "SYSDATETIME()",
}


def format_timestamp(value: date) -> str:
    """Render a date/datetime as UTC text truncated to whole seconds."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
    else:
        value = datetime.combine(value, time.min)
    return value.strftime(TIMESTAMP_FMT)


def format_number(value: Any) -> str | None:
    """Decimal text for a finite number, None otherwise.

    Integral floats drop the fractional part (3.0 -> "3").
    """
    if isinstance(value, Decimal):
        if not value.is_finite():
            return None
        if abs(value.adjusted()) > _DOUBLE_MAX_EXPONENT:
            # outside the double range: overflow -> None, underflow -> "0"
            return format_number(float(value))
        text = format(value, "f")
        return text.rstrip("0").rstrip(".") if "." in text else text
    if isinstance(value, numbers.Integral):
        return str(int(value))
    number = float(value)
    if not math.isfinite(number):
        return None
    if number.is_integer():
        return str(int(number))
    return repr(number)


def boolean_literal(value: bool, dialect: Dialect) -> str:
    if dialect is Dialect.POSTGRESQL:
        return "TRUE" if value else "FALSE"
    return "1" if value else "0"


def string_literal(value: Any, options: GeneratorOptions) -> str:
    text = str(value)
    if options.trim_strings:
        text = text.strip()
    if options.empty_string_as_null and text == "":
        return NULL
    if text.lower() in options.null_token_set:
        return NULL
    return "'" + text.replace("'", "''") + "'"


def to_sql_literal(value: Any, options: GeneratorOptions) -> str:
    """Encode one cell value as a SQL literal for the configured dialect."""
    if value is None:
        return NULL
    if isinstance(value, date):
        return "'" + format_timestamp(value) + "'"
    if isinstance(value, bool):
        return boolean_literal(value, options.dialect)
    if isinstance(value, (numbers.Real, Decimal)):
        formatted = format_number(value)
        return NULL if formatted is None else formatted
    return string_literal(value, options)


def _parse_number(raw: str) -> float | None:
    # blank parses as zero; digit separators are not numeric input
    text = raw.strip()
    if text == "":
        return 0.0
    if "_" in text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def extra_value_to_sql(column: ExtraColumnConfig, options: GeneratorOptions) -> str:
    """Encode an extra column's configured value according to its mode.

    SQL mode is emitted verbatim (trimmed) without validation.
    """
    mode = ExtraColumnMode(column.mode)
    if mode is ExtraColumnMode.NULL:
        return NULL
    if mode is ExtraColumnMode.SQL:
        expression = column.value.strip()
        return expression if expression else NULL
    if mode is ExtraColumnMode.NUMBER:
        parsed = _parse_number(column.value)
        if parsed is None:
            return NULL
        formatted = format_number(parsed)
        return NULL if formatted is None else formatted
    if mode is ExtraColumnMode.BOOLEAN:
        flag = column.value.strip().lower() in TRUTHY_VALUES
        return boolean_literal(flag, options.dialect)
    return string_literal(column.value, options)


def default_timestamp_expression(dialect: Dialect | str) -> str:
    """Current-timestamp SQL expression for the dialect."""
    return _TIMESTAMP_EXPRESSIONS[Dialect.parse(dialect)]
