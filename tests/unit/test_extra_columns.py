from __future__ import annotations

import pytest

from sheetsql.models import Dialect, ExtraColumnConfig, ExtraColumnMode, GeneratorOptions
from sheetsql.sql.literal import default_timestamp_expression, extra_value_to_sql


def _extra(mode, value="") -> ExtraColumnConfig:
    return ExtraColumnConfig(target_name="x", mode=mode, value=value)


PG = GeneratorOptions(dialect=Dialect.POSTGRESQL)
MY = GeneratorOptions(dialect=Dialect.MYSQL)


def test_null_mode_ignores_value():
    assert extra_value_to_sql(_extra(ExtraColumnMode.NULL, "anything"), MY) == "NULL"


def test_sql_mode_passes_expression_verbatim():
    assert extra_value_to_sql(_extra(ExtraColumnMode.SQL, "  NOW() "), MY) == "NOW()"
    assert extra_value_to_sql(_extra(ExtraColumnMode.SQL, "'a' || 'b'"), PG) == "'a' || 'b'"


def test_sql_mode_blank_is_null():
    assert extra_value_to_sql(_extra(ExtraColumnMode.SQL, "   "), MY) == "NULL"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("42", "42"),
        (" 3.50 ", "3.5"),
        ("1e3", "1000"),
        ("-0.25", "-0.25"),
        ("", "0"),
        ("abc", "NULL"),
        ("Infinity", "NULL"),
        ("NaN", "NULL"),
        ("1_000", "NULL"),
        ("1e400", "NULL"),
        ("-1e400", "NULL"),
        ("1e-400", "0"),
        ("1e999999999", "NULL"),
    ],
)
def test_number_mode(raw, expected):
    assert extra_value_to_sql(_extra(ExtraColumnMode.NUMBER, raw), MY) == expected


@pytest.mark.parametrize("raw", ["yes", "YES", " y ", "true", "1", "on"])
def test_boolean_mode_truthy(raw):
    assert extra_value_to_sql(_extra(ExtraColumnMode.BOOLEAN, raw), PG) == "TRUE"
    assert extra_value_to_sql(_extra(ExtraColumnMode.BOOLEAN, raw), MY) == "1"


@pytest.mark.parametrize("raw", ["no", "0", "", "maybe", "off"])
def test_boolean_mode_everything_else_false(raw):
    assert extra_value_to_sql(_extra(ExtraColumnMode.BOOLEAN, raw), PG) == "FALSE"
    assert extra_value_to_sql(_extra(ExtraColumnMode.BOOLEAN, raw), MY) == "0"


def test_text_mode_uses_string_rules():
    assert extra_value_to_sql(_extra(ExtraColumnMode.TEXT, " it's "), MY) == "'it''s'"
    assert extra_value_to_sql(_extra(ExtraColumnMode.TEXT, ""), MY) == "NULL"
    assert extra_value_to_sql(_extra(ExtraColumnMode.TEXT, "N/A"), MY) == "NULL"


def test_mode_given_as_plain_string():
    assert extra_value_to_sql(ExtraColumnConfig(target_name="x", mode="sql", value="1+1"), MY) == "1+1"


@pytest.mark.parametrize(
    "dialect, expected",
    [
        (Dialect.MYSQL, "NOW()"),
        (Dialect.POSTGRESQL, "NOW()"),
        (Dialect.SQLITE, "CURRENT_TIMESTAMP"),
        (Dialect.SQLSERVER, "SYSDATETIME()"),
    ],
)
def test_default_timestamp_expression(dialect, expected):
    assert default_timestamp_expression(dialect) == expected
