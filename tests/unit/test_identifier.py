from __future__ import annotations

import pytest

from sheetsql.models import Dialect
from sheetsql.sql.identifier import normalize_identifier, qualified_table_name, quote_identifier


def test_normalize_identifier_trims_and_collapses_whitespace():
    assert normalize_identifier("  first   name ") == "first_name"
    assert normalize_identifier("a\tb\nc") == "a_b_c"
    assert normalize_identifier("plain") == "plain"


def test_normalize_identifier_blank_is_empty():
    assert normalize_identifier("") == ""
    assert normalize_identifier("   ") == ""


@pytest.mark.parametrize(
    "dialect, expected",
    [
        (Dialect.MYSQL, "`a_b`"),
        (Dialect.SQLITE, "`a_b`"),
        (Dialect.SQLSERVER, "[a_b]"),
        (Dialect.POSTGRESQL, '"a_b"'),
    ],
)
def test_quote_identifier_collapses_whitespace_before_quoting(dialect, expected):
    assert quote_identifier("a b", dialect) == expected
    assert quote_identifier("  a    b  ", dialect) == expected


@pytest.mark.parametrize("dialect", list(Dialect))
def test_quote_identifier_empty_for_every_dialect(dialect):
    assert quote_identifier("", dialect) == ""
    assert quote_identifier("   ", dialect) == ""


def test_quote_identifier_escapes_embedded_quote_chars():
    assert quote_identifier("we`ird", Dialect.MYSQL) == "`we``ird`"
    assert quote_identifier("we`ird", Dialect.SQLITE) == "`we``ird`"
    assert quote_identifier("a]b", Dialect.SQLSERVER) == "[a]]b]"
    assert quote_identifier('say"hi', Dialect.POSTGRESQL) == '"say""hi"'
    # only the dialect's own quote character is doubled
    assert quote_identifier('say"hi', Dialect.MYSQL) == '`say"hi`'


def test_quote_identifier_accepts_dialect_string():
    assert quote_identifier("t", "postgresql") == '"t"'
    assert quote_identifier("t", "postgres") == '"t"'


def test_qualified_table_name_with_and_without_schema():
    assert qualified_table_name("orders", "sales", Dialect.POSTGRESQL) == '"sales"."orders"'
    assert qualified_table_name("orders", "  ", Dialect.POSTGRESQL) == '"orders"'
    assert qualified_table_name("my orders", "dbo", Dialect.SQLSERVER) == "[dbo].[my_orders]"
