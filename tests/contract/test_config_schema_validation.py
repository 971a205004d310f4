from __future__ import annotations

import json

import jsonschema
import pytest
from jsonschema.exceptions import ValidationError

from sheetsql.config.loader import SCHEMA_PATH

"""Job config schema contract."""


@pytest.fixture(scope="module")
def schema() -> dict:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def test_schema_accepts_full_example(schema):
    config = {
        "source": "./data/customers.xlsx",
        "sheets": ["Customers"],
        "has_header_row": True,
        "output_dir": "./out",
        "options": {
            "dialect": "postgresql",
            "table_name": "customers",
            "schema_name": "public",
            "rows_per_insert": 500,
            "include_column_list": True,
            "trim_strings": True,
            "empty_string_as_null": True,
            "null_tokens": ["null", "n/a"],
        },
        "columns": [{"source": "Full Name", "target": "full_name"}, {"index": 3, "include": False}],
        "extra_columns": [{"target": "is_active", "mode": "boolean", "value": "yes"}],
        "timestamp_defaults": {"columns": ["created_at", "updated_at"], "expression": "NOW()"},
    }
    jsonschema.validate(config, schema)


def test_schema_accepts_empty_document(schema):
    jsonschema.validate({}, schema)


@pytest.mark.parametrize(
    "config",
    [
        {"unknown": 1},
        {"options": {"dialect": "oracle"}},
        {"options": {"rows_per_insert": "many"}},
        {"options": {"colour": "red"}},
        {"columns": [{"target": "x"}]},
        {"columns": [{"source": "a", "index": 0}]},
        {"extra_columns": [{"mode": "sql", "value": "NOW()"}]},
        {"extra_columns": [{"target": "x", "mode": "json"}]},
        {"timestamp_defaults": {"columns": []}},
        {"null_tokens": ["x"]},
    ],
)
def test_schema_rejects_invalid(schema, config):
    with pytest.raises(ValidationError):
        jsonschema.validate(config, schema)
