"""sheetsql: turn spreadsheet rows into SQL INSERT scripts.

The generator itself is pure: it takes materialized rows plus plain-data
configuration and returns a script string. Reading workbooks, loading job
config and writing files live in the surrounding packages.
"""

from .models import (
    ColumnConfig,
    Dialect,
    ExtraColumnConfig,
    ExtraColumnMode,
    GeneratorOptions,
    InsertScript,
)
from .services.mapping import infer_columns
from .sql import build_insert_script, generate_script, normalize_identifier, quote_identifier

__version__ = "0.1.0"

__all__ = [
    "ColumnConfig",
    "Dialect",
    "ExtraColumnConfig",
    "ExtraColumnMode",
    "GeneratorOptions",
    "InsertScript",
    "build_insert_script",
    "generate_script",
    "infer_columns",
    "normalize_identifier",
    "quote_identifier",
]
