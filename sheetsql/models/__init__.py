"""Domain models for spreadsheet -> SQL INSERT generation.

This package contains the plain-data configuration objects passed into the
generator and the result objects it returns.
"""

from .column_config import ColumnConfig, ExtraColumnConfig, ExtraColumnMode
from .generation_result import GenerationResult, InsertScript, SheetOutcome
from .options import DEFAULT_NULL_TOKENS, Dialect, GeneratorOptions

__all__ = [
    # Configuration models
    "ColumnConfig",
    "ExtraColumnConfig",
    "ExtraColumnMode",
    "Dialect",
    "GeneratorOptions",
    "DEFAULT_NULL_TOKENS",
    # Result models
    "InsertScript",
    "SheetOutcome",
    "GenerationResult",
]
