from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.column_config import ExtraColumnConfig, ExtraColumnMode
from ..models.options import Dialect, GeneratorOptions

"""Job configuration loader.

Responsibilities:
- Load a YAML job file
- Validate it against job_schema.json (shipped next to this module)
- Build GeneratorOptions by layering defaults, config, environment and CLI overrides

Option precedence (lowest first):
    built-in defaults -> config `options` -> SHEETSQL_* environment -> CLI flags
"""

__all__ = [
    "ConfigError",
    "JobConfig",
    "TimestampDefaults",
    "SCHEMA_PATH",
    "ENV_PREFIX",
    "load_config",
    "resolve_options",
]

SCHEMA_PATH = Path(__file__).with_name("job_schema.json")
ENV_PREFIX = "SHEETSQL_"
# environment variable -> GeneratorOptions field
_ENV_OPTIONS = {
    f"{ENV_PREFIX}DIALECT": "dialect",
    f"{ENV_PREFIX}SCHEMA": "schema_name",
    f"{ENV_PREFIX}ROWS_PER_INSERT": "rows_per_insert",
}


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class TimestampDefaults:
    columns: tuple[str, ...]
    expression: str = ""  # blank -> dialect default


@dataclass(frozen=True)
class JobConfig:
    """One conversion run as described by a YAML job file."""
    source: str | None = None
    sheets: tuple[str, ...] = ()
    all_sheets: bool = False
    has_header_row: bool = True
    output: str | None = None
    output_dir: str | None = None
    options: dict[str, Any] = field(default_factory=dict)  # raw GeneratorOptions fields
    columns: tuple[dict[str, Any], ...] = ()  # overrides, see apply_column_overrides
    extra_columns: tuple[ExtraColumnConfig, ...] = ()
    timestamp_defaults: TimestampDefaults | None = None


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the job JSON schema.

    Raises:
        ConfigError: schema file missing/invalid, or the data fails validation
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _extra_column(raw: Mapping[str, Any]) -> ExtraColumnConfig:
    value = raw.get("value")
    return ExtraColumnConfig(
        target_name=raw["target"],
        mode=ExtraColumnMode(raw.get("mode", "text")),
        value="" if value is None else str(value),
        include=raw.get("include", True),
    )


def load_config(path: Path) -> JobConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    ts_raw = data.get("timestamp_defaults")
    timestamps = None
    if ts_raw is not None:
        timestamps = TimestampDefaults(
            columns=tuple(ts_raw["columns"]), expression=ts_raw.get("expression", "")
        )
    return JobConfig(
        source=data.get("source"),
        sheets=tuple(data.get("sheets", ())),
        all_sheets=data.get("all_sheets", False),
        has_header_row=data.get("has_header_row", True),
        output=data.get("output"),
        output_dir=data.get("output_dir"),
        options=dict(data.get("options", {})),
        columns=tuple(dict(c) for c in data.get("columns", ())),
        extra_columns=tuple(_extra_column(c) for c in data.get("extra_columns", ())),
        timestamp_defaults=timestamps,
    )


def _env_options(environ: Mapping[str, str]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for var, name in _ENV_OPTIONS.items():
        raw = environ.get(var)
        if raw is None or raw.strip() == "":
            continue
        if name == "rows_per_insert":
            try:
                values[name] = int(raw)
            except ValueError as e:
                raise ConfigError(f"{var} must be an integer, got '{raw}'") from e
        else:
            values[name] = raw.strip()
    return values


def resolve_options(
    config: JobConfig,
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> GeneratorOptions:
    """Layer option sources into one GeneratorOptions.

    `overrides` holds CLI values; None entries are treated as "not given".

    Raises:
        ConfigError: unknown option name or invalid dialect
    """
    known = {f.name for f in fields(GeneratorOptions)}
    merged: dict[str, Any] = {}
    merged.update(config.options)
    merged.update(_env_options(os.environ if environ is None else environ))
    merged.update({k: v for k, v in (overrides or {}).items() if v is not None})

    unknown = set(merged) - known
    if unknown:
        raise ConfigError(f"unknown option(s): {sorted(unknown)}")
    try:
        return replace(GeneratorOptions(), **merged)
    except ValueError as e:
        raise ConfigError(str(e)) from e
