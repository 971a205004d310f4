from __future__ import annotations

import logging
import sys
import time
from collections.abc import Mapping, Sequence
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, TextIO

from ..config.loader import JobConfig
from ..excel.reader import data_rows
from ..models.column_config import ColumnConfig, ExtraColumnConfig
from ..models.generation_result import GenerationResult, InsertScript, SheetOutcome
from ..models.options import GeneratorOptions
from ..sql.builder import generate_script
from ..sql.identifier import normalize_identifier
from .mapping import (
    apply_column_overrides,
    apply_timestamp_defaults,
    default_table_name,
    infer_columns,
    script_file_name,
)
from .progress import ProgressTracker

"""Run orchestration: workbook rows + job config -> INSERT scripts.

For each selected sheet:
1. Infer columns from the sheet (header row optional) and apply overrides
2. Collect extra columns (configured ones, then timestamp defaults)
3. Pick the table name (explicit, file stem, or sheet name)
4. Generate the script and write it to stdout, a file, or a directory
"""

logger = logging.getLogger(__name__)

__all__ = [
    "GenerationError",
    "select_sheets",
    "sheet_columns",
    "sheet_extra_columns",
    "generate_sheet",
    "generate_all",
]


class GenerationError(Exception):
    """Raised for run-level problems such as an unknown sheet name."""


def select_sheets(workbook: Mapping[str, Any], config: JobConfig) -> list[str]:
    """Sheets to convert: configured names, every sheet, or the first one."""
    names = list(workbook.keys())
    if config.all_sheets:
        return names
    if config.sheets:
        missing = [s for s in config.sheets if s not in workbook]
        if missing:
            raise GenerationError(f"sheet(s) not found: {missing} (available: {names})")
        return list(config.sheets)
    return names[:1]


def sheet_columns(rows: Sequence[Sequence[Any]], config: JobConfig) -> list[ColumnConfig]:
    columns = infer_columns(rows, config.has_header_row)
    if config.columns:
        columns = apply_column_overrides(columns, config.columns)
    return columns


def sheet_extra_columns(config: JobConfig, options: GeneratorOptions) -> list[ExtraColumnConfig]:
    extras = list(config.extra_columns)
    ts = config.timestamp_defaults
    if ts is not None:
        extras = apply_timestamp_defaults(extras, ts.columns, ts.expression, options.dialect)
    return extras


def generate_sheet(
    rows: Sequence[Sequence[Any]], config: JobConfig, options: GeneratorOptions
) -> InsertScript:
    """Generate the script for one sheet's raw rows (header still included)."""
    columns = sheet_columns(rows, config)
    extras = sheet_extra_columns(config, options)
    return generate_script(data_rows(rows, config.has_header_row), columns, extras, options)


def _table_for(
    sheet_name: str, options: GeneratorOptions, table_explicit: bool, multi: bool, source: str | None
) -> str:
    if table_explicit:
        return options.table_name
    if multi:
        return normalize_identifier(sheet_name) or default_table_name(source or "")
    return default_table_name(Path(source).name if source else "")


def _write_script(path: Path, sql: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(sql + "\n", encoding="utf-8")
    return path


def generate_all(
    workbook: Mapping[str, Sequence[Sequence[Any]]],
    config: JobConfig,
    options: GeneratorOptions,
    *,
    table_explicit: bool = False,
    stream: TextIO | None = None,
) -> GenerationResult:
    """Generate scripts for the selected sheets and emit them.

    Args:
        workbook: sheet name -> raw rows as produced by read_workbook
        config: job configuration (sheet selection, mappings, outputs)
        options: resolved generator options
        table_explicit: True when the table name came from config/env/CLI;
            otherwise it is derived from the source file or sheet name
        stream: destination when neither output nor output_dir is set
            (defaults to sys.stdout)

    Raises:
        GenerationError: unknown sheet, or `output` used with several sheets
    """
    sheets = select_sheets(workbook, config)
    multi = len(sheets) > 1
    if multi and config.output:
        raise GenerationError("`output` names a single file; use `output_dir` for several sheets")
    out = stream if stream is not None else sys.stdout

    start_dt = datetime.now(timezone.utc)
    start = time.perf_counter()
    outcomes: list[SheetOutcome] = []
    written: set[str] = set()

    with ProgressTracker(len(sheets)) as progress:
        for sheet_name in sheets:
            progress.start_sheet(sheet_name)
            table = _table_for(sheet_name, options, table_explicit, multi, config.source)
            sheet_options = replace(options, table_name=table)
            script = generate_sheet(workbook[sheet_name], config, sheet_options)

            output_path: Path | None = None
            if script.is_empty:
                logger.warning(f"sheet={sheet_name} produced no SQL (check table name, columns and rows)")
            elif config.output_dir:
                file_name = script_file_name(table)
                if file_name in written:
                    file_name = script_file_name(f"{table}_{sheet_name}")
                written.add(file_name)
                output_path = _write_script(Path(config.output_dir) / file_name, script.sql)
            elif config.output:
                output_path = _write_script(Path(config.output), script.sql)
            else:
                print(script.sql, file=out)
                if multi:
                    print(file=out)

            if output_path is not None:
                logger.info(f"sheet={sheet_name} table={script.table_name} -> {output_path}")
            logger.debug(
                f"sheet={sheet_name} rows={script.row_count} statements={script.statement_count}"
            )
            outcomes.append(SheetOutcome(sheet_name=sheet_name, script=script, output_path=output_path))
            progress.finish_sheet(rows=script.row_count)

    elapsed = time.perf_counter() - start
    return GenerationResult(
        start_time=start_dt,
        end_time=datetime.now(timezone.utc),
        elapsed_seconds=elapsed,
        dialect=options.dialect,
        sheets=outcomes,
    )
