from __future__ import annotations

import argparse
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from ..config.loader import ConfigError, JobConfig, load_config, resolve_options
from ..excel.reader import WorkbookReadError, data_rows, read_workbook
from ..logging.init import log_summary, set_debug, setup_logging
from ..services.mapping import infer_columns
from ..services.orchestrator import GenerationError, generate_all, select_sheets
from ..services.summary import render_summary_fields

"""CLI entrypoint.

Flow:
- Load .env (SHEETSQL_* option defaults) and the optional YAML job config
- Merge CLI flags over the config
- Read the workbook, generate one script per selected sheet
- Write SQL to stdout / file / directory and log a SUMMARY line (stderr)

Exit codes: 0 every sheet produced SQL, 2 some sheet produced nothing, 1 fatal.
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_EMPTY_OUTPUT = 2

DEFAULT_CONFIG_PATH = Path("config/sheetsql.yml")
INSPECT_SAMPLE_ROWS = 3


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env so SHEETSQL_* variables act as option defaults."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="sheetsql", description="Spreadsheet (Excel/CSV) -> SQL INSERT script generator"
    )
    p.add_argument("source", nargs="?", help="Workbook (.xlsx/.xls/.xlsm) or .csv file")
    p.add_argument("--config", type=Path, help=f"YAML job config (default: {DEFAULT_CONFIG_PATH} if present)")
    p.add_argument("--sheet", action="append", dest="sheets", help="Sheet to convert (repeatable)")
    p.add_argument("--all-sheets", action="store_true", help="Convert every sheet")
    p.add_argument("--no-header", action="store_true", help="First row is data, not a header")
    p.add_argument("--dialect", help="mysql | postgresql | sqlite | sqlserver")
    p.add_argument("--table", help="Target table name")
    p.add_argument("--schema", help="Target schema name")
    p.add_argument("--rows-per-insert", type=int, help="Row tuples per INSERT statement")
    p.add_argument("--no-column-list", action="store_true", help="Omit the column list when possible")
    out = p.add_mutually_exclusive_group()
    out.add_argument("--output", "-o", help="Write the script to this file")
    out.add_argument("--output-dir", help="Write one <table>.sql per sheet into this directory")
    p.add_argument("--inspect-data", action="store_true", help="Print sheets, columns & first rows then exit")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _merge_args(config: JobConfig, args: argparse.Namespace) -> JobConfig:
    changes: dict[str, Any] = {}
    if args.source:
        changes["source"] = args.source
    if args.sheets:
        changes["sheets"] = tuple(args.sheets)
    if args.all_sheets:
        changes["all_sheets"] = True
    if args.no_header:
        changes["has_header_row"] = False
    if args.output:
        changes.update(output=args.output, output_dir=None)
    if args.output_dir:
        changes.update(output_dir=args.output_dir, output=None)
    return replace(config, **changes) if changes else config


def _option_overrides(args: argparse.Namespace) -> dict[str, Any]:
    return {
        "dialect": args.dialect,
        "table_name": args.table,
        "schema_name": args.schema,
        "rows_per_insert": args.rows_per_insert,
        "include_column_list": False if args.no_column_list else None,
    }


def _inspect_data(workbook: dict[str, list[list[Any]]], config: JobConfig) -> int:
    for sname, rows in workbook.items():
        columns = infer_columns(rows, config.has_header_row)
        print(f"SHEET: {sname} rows={len(data_rows(rows, config.has_header_row))}")
        print(f"  columns={[c.source_name for c in columns]}")
        for row in data_rows(rows, config.has_header_row)[:INSPECT_SAMPLE_ROWS]:
            print(f"  {[v.isoformat() if hasattr(v, 'isoformat') else v for v in row]}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む ([] はテストからの明示的な空引数)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    config_path = args.config or (DEFAULT_CONFIG_PATH if DEFAULT_CONFIG_PATH.exists() else None)
    try:
        config = load_config(config_path) if config_path is not None else JobConfig()
        config = _merge_args(config, args)
        options = resolve_options(config, _option_overrides(args), os.environ)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if not config.source:
        logger.error("no source file given (argument or `source` in config)")
        return EXIT_FATAL

    source = Path(config.source)
    logger.info(f"Reading workbook: {source}")
    try:
        workbook = read_workbook(source)
    except WorkbookReadError as e:
        logger.error(f"read: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(workbook, config)

    if not workbook:
        logger.error(f"no sheets found in {source.name}")
        return EXIT_FATAL

    table_explicit = bool(args.table or config.options.get("table_name"))
    try:
        logger.debug(f"sheets={select_sheets(workbook, config)} dialect={options.dialect.value}")
        result = generate_all(workbook, config, options, table_explicit=table_explicit)
    except GenerationError as e:
        logger.error(f"generate: {e}")
        return EXIT_FATAL

    log_summary(render_summary_fields(result))

    if result.empty_sheets > 0:
        return EXIT_EMPTY_OUTPUT
    return EXIT_SUCCESS_ALL
