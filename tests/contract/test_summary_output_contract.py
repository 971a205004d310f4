from __future__ import annotations

import re
from pathlib import Path

from sheetsql.cli import main as cli_main

"""SUMMARY 行フォーマット契約テスト (stderr, one line per run)."""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+sheets=([0-9]+)\s+generated=([0-9]+)\s+empty=([0-9]+)\s+"
    r"rows=([0-9]+)\s+statements=([0-9]+)\s+dialect=(mysql|postgresql|sqlite|sqlserver)\s+"
    r"elapsed_sec=([0-9]+\.?[0-9]*)$"
)


def test_summary_pattern_example_line():
    line = "SUMMARY sheets=2 generated=2 empty=0 rows=5 statements=3 dialect=postgresql elapsed_sec=0.042"
    assert SUMMARY_PATTERN.match(line)


def test_cli_emits_exactly_one_summary_line(customers_xlsx: Path, capsys):
    code = cli_main([str(customers_xlsx), "--all-sheets", "--dialect", "sqlserver"])
    captured = capsys.readouterr()
    assert code == 0
    lines = [ln for ln in captured.err.splitlines() if ln.startswith("SUMMARY")]
    assert len(lines) == 1
    m = SUMMARY_PATTERN.match(lines[0])
    assert m, lines[0]
    sheets, generated, empty, rows, statements, dialect, _ = m.groups()
    assert (sheets, generated, empty) == ("2", "2", "0")
    assert rows == "5"
    assert statements == "2"
    assert dialect == "sqlserver"
    assert "SUMMARY" not in captured.out
