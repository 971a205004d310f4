from __future__ import annotations

from ..models.generation_result import GenerationResult

"""SUMMARY line rendering.

Format:
SUMMARY sheets={n} generated={g} empty={e} rows={rows} statements={s}
dialect={dialect} elapsed_sec={elapsed}

The logger adds the SUMMARY label itself, so the CLI logs
render_summary_fields(); render_summary_line() is the full line.
"""

__all__ = [
    "render_summary_fields",
    "render_summary_line",
    "format_seconds",
]


def format_seconds(value: float) -> str:
    """Render seconds without scientific notation or a trailing `.0`."""
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_fields(result: GenerationResult) -> str:
    """Render the key=value metrics of a finished run."""
    return (
        f"sheets={len(result.sheets)} "
        f"generated={result.generated_sheets} "
        f"empty={result.empty_sheets} "
        f"rows={result.total_rows} "
        f"statements={result.total_statements} "
        f"dialect={result.dialect.value} "
        f"elapsed_sec={format_seconds(result.elapsed_seconds)}"
    )


def render_summary_line(result: GenerationResult) -> str:
    """Render the SUMMARY line for a finished run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> from sheetsql.models import Dialect
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> r = GenerationResult(start_time=t, end_time=t, elapsed_seconds=2.0,
        ...                      dialect=Dialect.SQLITE)
        >>> render_summary_line(r)
        'SUMMARY sheets=0 generated=0 empty=0 rows=0 statements=0 dialect=sqlite elapsed_sec=2'
    """
    return f"SUMMARY {render_summary_fields(result)}"
