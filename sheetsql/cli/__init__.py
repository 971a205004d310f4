"""Command line interface (`sheetsql` / `python -m sheetsql.cli`)."""

from .app import main

__all__ = ["main"]
