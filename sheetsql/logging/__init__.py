"""Labeled logging setup for the sheetsql command line."""
