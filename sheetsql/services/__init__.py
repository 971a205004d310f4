"""Services: column mapping, run orchestration, progress and summary output."""
