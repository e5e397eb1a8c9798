"""Run statistics and terminal reporting."""

from .stats import RunStats, format_bytes, format_duration
from .summary import (
    print_dry_run,
    print_failures,
    print_header,
    print_summary,
    summary_rows,
    write_error_log,
)

__all__ = [
    "RunStats",
    "format_bytes",
    "format_duration",
    "print_dry_run",
    "print_failures",
    "print_header",
    "print_summary",
    "summary_rows",
    "write_error_log",
]
