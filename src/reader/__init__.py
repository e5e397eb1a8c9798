"""Parallel JSON reader producing per-file outcomes."""

from .fields import extract_fields, get_nested_field
from .reader import Failure, ParseOutcome, ReadOptions, Success, read_file, read_files, split_outcomes

__all__ = [
    "Failure",
    "ParseOutcome",
    "ReadOptions",
    "Success",
    "extract_fields",
    "get_nested_field",
    "read_file",
    "read_files",
    "split_outcomes",
]
