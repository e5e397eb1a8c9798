"""JSONL writer honouring overwrite, append and error modes."""

from .writer import check_destination, open_destination, serialize, write_outcomes

__all__ = [
    "check_destination",
    "open_destination",
    "serialize",
    "write_outcomes",
]
