"""jconvert: merge a folder of JSON files into one JSON Lines file."""

from .pipeline import RunResult, run

__all__ = ["RunResult", "run"]
