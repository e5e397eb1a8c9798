"""File discovery for JSON-to-JSONL conversion."""

from .discoverer import JSON_SUFFIXES, PatternMatcher, discover_files

__all__ = [
    "JSON_SUFFIXES",
    "PatternMatcher",
    "discover_files",
]
