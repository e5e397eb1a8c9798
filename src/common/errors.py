"""Fatal error taxonomy shared by every pipeline stage."""

from __future__ import annotations

from pathlib import Path


class JConvertError(Exception):
    """Base class for errors that abort a conversion run."""


class InputNotFound(JConvertError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"Input directory not found: {path}")
        self.path = path


class NotADirectory(JConvertError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"Input path is not a directory: {path}")
        self.path = path


class InputUnreadable(JConvertError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot read input directory {path}: {reason}")
        self.path = path
        self.reason = reason


class InvalidPattern(JConvertError):
    def __init__(self, pattern: str) -> None:
        super().__init__(f"Invalid file name pattern: {pattern}")
        self.pattern = pattern


class DestinationExists(JConvertError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"Output file already exists: {path}")
        self.path = path


class WriteFailure(JConvertError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to write {path}: {reason}")
        self.path = path
        self.reason = reason


class ConfigError(JConvertError):
    """Raised when a config file is missing or malformed."""


__all__ = [
    "JConvertError",
    "InputNotFound",
    "NotADirectory",
    "InputUnreadable",
    "InvalidPattern",
    "DestinationExists",
    "WriteFailure",
    "ConfigError",
]
