from __future__ import annotations

import fnmatch
import logging
import re
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from src.common.errors import InputNotFound, InputUnreadable, InvalidPattern, NotADirectory

logger = logging.getLogger(__name__)

JSON_SUFFIXES: Tuple[str, ...] = (".json",)


def _has_unterminated_class(pattern: str) -> bool:
    index = 0
    while index < len(pattern):
        if pattern[index] == "[":
            close = index + 1
            if close < len(pattern) and pattern[close] == "!":
                close += 1
            if close < len(pattern) and pattern[close] == "]":
                close += 1
            while close < len(pattern) and pattern[close] != "]":
                close += 1
            if close >= len(pattern):
                return True
            index = close
        index += 1
    return False


class PatternMatcher:
    """Shell-style file name filter; no pattern matches every name."""

    def __init__(self, pattern: Optional[str] = None) -> None:
        self.pattern = pattern
        self._regex: Optional[re.Pattern[str]] = None
        if pattern is not None:
            if not pattern or _has_unterminated_class(pattern):
                raise InvalidPattern(pattern)
            self._regex = re.compile(fnmatch.translate(pattern))

    @property
    def has_pattern(self) -> bool:
        return self._regex is not None

    def matches(self, file_name: str) -> bool:
        if self._regex is None:
            return True
        return self._regex.match(file_name) is not None


def _is_candidate(path: Path, suffixes: Sequence[str]) -> bool:
    return path.suffix.lower() in suffixes


def _walk(directory: Path, depth: int, max_depth: int, found: List[Path], suffixes: Sequence[str]) -> None:
    try:
        entries = list(directory.iterdir())
    except OSError as exc:
        if depth == 1:
            raise InputUnreadable(directory, exc.strerror or str(exc)) from exc
        logger.warning("Skipping unreadable directory %s: %s", directory, exc)
        return

    for entry in entries:
        if entry.is_dir():
            if depth < max_depth:
                _walk(entry, depth + 1, max_depth, found, suffixes)
        elif entry.is_file() and _is_candidate(entry, suffixes):
            found.append(entry)


def discover_files(
    root: Path,
    pattern: Union[str, PatternMatcher, None] = None,
    *,
    max_depth: int = 1,
    suffixes: Sequence[str] = JSON_SUFFIXES,
) -> List[Path]:
    """Return the JSON files under ``root`` whose names match ``pattern``.

    ``max_depth`` of 1 lists direct children only; each extra level descends
    one subdirectory further. Results are sorted by their path relative to
    ``root`` so repeated runs see the same order.
    """

    root = Path(root)
    matcher = pattern if isinstance(pattern, PatternMatcher) else PatternMatcher(pattern)
    if not root.exists():
        raise InputNotFound(root)
    if not root.is_dir():
        raise NotADirectory(root)

    candidates: List[Path] = []
    _walk(root, 1, max(1, max_depth), candidates, tuple(s.lower() for s in suffixes))

    selected = [path for path in candidates if matcher.matches(path.name)]
    selected.sort(key=lambda path: path.relative_to(root).as_posix())
    logger.info(
        "Discovered %d of %d JSON file(s) under %s", len(selected), len(candidates), root
    )
    return selected


__all__ = ["JSON_SUFFIXES", "PatternMatcher", "discover_files"]
