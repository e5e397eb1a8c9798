from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple, Union

from tqdm import tqdm

from src.common.config import resolve_thread_count

from .fields import extract_fields

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Success:
    path: Path
    value: Any
    byte_size: int

    ok = True


@dataclass(frozen=True)
class Failure:
    path: Path
    error: str
    byte_size: int = 0

    ok = False


ParseOutcome = Union[Success, Failure]


@dataclass(frozen=True)
class ReadOptions:
    fields: Optional[Tuple[str, ...]] = None
    validate_only: bool = False


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def read_file(path: Path, options: Optional[ReadOptions] = None) -> ParseOutcome:
    """Read and parse one file; every problem becomes a :class:`Failure`."""

    options = options or ReadOptions()
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        return Failure(path, f"cannot open {path}: {exc.strerror or exc}", _stat_size(path))

    try:
        value = json.loads(raw.decode("utf-8"), parse_constant=_reject_constant)
        # lone surrogate escapes parse but cannot be written back as UTF-8
        json.dumps(value, ensure_ascii=False).encode("utf-8")
    except (ValueError, RecursionError) as exc:
        return Failure(path, f"invalid JSON in {path}: {exc}", len(raw))

    if options.validate_only:
        return Success(path, None, len(raw))
    return Success(path, extract_fields(value, options.fields), len(raw))


def _stat_size(path: Path) -> int:
    try:
        return path.stat().st_size
    except OSError:
        return 0


def read_files(
    paths: Sequence[Path],
    options: Optional[ReadOptions] = None,
    *,
    threads: Optional[int] = None,
    show_progress: bool = True,
    description: str = "Reading",
) -> List[ParseOutcome]:
    """Parse ``paths`` across a worker pool, returning outcomes in input order.

    Progress advances as files finish, in completion order; the returned list
    is always aligned with ``paths``.
    """

    options = options or ReadOptions()
    if not paths:
        return []

    jobs = min(resolve_thread_count(threads), len(paths))
    progress = tqdm(total=len(paths), desc=description, unit="file", disable=not show_progress)
    try:
        if jobs <= 1:
            outcomes: List[ParseOutcome] = []
            for path in paths:
                outcomes.append(read_file(path, options))
                progress.update(1)
        else:
            with ThreadPoolExecutor(max_workers=jobs) as executor:
                futures = [executor.submit(read_file, path, options) for path in paths]
                for _ in as_completed(futures):
                    progress.update(1)
                outcomes = [future.result() for future in futures]
    finally:
        progress.close()

    for outcome in outcomes:
        if isinstance(outcome, Failure):
            logger.info("Failed to read %s: %s", outcome.path, outcome.error)
    return outcomes


def split_outcomes(outcomes: Sequence[ParseOutcome]) -> Tuple[List[Success], List[Failure]]:
    successes = [outcome for outcome in outcomes if isinstance(outcome, Success)]
    failures = [outcome for outcome in outcomes if isinstance(outcome, Failure)]
    return successes, failures


__all__ = [
    "Failure",
    "ParseOutcome",
    "ReadOptions",
    "Success",
    "read_file",
    "read_files",
    "split_outcomes",
]
