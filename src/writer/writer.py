from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import IO, Any, Iterable

from src.common.config import WriteMode
from src.common.errors import DestinationExists, WriteFailure
from src.reader import Success

logger = logging.getLogger(__name__)


def serialize(value: Any, pretty: bool = False) -> str:
    if pretty:
        return json.dumps(value, ensure_ascii=False, indent=2)
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def check_destination(path: Path, mode: WriteMode) -> None:
    """Fail early when ``error`` mode would refuse ``path``."""

    if mode is WriteMode.ERROR and Path(path).exists():
        raise DestinationExists(Path(path))


def _needs_separator(path: Path) -> bool:
    try:
        with path.open("rb") as handle:
            handle.seek(0, 2)
            if handle.tell() == 0:
                return False
            handle.seek(-1, 2)
            return handle.read(1) != b"\n"
    except FileNotFoundError:
        return False


def open_destination(path: Path, mode: WriteMode) -> IO[str]:
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if mode is WriteMode.ERROR:
            return path.open("x", encoding="utf-8", newline="\n")
        if mode is WriteMode.APPEND:
            separator = _needs_separator(path)
            handle = path.open("a", encoding="utf-8", newline="\n")
            if separator:
                handle.write("\n")
            return handle
        return path.open("w", encoding="utf-8", newline="\n")
    except FileExistsError as exc:
        raise DestinationExists(path) from exc
    except OSError as exc:
        raise WriteFailure(path, exc.strerror or str(exc)) from exc


def write_outcomes(
    successes: Iterable[Success],
    path: Path,
    mode: WriteMode = WriteMode.OVERWRITE,
    *,
    pretty: bool = False,
) -> int:
    """Write one JSON record per success to ``path``; returns bytes written."""

    path = Path(path)
    if pretty:
        logger.warning("Pretty output spans several lines per record and is not valid JSONL")

    written = 0
    lines = 0
    handle = open_destination(path, mode)
    try:
        with handle:
            for outcome in successes:
                line = serialize(outcome.value, pretty=pretty)
                handle.write(line)
                handle.write("\n")
                written += len(line.encode("utf-8")) + 1
                lines += 1
    except (OSError, ValueError) as exc:
        raise WriteFailure(path, getattr(exc, "strerror", None) or str(exc)) from exc

    logger.info("Wrote %d record(s) (%d bytes) to %s", lines, written, path)
    return written


__all__ = ["check_destination", "open_destination", "serialize", "write_outcomes"]
