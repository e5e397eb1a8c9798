"""Run configuration: write modes, YAML config files and CLI precedence."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from .errors import ConfigError

DEFAULT_OUTPUT = Path("output.jsonl")
DEFAULT_MAX_DEPTH = 1

_CONFIG_KEYS = {
    "output",
    "mode",
    "pattern",
    "threads",
    "max_depth",
    "fields",
    "pretty",
    "log",
    "verbose",
    "progress",
}


class WriteMode(str, Enum):
    OVERWRITE = "overwrite"
    APPEND = "append"
    ERROR = "error"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RunConfig:
    input_dir: Path
    output: Path = DEFAULT_OUTPUT
    mode: WriteMode = WriteMode.OVERWRITE
    pattern: Optional[str] = None
    verbose: bool = False
    dry_run: bool = False
    validate_only: bool = False
    fields: Optional[Tuple[str, ...]] = None
    threads: Optional[int] = None
    max_depth: int = DEFAULT_MAX_DEPTH
    log: Optional[Path] = None
    pretty: bool = False
    progress: bool = True

    @property
    def worker_count(self) -> int:
        return resolve_thread_count(self.threads)


def resolve_thread_count(threads: Optional[int]) -> int:
    """Return the pool size; ``None`` or 0 means one worker per core."""

    if threads is None or threads <= 0:
        return os.cpu_count() or 1
    return threads


def parse_fields(raw: Any) -> Optional[Tuple[str, ...]]:
    if raw is None:
        return None
    if isinstance(raw, str):
        parts = raw.split(",")
    elif isinstance(raw, (list, tuple)):
        parts = [str(item) for item in raw]
    else:
        raise ConfigError(f"fields must be a string or a list, got {type(raw).__name__}")
    cleaned = tuple(part.strip() for part in parts if part.strip())
    return cleaned or None


def load_config_file(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {path}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config file {path} is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a mapping")
    unknown = sorted(set(data) - _CONFIG_KEYS)
    if unknown:
        raise ConfigError(f"Unknown config key(s) in {path}: {', '.join(unknown)}")
    return data


def _coerce_mode(value: Any) -> WriteMode:
    if isinstance(value, WriteMode):
        return value
    try:
        return WriteMode(str(value).strip().lower())
    except ValueError as exc:
        choices = ", ".join(mode.value for mode in WriteMode)
        raise ConfigError(f"Unknown write mode {value!r} (expected one of: {choices})") from exc


def _coerce_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer")
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from exc
    if number < 0:
        raise ConfigError(f"{name} must not be negative")
    return number


def build_run_config(
    input_dir: Path,
    cli_values: Mapping[str, Any],
    file_values: Optional[Mapping[str, Any]] = None,
    *,
    dry_run: bool = False,
    validate_only: bool = False,
) -> RunConfig:
    """Merge CLI values over config file values over built-in defaults.

    ``cli_values`` holds ``None`` for every option the user did not pass,
    boolean switches included.
    """

    file_values = dict(file_values or {})

    def pick(key: str) -> Any:
        value = cli_values.get(key)
        if value is not None:
            return value
        return file_values.get(key)

    def flag(key: str, default: bool = False) -> bool:
        value = cli_values.get(key)
        if value is not None:
            return bool(value)
        if key in file_values:
            return bool(file_values[key])
        return default

    output = pick("output")
    mode = pick("mode")
    threads = pick("threads")
    max_depth = pick("max_depth")
    log = pick("log")
    pattern = pick("pattern")

    depth = _coerce_int("max_depth", max_depth) if max_depth is not None else DEFAULT_MAX_DEPTH
    if depth < 1:
        raise ConfigError("max_depth must be at least 1")

    return RunConfig(
        input_dir=Path(input_dir),
        output=Path(output) if output is not None else DEFAULT_OUTPUT,
        mode=_coerce_mode(mode) if mode is not None else WriteMode.OVERWRITE,
        pattern=str(pattern) if pattern is not None else None,
        verbose=flag("verbose"),
        dry_run=dry_run,
        validate_only=validate_only,
        fields=parse_fields(pick("fields")),
        threads=_coerce_int("threads", threads) if threads is not None else None,
        max_depth=depth,
        log=Path(log) if log is not None else None,
        pretty=flag("pretty"),
        progress=flag("progress", default=True),
    )


__all__ = [
    "DEFAULT_OUTPUT",
    "RunConfig",
    "WriteMode",
    "build_run_config",
    "load_config_file",
    "parse_fields",
    "resolve_thread_count",
]
