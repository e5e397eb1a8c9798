from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import typer

from src.common.config import RunConfig
from src.discovery import PatternMatcher, discover_files
from src.reader import Failure, ParseOutcome, ReadOptions, read_files, split_outcomes
from src.reporter import (
    RunStats,
    print_dry_run,
    print_failures,
    print_header,
    print_summary,
    write_error_log,
)
from src.writer import check_destination, write_outcomes

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    files: List[Path] = field(default_factory=list)
    outcomes: List[ParseOutcome] = field(default_factory=list)
    stats: Optional[RunStats] = None
    wrote_output: bool = False

    @property
    def failures(self) -> List[Failure]:
        return split_outcomes(self.outcomes)[1]


def _header_lines(config: RunConfig) -> List[str]:
    lines = [f"Input directory: {config.input_dir}"]
    if not config.validate_only:
        lines.append(f"Output file:     {config.output}")
        lines.append(f"Mode:            {config.mode}")
    if config.pattern:
        lines.append(f"Pattern:         {config.pattern}")
    if config.fields:
        lines.append(f"Fields:          {','.join(config.fields)}")
    if config.max_depth > 1:
        lines.append(f"Max depth:       {config.max_depth}")
    lines.append(f"Threads:         {config.worker_count}")
    if config.dry_run:
        lines.append("Dry run: nothing will be written")
    if config.validate_only:
        lines.append("Validate only: no output file")
    if config.pretty:
        lines.append("Pretty output enabled")
    return lines


def run(config: RunConfig) -> RunResult:
    """Discover, read, write and report one conversion.

    Raises a :class:`~src.common.errors.JConvertError` for fatal problems;
    files that cannot be read or parsed are recorded, not raised.
    """

    started = time.perf_counter()
    print_header("JSON folder to JSONL converter", _header_lines(config))

    matcher = PatternMatcher(config.pattern)
    files = discover_files(config.input_dir, matcher, max_depth=config.max_depth)
    result = RunResult(files=files)
    if not files:
        typer.secho("No JSON files to process.", fg=typer.colors.YELLOW)
        return result
    typer.echo(f"Found {len(files)} file(s).")

    if config.dry_run:
        print_dry_run(files)
        return result

    if not config.validate_only:
        check_destination(config.output, config.mode)

    options = ReadOptions(fields=config.fields, validate_only=config.validate_only)
    result.outcomes = read_files(
        files,
        options,
        threads=config.threads,
        show_progress=config.progress,
        description="Validating" if config.validate_only else "Reading",
    )
    successes, failures = split_outcomes(result.outcomes)

    bytes_written = 0
    if not config.validate_only:
        bytes_written = write_outcomes(successes, config.output, config.mode, pretty=config.pretty)
        result.wrote_output = True
        if config.verbose:
            for outcome in successes:
                typer.secho(f"  ok {outcome.path.name}", fg=typer.colors.GREEN)

    result.stats = RunStats.from_outcomes(
        result.outcomes,
        bytes_written=bytes_written,
        elapsed=time.perf_counter() - started,
    )

    print_failures(failures, verbose=config.verbose)
    if config.log is not None:
        write_error_log(config.log, failures)
        typer.echo(f"Error log written to {config.log}")
    print_summary(result.stats, validation=config.validate_only)

    if config.validate_only:
        if failures:
            typer.secho(f"{len(failures)} file(s) failed validation.", fg=typer.colors.YELLOW)
        else:
            typer.secho("All files are valid.", fg=typer.colors.GREEN)
    else:
        typer.secho(f"Saved: {config.output}", fg=typer.colors.GREEN)
    logger.info(
        "Run finished: %d succeeded, %d failed", result.stats.succeeded, result.stats.failed
    )
    return result


__all__ = ["RunResult", "run"]
