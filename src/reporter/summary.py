from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import typer

from src.reader import Failure

from .stats import RunStats, format_bytes, format_duration

RULE = "=" * 50


def summary_rows(stats: RunStats, *, validation: bool = False) -> List[Tuple[str, str]]:
    if validation:
        return [
            ("Total files", str(stats.total)),
            ("Valid", str(stats.succeeded)),
            ("Invalid", str(stats.failed)),
            ("Valid rate", stats.success_rate_text()),
            ("Elapsed", format_duration(stats.elapsed)),
        ]
    return [
        ("Total files", str(stats.total)),
        ("Succeeded", str(stats.succeeded)),
        ("Failed", str(stats.failed)),
        ("Input size", format_bytes(stats.bytes_read)),
        ("Output size", format_bytes(stats.bytes_written)),
        ("Success rate", stats.success_rate_text()),
        ("Elapsed", format_duration(stats.elapsed)),
    ]


def _row_colour(label: str, value: str) -> Optional[str]:
    if label in {"Succeeded", "Valid"}:
        return typer.colors.GREEN
    if label in {"Failed", "Invalid"}:
        return typer.colors.RED if value != "0" else typer.colors.GREEN
    return None


def _print_title(title: str) -> None:
    typer.secho(RULE, fg=typer.colors.BLUE)
    typer.secho(f" {title}", bold=True)
    typer.secho(RULE, fg=typer.colors.BLUE)


def print_header(title: str, lines: Sequence[str] = ()) -> None:
    _print_title(title)
    for line in lines:
        typer.echo(f"  {line}")
    typer.secho(RULE, fg=typer.colors.BLUE)


def print_summary(stats: RunStats, *, validation: bool = False) -> None:
    title = "Validation results" if validation else "Conversion statistics"
    typer.echo("")
    _print_title(title)
    for label, value in summary_rows(stats, validation=validation):
        typer.secho(f"  {label + ':':<14}{value}", fg=_row_colour(label, value))
    typer.secho(RULE, fg=typer.colors.BLUE)


def print_failures(failures: Sequence[Failure], verbose: bool = False) -> None:
    if not failures:
        return
    typer.echo("")
    typer.secho("Files with errors:", fg=typer.colors.RED)
    for failure in failures:
        typer.secho(f"  - {failure.path.name}", fg=typer.colors.RED)
        if verbose:
            typer.secho(f"    {failure.error}", dim=True)


def print_dry_run(paths: Sequence[Path]) -> None:
    typer.echo("")
    typer.secho("Files that would be processed:", fg=typer.colors.CYAN)
    for index, path in enumerate(paths, start=1):
        typer.echo(f"  {index}. {path.name}")
    typer.echo("")
    typer.echo(f"{len(paths)} file(s) would be processed.")


def write_error_log(path: Path, failures: Sequence[Failure], now: Optional[datetime] = None) -> None:
    stamp = (now or datetime.now(timezone.utc)).strftime("%Y-%m-%dT%H:%M:%SZ")
    lines = [
        "jconvert error log",
        f"generated: {stamp}",
        f"errors: {len(failures)}",
        RULE,
    ]
    for failure in failures:
        lines.append("")
        lines.append(f"file: {failure.path}")
        lines.append(f"error: {failure.error}")
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


__all__ = [
    "print_dry_run",
    "print_failures",
    "print_header",
    "print_summary",
    "summary_rows",
    "write_error_log",
]
