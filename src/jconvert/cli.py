from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from src.common.config import WriteMode, build_run_config, load_config_file
from src.common.errors import JConvertError

from .pipeline import run

app = typer.Typer(
    help="Merge every JSON file in a folder into a single JSON Lines file.",
    add_completion=False,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        force=True,
    )


@app.command()
def convert(
    input_dir: Path = typer.Option(
        ...,
        "--input",
        "-i",
        help="Folder containing the JSON files to merge.",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="JSONL file to create (default: output.jsonl).",
    ),
    mode: Optional[WriteMode] = typer.Option(
        None,
        "--mode",
        "-m",
        case_sensitive=False,
        help="What to do when the output exists: overwrite, append or error (default: overwrite).",
    ),
    pattern: Optional[str] = typer.Option(
        None,
        "--pattern",
        "-p",
        help='File name filter using shell wildcards, e.g. "*_SUM_*" or "data?.json".',
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Print per-file results and failure reasons.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="List the files that would be merged without reading or writing them.",
    ),
    validate_only: bool = typer.Option(
        False,
        "--validate-only",
        help="Only check that each file parses as JSON; write nothing.",
    ),
    fields: Optional[str] = typer.Option(
        None,
        "--fields",
        help='Comma separated fields to keep, e.g. "id,name,user.email".',
    ),
    threads: Optional[int] = typer.Option(
        None,
        "--threads",
        "-j",
        min=0,
        help="Worker threads for reading (default: number of CPU cores).",
    ),
    max_depth: Optional[int] = typer.Option(
        None,
        "--max-depth",
        min=1,
        help="Directory levels to search; 1 means the input folder only.",
    ),
    log: Optional[Path] = typer.Option(
        None,
        "--log",
        help="Write the list of failed files and reasons to this file.",
    ),
    pretty: bool = typer.Option(
        False,
        "--pretty",
        help="Indent each record (multi-line records are not strict JSONL).",
    ),
    progress: bool = typer.Option(
        True,
        "--progress/--no-progress",
        help="Show a progress bar while reading.",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML file supplying defaults for the options above.",
    ),
) -> None:
    try:
        file_values = load_config_file(config) if config is not None else {}
        run_config = build_run_config(
            input_dir,
            {
                "output": output,
                "mode": mode,
                "pattern": pattern,
                "verbose": verbose or None,
                "fields": fields,
                "threads": threads,
                "max_depth": max_depth,
                "log": log,
                "pretty": pretty or None,
                "progress": None if progress else False,
            },
            file_values,
            dry_run=dry_run,
            validate_only=validate_only,
        )
        _configure_logging(run_config.verbose)
        run(run_config)
    except JConvertError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


if __name__ == "__main__":  # pragma: no cover
    app()
