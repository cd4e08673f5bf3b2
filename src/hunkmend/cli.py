"""Command line entry point for applying and repairing unified diffs."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from .config import DEFAULT_CONFIG_NAME, ConfigError, EditSettings, load_settings
from .patch.engine import fix_patch
from .patch.errors import PatchError
from .tools.edit import EditError, edit_file, read_original, resolve_path

APP_HELP = "Apply unified diffs whose hunk line numbers may be wrong."

app = typer.Typer(help=APP_HELP)


def _configure_logging(level: str) -> None:
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise typer.BadParameter(f"Unknown log level: {level}")
    logging.basicConfig(level=numeric, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def _load(config: str) -> EditSettings:
    try:
        return load_settings(Path(config))
    except ConfigError as error:
        typer.echo(str(error), err=True)
        raise typer.Exit(code=1) from error


def _read_diff(source: str) -> str:
    """Read a diff from ``source`` or from stdin when it is ``-``."""
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.exists():
        raise typer.BadParameter(f"Diff file not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        typer.echo(f"Error reading diff '{path}': {error}", err=True)
        raise typer.Exit(code=1) from error


@app.command()
def apply(
    file: Path = typer.Argument(..., help="File to edit."),
    diff: str = typer.Argument(..., help="Unified diff to apply, or '-' to read it from stdin."),
    config: str = typer.Option(
        DEFAULT_CONFIG_NAME,
        "--config",
        "-c",
        help="Path to the YAML configuration file.",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Report the outcome without writing the file."),
    allow_partial: bool = typer.Option(
        False,
        "--allow-partial",
        help="Write the file even when some hunks could not be located.",
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level, e.g. INFO or DEBUG."),
) -> None:
    """Apply DIFF to FILE, correcting hunk headers by content."""
    settings = _load(config)
    if allow_partial:
        settings = settings.model_copy(update={"allow_partial_writes": True})
    _configure_logging(log_level or settings.log_level)

    patch_text = _read_diff(diff)
    try:
        result = edit_file(file, patch_text, settings=settings, dry_run=dry_run)
    except PatchError as error:
        typer.echo(f"Error applying diff: {error}", err=True)
        raise typer.Exit(code=1) from error

    typer.echo(result.message)
    if dry_run and result.status in {"applied", "partial"}:
        typer.echo("Dry run: file left unchanged.")
    if result.is_error:
        raise typer.Exit(code=1)


@app.command()
def fix(
    file: Path = typer.Argument(..., help="File the diff was written against."),
    diff: str = typer.Argument(..., help="Unified diff to repair, or '-' to read it from stdin."),
    config: str = typer.Option(
        DEFAULT_CONFIG_NAME,
        "--config",
        "-c",
        help="Path to the YAML configuration file.",
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level, e.g. INFO or DEBUG."),
) -> None:
    """Print DIFF with hunk headers corrected against FILE."""
    settings = _load(config)
    _configure_logging(log_level or settings.log_level)
    target = resolve_path(Path.cwd(), file)

    patch_text = _read_diff(diff)
    try:
        original = read_original(target, settings)
        fixed = fix_patch(original, patch_text)
    except EditError as error:
        typer.echo(str(error), err=True)
        raise typer.Exit(code=1) from error
    except PatchError as error:
        typer.echo(f"Error parsing diff: {error}", err=True)
        raise typer.Exit(code=1) from error

    typer.echo(fixed.text, nl=False)
    if fixed.unresolved_hunks:
        typer.echo(f"{len(fixed.unresolved_hunks)} hunk(s) did not match {target.as_posix()}:", err=True)
        for body in fixed.unresolved_hunks:
            typer.echo(body, err=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
