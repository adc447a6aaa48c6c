"""Validate command for nesting configuration files."""

from pathlib import Path
from typing import Annotated, Iterator

import typer

from cabinet_nesting.application.config import ConfigError, NestingConfiguration, load_config


def _load_error_lines(error: ConfigError) -> Iterator[str]:
    if error.error_type == "file_not_found":
        yield f"  File not found: {error.path}"
    elif error.error_type == "json_parse":
        yield "  Invalid JSON syntax"
        for detail in error.details:
            yield (
                f"    Line {detail.get('line', '?')}, Column {detail.get('column', '?')}: "
                f"{detail.get('message', 'Unknown error')}"
            )
    elif error.error_type == "validation":
        for detail in error.details:
            yield f"  {detail.get('path') or '(root)'}: {detail.get('message', 'Unknown error')}"
    else:
        yield f"  {error.message}"


def display_load_error(error: ConfigError) -> None:
    """Print a configuration loading error to stderr."""
    typer.echo("Errors:", err=True)
    for line in _load_error_lines(error):
        typer.echo(line, err=True)


def _summary_lines(config: NestingConfiguration) -> list[str]:
    pieces = sum(panel.quantity for panel in config.panels)
    sheets = sum(board.stock for board in config.boards)
    return [
        f"Boards:     {len(config.boards)} types, {sheets} sheets in stock",
        f"Panels:     {len(config.panels)} records, {pieces} pieces",
        f"Edge tapes: {len(config.edge_tapes)}",
    ]


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON configuration file to validate"),
    ],
) -> None:
    """Check a nesting configuration file without running a job.

    Exit codes:
        0 - Configuration is valid
        1 - Configuration has errors

    Example:
        cabinet-nesting validate kitchen.json
    """
    typer.echo(f"Validating {config_file}...")

    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        typer.echo("Validation failed.", err=True)
        raise typer.Exit(code=1)

    for line in _summary_lines(config):
        typer.echo(line)
    typer.echo("Validation passed. Configuration is valid.")
