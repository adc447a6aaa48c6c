"""Edge tape estimate command."""

from pathlib import Path
from typing import Annotated, Optional

import typer

from cabinet_nesting.application.config import (
    ConfigError,
    config_to_edge_tapes,
    config_to_panels,
    load_config,
)
from cabinet_nesting.application.factory import get_factory
from cabinet_nesting.cli.commands.validate import display_load_error
from cabinet_nesting.domain.services.edge_tape import estimate_edge_tape


def edge_tape_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON configuration file"),
    ],
    tape_id: Annotated[
        Optional[str],
        typer.Option("--tape", "-t", help="Only estimate the edge tape with this id"),
    ] = None,
) -> None:
    """Estimate edge tape length, cost and reels for all panels.

    Example:
        cabinet-nesting edge-tape kitchen.json --tape abs-white-22
    """
    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    panels = config_to_panels(config)
    tapes = config_to_edge_tapes(config)
    if tape_id is not None:
        tapes = [tape for tape in tapes if tape.id == tape_id]
        if not tapes:
            typer.echo(f"Error: no edge tape with id '{tape_id}'", err=True)
            raise typer.Exit(code=1)

    estimates = [estimate_edge_tape(panels, tape) for tape in tapes]
    typer.echo(get_factory().get_edge_tape_formatter().format(estimates))
