"""Typer CLI for panel nesting."""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Annotated, Optional

import typer

from cabinet_nesting.application.config import (
    ConfigError,
    config_to_boards,
    config_to_nesting_config,
    config_to_panels,
    load_config,
)
from cabinet_nesting.application.factory import get_factory
from cabinet_nesting.cli.commands import (
    display_load_error,
    edge_tape_command,
    validate_command,
)
from cabinet_nesting.infrastructure.bin_packing import StockPolicy

app = typer.Typer(
    name="cabinet-nesting",
    help="Nest cabinet panels onto stock boards and track nesting jobs.",
)

app.command(name="validate")(validate_command)
app.command(name="edge-tape")(edge_tape_command)


@app.command()
def nest(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON configuration file"),
    ],
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text, json"),
    ] = "text",
    no_rotation: Annotated[
        bool,
        typer.Option("--no-rotation", help="Never rotate panels"),
    ] = False,
    stock_policy: Annotated[
        Optional[StockPolicy],
        typer.Option("--stock-policy", help="Override stock policy: pool, single"),
    ] = None,
    job_name: Annotated[
        Optional[str],
        typer.Option("--name", "-n", help="Job name (overrides config)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log placement details"),
    ] = False,
) -> None:
    """Run a nesting job from a configuration file.

    Exit codes:
        0 - All panels placed
        1 - Configuration or run failed
        2 - Run completed but some panels did not fit any board

    Examples:
        cabinet-nesting nest kitchen.json
        cabinet-nesting nest kitchen.json --format json --no-rotation
    """
    if output_format not in ("text", "json"):
        typer.echo(f"Unknown format: {output_format}. Available: text, json", err=True)
        raise typer.Exit(code=1)

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )

    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    nesting_config = config_to_nesting_config(config)
    if no_rotation:
        nesting_config = replace(nesting_config, allow_rotation=False)
    if stock_policy is not None:
        nesting_config = replace(nesting_config, stock_policy=stock_policy)

    factory = get_factory()
    command = factory.create_run_command(nesting_config)
    result = command.execute(
        config_to_panels(config),
        config_to_boards(config),
        job_name=job_name or config.job_name,
        order_id=config.order_id,
    )

    if output_format == "json":
        typer.echo(factory.get_json_exporter().export(result))
    else:
        typer.echo(factory.get_report_formatter().format(result))

    if not result.success:
        raise typer.Exit(code=1)
    if result.unused_panels:
        raise typer.Exit(code=2)


if __name__ == "__main__":
    app()
