"""CLI command implementations for the cabinet-nesting application.

This package contains subcommands for the CLI, including:
- validate: Validate a configuration file
- edge-tape: Estimate edge tape for the configured panels
"""

from cabinet_nesting.cli.commands.edge_tape import edge_tape_command
from cabinet_nesting.cli.commands.validate import display_load_error, validate_command

__all__ = ["display_load_error", "edge_tape_command", "validate_command"]
