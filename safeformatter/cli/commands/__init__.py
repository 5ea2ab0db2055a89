"""CLI command modules."""

import typer

from safeformatter.cli.commands.config import register_commands as register_config_commands
from safeformatter.cli.commands.disks import register_commands as register_disk_commands
from safeformatter.cli.commands.format import (
    register_commands as register_format_commands,
)


def register_all_commands(app: typer.Typer) -> None:
    """Register all CLI commands with the main app.

    Args:
        app: The main Typer app
    """
    register_disk_commands(app)
    register_format_commands(app)
    register_config_commands(app)
