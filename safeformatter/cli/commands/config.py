"""Configuration inspection commands."""

import typer
from rich.table import Table

from safeformatter.cli.app import AppContext
from safeformatter.cli.decorators import handle_errors
from safeformatter.cli.helpers.output import Colors, get_console


config_app = typer.Typer(
    name="config",
    help="Configuration commands",
    no_args_is_help=True,
)


@config_app.command(name="show")
@handle_errors
def show_config(ctx: typer.Context) -> None:
    """Show effective settings and where each one came from."""
    app_ctx: AppContext = ctx.obj
    user_config = app_ctx.user_config

    title = "Configuration"
    if user_config.config_path:
        title += f" ({user_config.config_path})"

    table = Table(title=title, show_header=True, header_style=Colors.HEADER)
    table.add_column("Setting", style=Colors.PRIMARY, no_wrap=True)
    table.add_column("Value")
    table.add_column("Source", style=Colors.MUTED)

    for key, value, source in user_config.describe():
        table.add_row(key, "-" if value is None else str(value), source)

    get_console().print(table)


def register_commands(app: typer.Typer) -> None:
    """Register config commands with the main app.

    Args:
        app: The main Typer app
    """
    app.add_typer(config_app, name="config")
