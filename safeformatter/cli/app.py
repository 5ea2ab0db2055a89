"""Main CLI application for SafeFormatter."""

import logging
import sys
from typing import Annotated

import typer

from safeformatter import __version__
from safeformatter.cli.decorators.error_handling import print_stack_trace_if_verbose
from safeformatter.cli.helpers.output import print_error_message
from safeformatter.config.user_config import UserConfig, create_user_config
from safeformatter.core.errors import ConfigError
from safeformatter.core.logging import setup_logging


__all__ = ["app", "main", "__version__"]

logger = logging.getLogger(__name__)


class AppContext:
    """Application context for storing shared state."""

    def __init__(
        self,
        verbose: int = 0,
        log_file: str | None = None,
        config_file: str | None = None,
    ) -> None:
        """Initialize AppContext.

        Args:
            verbose: Verbosity level
            log_file: Path to a JSON diagnostic log file
            config_file: Path to configuration file

        Raises:
            ConfigError: If the configuration cannot be loaded
        """
        self.verbose = verbose
        self.log_file = log_file
        self.config_file = config_file
        self.user_config: UserConfig = create_user_config(cli_config_path=config_file)


app = typer.Typer(
    name="safeformatter",
    help=f"""SafeFormatter v{__version__}

Erase and reformat removable USB sticks and SD cards. Internal and fixed
drives are never offered.

Common workflows:
  • List removable disks:  safeformatter list
  • Format a disk:         safeformatter format 2 --label BACKUP""",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "-v",
            "--verbose",
            count=True,
            help="Increase verbosity (-v=INFO, -vv=DEBUG)",
        ),
    ] = 0,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging (equivalent to -vv)"),
    ] = False,
    log_file: Annotated[
        str | None, typer.Option("--log-file", help="Write diagnostic logs to file")
    ] = None,
    config_file: Annotated[
        str | None,
        typer.Option("-c", "--config", help="Path to configuration file"),
    ] = None,
    version: Annotated[
        bool, typer.Option("--version", help="Show version and exit")
    ] = False,
) -> None:
    """SafeFormatter removable media formatting tool."""
    if version:
        print(f"SafeFormatter v{__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        print(ctx.get_help())
        raise typer.Exit()

    # Config loading logs, so route it to stderr before the final level is known
    setup_logging(level=logging.DEBUG if debug or verbose >= 2 else logging.WARNING)

    try:
        app_context = AppContext(
            verbose=verbose, log_file=log_file, config_file=config_file
        )
    except ConfigError as e:
        print_error_message(str(e))
        raise typer.Exit(1) from e
    ctx.obj = app_context

    log_level = logging.WARNING
    if debug or verbose >= 2:
        log_level = logging.DEBUG
    elif verbose == 1:
        log_level = logging.INFO
    elif log_file is None:
        log_level = app_context.user_config.get_log_level_int()

    setup_logging(level=log_level, log_file=log_file)


def main() -> int:
    """Main CLI entry point."""
    exit_code = 0

    try:
        from safeformatter.cli.commands import register_all_commands

        register_all_commands(app)
        app()

    except SystemExit as e:
        exit_code = e.code if isinstance(e.code, int) else 0

    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        print_stack_trace_if_verbose()
        exit_code = 1

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
