"""Error handling decorators for CLI commands."""

import logging
import sys
import traceback
from collections.abc import Callable
from functools import wraps
from typing import Any

import typer

from safeformatter.cli.helpers.output import print_error_message
from safeformatter.core.errors import (
    ConfigError,
    DiscoveryError,
    FormatBusyError,
    FormatNotReadyError,
    LabelError,
    LaunchError,
)
from safeformatter.core.structlog_logger import get_struct_logger


__all__ = ["PASSTHROUGH_ERRORS", "handle_errors", "print_stack_trace_if_verbose"]

logger = get_struct_logger(__name__)

# Usage errors such as typer.BadParameter share this base class.
_USAGE_ERRORS = tuple(
    cls for cls in typer.BadParameter.__mro__ if cls.__name__ == "ClickException"
)

PASSTHROUGH_ERRORS: tuple[type[BaseException], ...] = (
    typer.Exit,
    typer.Abort,
    *_USAGE_ERRORS,
)


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to handle common exceptions in CLI commands.

    Domain errors are reported and turned into exit status 1; typer's own
    exit, abort and usage exceptions pass through untouched.

    Args:
        func: The function to decorate

    Returns:
        Decorated function with error handling
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except PASSTHROUGH_ERRORS:
            raise
        except DiscoveryError as e:
            logger.error("discovery_error", error=str(e))
            print_error_message(str(e))
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e
        except ConfigError as e:
            logger.error("configuration_error", error=str(e))
            print_error_message(str(e))
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e
        except LabelError as e:
            logger.error("label_error", error=str(e))
            print_error_message(str(e))
            raise typer.Exit(1) from e
        except (FormatBusyError, FormatNotReadyError) as e:
            logger.error("format_not_started", error=str(e))
            print_error_message(str(e))
            raise typer.Exit(1) from e
        except LaunchError as e:
            logger.error("launch_error", error=str(e))
            print_error_message(str(e))
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e
        except Exception as e:
            exc_info = logging.getLogger().isEnabledFor(logging.DEBUG)
            logger.error("unexpected_error", error=str(e), exc_info=exc_info)
            print_error_message(f"Unexpected error: {e}")
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e

    return wrapper


def print_stack_trace_if_verbose() -> None:
    """Print stack trace if verbose/debug mode is enabled."""
    if any(arg in sys.argv for arg in ["-v", "-vv", "--verbose", "--debug"]):
        print("\nStack trace:", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
