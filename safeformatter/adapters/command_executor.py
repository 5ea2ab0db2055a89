"""Command executor adapter for privileged disk-management commands."""

import logging
import shlex
from collections.abc import Sequence
from typing import cast

from safeformatter.core.errors import CommandFailed, LaunchError
from safeformatter.core.structlog_logger import get_struct_logger
from safeformatter.models.results import CommandResult
from safeformatter.protocols.command_executor_protocol import (
    CommandExecutorProtocol,
)
from safeformatter.utils import stream_process
from safeformatter.utils.stream_process import OutputMiddleware, split_args


logger = get_struct_logger(__name__)


class LoggerOutputMiddleware(OutputMiddleware[str]):
    """Middleware that mirrors child output into the debug log."""

    def __init__(self, executable: str) -> None:
        self.executable = executable

    def process(self, line: str, stream_type: str) -> str:
        logger.debug(
            "command_output", executable=self.executable, stream=stream_type, line=line
        )
        return line


class CommandExecutor:
    """Runs one external process per call without blocking the event loop."""

    def __init__(self, encoding: str | None = None) -> None:
        self.encoding = encoding or stream_process.default_encoding()

    async def run(
        self,
        executable: str,
        args: str | Sequence[str] = (),
        middleware: OutputMiddleware[str] | None = None,
        check: bool = False,
    ) -> CommandResult:
        """Launch ``executable`` and wait for it to exit.

        Args:
            executable: Program to launch
            args: Argument string (split shell-style) or argument list
            middleware: Optional per-line output processor
            check: Raise CommandFailed on a non-zero exit status

        Returns:
            CommandResult with exit code and combined output lines

        Raises:
            LaunchError: If the executable could not be started
            CommandFailed: If ``check`` is set and the exit status is non-zero
        """
        cmd = [executable, *split_args(args)]
        cmd_str = " ".join(shlex.quote(arg) for arg in cmd)
        logger.debug("command_starting", command=cmd_str)

        if middleware is None:
            middleware = cast(OutputMiddleware[str], LoggerOutputMiddleware(executable))

        try:
            return_code, lines = await stream_process.run_command(
                cmd, middleware, encoding=self.encoding
            )
        except OSError as e:
            # FileNotFoundError and PermissionError included
            exc_info = logging.getLogger().isEnabledFor(logging.DEBUG)
            logger.error(
                "command_launch_failed",
                command=cmd_str,
                error=str(e),
                exc_info=exc_info,
            )
            raise LaunchError(executable, e, {"command": cmd_str}) from e

        result = CommandResult(exit_code=return_code, lines=lines)
        logger.debug(
            "command_finished",
            command=cmd_str,
            exit_code=return_code,
            line_count=len(lines),
        )

        if check and not result.ok:
            raise CommandFailed(cmd_str, return_code, result.output)

        return result


def create_command_executor(encoding: str | None = None) -> CommandExecutorProtocol:
    """Create a command executor.

    Args:
        encoding: Encoding used to decode child output, the console code
            page of the platform when omitted

    Returns:
        Configured CommandExecutor instance
    """
    return CommandExecutor(encoding=encoding)
