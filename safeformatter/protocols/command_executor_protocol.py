"""Protocol definition for running external disk-management commands."""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from safeformatter.models.results import CommandResult
    from safeformatter.utils.stream_process import OutputMiddleware


@runtime_checkable
class CommandExecutorProtocol(Protocol):
    """Runs one child process per call and awaits its completion."""

    async def run(
        self,
        executable: str,
        args: str | Sequence[str] = (),
        middleware: "OutputMiddleware[str] | None" = None,
        check: bool = False,
    ) -> "CommandResult":
        """Run ``executable`` with ``args`` and collect combined output.

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
        ...
