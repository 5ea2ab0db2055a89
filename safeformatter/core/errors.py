"""Domain exceptions for SafeFormatter.

Classification skips and degraded metadata lookups have no exception type;
they are logged and yield ``None``.
"""

from typing import Any


class SafeFormatterError(Exception):
    """Base exception for all SafeFormatter errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = context or {}

    def __str__(self) -> str:
        return self.message


class LaunchError(SafeFormatterError):
    """The command interpreter could not be started."""

    def __init__(
        self,
        executable: str,
        cause: BaseException | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        reason = f": {cause}" if cause is not None else ""
        super().__init__(f"Failed to launch {executable}{reason}", context)
        self.executable = executable
        self.cause = cause


class CommandFailed(SafeFormatterError):
    """The command ran but exited with a non-zero status."""

    def __init__(
        self,
        command: str,
        exit_code: int,
        output: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"{command} exited with status {exit_code}", context)
        self.command = command
        self.exit_code = exit_code
        self.output = output


class DiscoveryError(SafeFormatterError):
    """The primary physical disk listing failed."""


class ConfigError(SafeFormatterError):
    """Configuration could not be loaded or validated."""


class LabelError(SafeFormatterError, ValueError):
    """A volume label is not acceptable for the target filesystem."""


class FormatBusyError(SafeFormatterError):
    """A format run is already in progress."""


class FormatNotReadyError(SafeFormatterError):
    """A format run was requested without a selected and confirmed disk."""


__all__ = [
    "CommandFailed",
    "ConfigError",
    "DiscoveryError",
    "FormatBusyError",
    "FormatNotReadyError",
    "LabelError",
    "LaunchError",
    "SafeFormatterError",
]
