from .errors import (
    CommandFailed,
    ConfigError,
    DiscoveryError,
    FormatBusyError,
    FormatNotReadyError,
    LabelError,
    LaunchError,
    SafeFormatterError,
)
from .logging import get_logger, setup_logging


__all__ = [
    "setup_logging",
    "get_logger",
    "SafeFormatterError",
    "LaunchError",
    "CommandFailed",
    "DiscoveryError",
    "ConfigError",
    "LabelError",
    "FormatBusyError",
    "FormatNotReadyError",
]
