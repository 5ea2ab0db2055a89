"""Protocol definitions for SafeFormatter adapters.

These use typing.Protocol with @runtime_checkable so fakes can stand in for
the OS-backed implementations in tests.
"""

from .command_executor_protocol import CommandExecutorProtocol
from .device_query_protocol import DeviceQueryProtocol


__all__ = [
    "CommandExecutorProtocol",
    "DeviceQueryProtocol",
]
