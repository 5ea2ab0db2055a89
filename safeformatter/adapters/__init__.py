"""Adapters for OS-level collaborators."""

from .command_executor import CommandExecutor, create_command_executor
from .diskpart import DiskpartRunner
from .wmi_device_query import WmiDeviceQuery, create_device_query


__all__ = [
    "CommandExecutor",
    "DiskpartRunner",
    "WmiDeviceQuery",
    "create_command_executor",
    "create_device_query",
]
