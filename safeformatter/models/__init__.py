"""Core models for SafeFormatter."""

from .base import SafeFormatterBaseModel
from .disk import (
    FAT32_MAX_BYTES,
    DiskDescriptor,
    FileSystem,
    RawDiskRecord,
    VolumeInfo,
    format_size,
    parse_disk_index,
    recommended_file_system,
)
from .results import BaseResult, CommandResult


__all__ = [
    "FAT32_MAX_BYTES",
    "BaseResult",
    "CommandResult",
    "DiskDescriptor",
    "FileSystem",
    "RawDiskRecord",
    "SafeFormatterBaseModel",
    "VolumeInfo",
    "format_size",
    "parse_disk_index",
    "recommended_file_system",
]
