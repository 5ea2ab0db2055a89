"""Disk models: raw provider records, volume info and removable disk descriptors."""

import string
from enum import Enum
from typing import Any

from pydantic import ConfigDict, Field, computed_field, field_validator

from safeformatter.models.base import SafeFormatterBaseModel


# Largest size that is still formatted as FAT32 (32 GiB)
FAT32_MAX_BYTES = 32 * 1024**3

PHYSICAL_DRIVE_PREFIX = "\\\\.\\PHYSICALDRIVE"


class FileSystem(str, Enum):
    """Target filesystems supported by the format workflow."""

    FAT32 = "FAT32"
    EXFAT = "exFAT"

    @property
    def diskpart_token(self) -> str:
        """Value for diskpart's ``format fs=`` option."""
        return self.value.lower()

    @property
    def max_label_length(self) -> int:
        return 11 if self is FileSystem.FAT32 else 15


def recommended_file_system(size_bytes: int) -> FileSystem:
    """Pick the filesystem for a device of the given size.

    FAT32 up to and including 32 GiB, exFAT above.
    """
    return FileSystem.FAT32 if size_bytes <= FAT32_MAX_BYTES else FileSystem.EXFAT


def parse_disk_index(device_handle: str) -> int | None:
    """Extract the disk index from a ``\\\\.\\PHYSICALDRIVE<N>`` handle.

    Returns:
        The index, or None when the handle is not a physical drive path or
        carries no digits.
    """
    handle = (device_handle or "").strip()
    if not handle.upper().startswith(PHYSICAL_DRIVE_PREFIX):
        return None
    digits = "".join(ch for ch in handle if ch in string.digits)
    if not digits:
        return None
    return int(digits)


def format_size(size_bytes: int) -> str:
    """Human readable size in decimal gigabytes, e.g. ``16.0 GB``."""
    return f"{size_bytes / 1_000_000_000:.1f} GB"


class RawDiskRecord(SafeFormatterBaseModel):
    """A physical disk record as reported by the device query provider."""

    interface_type: str = ""
    media_type: str = ""
    model: str = ""
    device_handle: str = ""
    size_bytes: int = Field(default=0, ge=0)
    pnp_identity: str = ""

    @field_validator(
        "interface_type",
        "media_type",
        "model",
        "device_handle",
        "pnp_identity",
        mode="before",
    )
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        """Providers report missing properties as None."""
        return "" if v is None else v

    @field_validator("size_bytes", mode="before")
    @classmethod
    def coerce_size(cls, v: Any) -> Any:
        """WMI reports sizes as strings; missing sizes count as zero."""
        if v is None or v == "":
            return 0
        return v


class VolumeInfo(SafeFormatterBaseModel):
    """Filesystem and label of the first logical volume on a disk."""

    file_system: str = ""
    volume_label: str = ""

    @field_validator("file_system", "volume_label", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class DiskDescriptor(SafeFormatterBaseModel):
    """A validated removable disk that may be offered for formatting.

    Descriptors are produced fresh by every discovery call and never mutated.
    ``disk_index`` is resolved once at discovery time and used by every
    command issued against the device.
    """

    model_config = ConfigDict(frozen=True)

    disk_index: int = Field(ge=0)
    model: str = ""
    file_system_label: str = ""
    volume_label: str = ""
    serial_identity: str = ""
    size_bytes: int = Field(gt=0)
    is_removable_confirmed: bool = False
    bus_handle: str = ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def manufacturer(self) -> str:
        """First whitespace-delimited token of the model string."""
        parts = self.model.split()
        return parts[0] if parts else ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def display_name(self) -> str:
        return self.volume_label or self.model

    @computed_field  # type: ignore[prop-decorator]
    @property
    def recommended_file_system(self) -> FileSystem:
        return recommended_file_system(self.size_bytes)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def size_display(self) -> str:
        return format_size(self.size_bytes)

    @property
    def dedup_key(self) -> tuple[str, int]:
        return (self.serial_identity, self.disk_index)


__all__ = [
    "FAT32_MAX_BYTES",
    "DiskDescriptor",
    "FileSystem",
    "RawDiskRecord",
    "VolumeInfo",
    "format_size",
    "parse_disk_index",
    "recommended_file_system",
]
