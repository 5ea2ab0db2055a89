"""Removable disk discovery and classification.

A record is accepted only when it looks like removable media AND does not
sit on an internal bus AND does not report fixed media. Bus type alone is
not trusted: some USB bridges report SATA, and some fixed media carry no
clean bus signal, so the media type acts as a second, independent veto.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from safeformatter.core.errors import DiscoveryError
from safeformatter.core.structlog_logger import StructlogMixin
from safeformatter.models.disk import (
    DiskDescriptor,
    RawDiskRecord,
    VolumeInfo,
    parse_disk_index,
)
from safeformatter.protocols.device_query_protocol import DeviceQueryProtocol


T = TypeVar("T")

INTERNAL_INTERFACES = frozenset({"SCSI", "IDE", "SATA", "RAID"})


@dataclass(frozen=True)
class BusSignals:
    """Bus and media heuristics derived from one raw record."""

    looks_internal: bool
    looks_usb: bool
    looks_removable_media: bool
    looks_fixed_media: bool

    @classmethod
    def from_record(cls, record: RawDiskRecord) -> "BusSignals":
        interface = record.interface_type.strip().upper()
        media = record.media_type.upper()
        looks_usb = interface == "USB" or "USB" in record.pnp_identity.upper()
        return cls(
            looks_internal=interface in INTERNAL_INTERFACES,
            looks_usb=looks_usb,
            looks_removable_media="REMOVABLE" in media or looks_usb,
            looks_fixed_media="FIXED" in media,
        )

    @property
    def accepted(self) -> bool:
        return (
            self.looks_removable_media
            and not self.looks_internal
            and not self.looks_fixed_media
        )

    @property
    def rejection_reason(self) -> str | None:
        if not self.looks_removable_media:
            return "not_removable"
        if self.looks_internal:
            return "internal_bus"
        if self.looks_fixed_media:
            return "fixed_media"
        return None


class DiskClassifier(StructlogMixin):
    """Turns raw provider records into validated removable disk descriptors."""

    def __init__(self, device_query: DeviceQueryProtocol) -> None:
        super().__init__()
        self.device_query = device_query

    def discover_removable_disks(self) -> list[DiskDescriptor]:
        """Discover removable disks, ascending by disk index.

        Returns:
            Fresh descriptors; nothing is cached between calls

        Raises:
            DiscoveryError: If the primary disk listing fails
        """
        try:
            records = self.device_query.list_physical_disks()
        except DiscoveryError:
            raise
        except Exception as e:
            self.log_error_with_context("disk_listing_failed", e)
            raise DiscoveryError(f"Failed to list physical disks: {e}") from e

        seen: set[tuple[str, int]] = set()
        disks: list[DiskDescriptor] = []
        for record in records:
            descriptor = self.classify(record)
            if descriptor is None:
                continue
            if descriptor.dedup_key in seen:
                self.logger.debug(
                    "disk_skipped",
                    reason="duplicate",
                    disk_index=descriptor.disk_index,
                    serial=descriptor.serial_identity,
                )
                continue
            seen.add(descriptor.dedup_key)
            disks.append(descriptor)

        disks.sort(key=lambda d: d.disk_index)
        self.logger.info("discovery_complete", total=len(records), accepted=len(disks))
        return disks

    def classify(self, record: RawDiskRecord) -> DiskDescriptor | None:
        """Classify one raw record.

        Returns:
            A descriptor, or None when the record is skipped
        """
        signals = BusSignals.from_record(record)
        if not signals.accepted:
            self._skip(record, signals.rejection_reason or "rejected")
            return None

        disk_index = parse_disk_index(record.device_handle)
        if disk_index is None:
            self._skip(record, "no_disk_index")
            return None

        if record.size_bytes == 0:
            self._skip(record, "zero_size")
            return None

        handle = record.device_handle
        serial = self._lookup("serial", handle, self.device_query.find_serial_by_handle)
        volume = self._lookup(
            "volume", handle, self.device_query.find_volume_by_disk_handle
        ) or VolumeInfo()

        descriptor = DiskDescriptor(
            disk_index=disk_index,
            model=record.model,
            file_system_label=volume.file_system,
            volume_label=volume.volume_label,
            serial_identity=serial or "",
            size_bytes=record.size_bytes,
            is_removable_confirmed=True,
            bus_handle=handle,
        )
        self.logger.debug(
            "disk_accepted",
            disk_index=disk_index,
            model=record.model,
            interface=record.interface_type,
            media=record.media_type,
        )
        return descriptor

    def _lookup(
        self, lookup: str, handle: str, query: Callable[[str], T | None]
    ) -> T | None:
        """Run a metadata lookup; a failure degrades to None."""
        try:
            return query(handle)
        except Exception as e:
            exc_info = logging.getLogger().isEnabledFor(logging.DEBUG)
            self.logger.warning(
                "lookup_degraded",
                lookup=lookup,
                handle=handle,
                error=str(e),
                exc_info=exc_info,
            )
            return None

    def _skip(self, record: RawDiskRecord, reason: str) -> None:
        self.logger.debug(
            "disk_skipped",
            reason=reason,
            handle=record.device_handle,
            model=record.model,
            interface=record.interface_type,
            media=record.media_type,
        )
