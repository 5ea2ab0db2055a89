"""Protocol definition for the OS device/volume enumeration service."""

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from safeformatter.models.disk import RawDiskRecord, VolumeInfo


@runtime_checkable
class DeviceQueryProtocol(Protocol):
    """Queryable source of raw physical disk and volume records.

    Only ``list_physical_disks`` may raise; the two lookups report absence
    as None.
    """

    def list_physical_disks(self) -> list["RawDiskRecord"]:
        """List every physical disk known to the OS.

        Returns:
            Raw disk records in provider order

        Raises:
            Exception: Any failure here is fatal to discovery
        """
        ...

    def find_serial_by_handle(self, handle: str) -> str | None:
        """Find the hardware serial number for a device handle.

        Args:
            handle: Device handle, e.g. ``\\\\.\\PHYSICALDRIVE2``

        Returns:
            The serial, or None if the device reports none
        """
        ...

    def find_volume_by_disk_handle(self, handle: str) -> "VolumeInfo | None":
        """Find the first logical volume on a physical disk.

        Args:
            handle: Device handle of the physical disk

        Returns:
            Filesystem and label of the first volume, or None
        """
        ...
