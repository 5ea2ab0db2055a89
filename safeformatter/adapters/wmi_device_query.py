"""Windows device query provider backed by WMI."""

import logging
from typing import Any

from safeformatter.core.errors import DiscoveryError
from safeformatter.core.structlog_logger import get_struct_logger
from safeformatter.models.disk import RawDiskRecord, VolumeInfo
from safeformatter.protocols.device_query_protocol import DeviceQueryProtocol


try:
    import wmi  # type: ignore[import-not-found]

    WMI_AVAILABLE = True
except ImportError:
    WMI_AVAILABLE = False


logger = get_struct_logger(__name__)


class WmiDeviceQuery:
    """Reads physical disks, serials and volumes through WMI.

    Serial and volume lookups never raise: any WMI failure is logged as a
    degraded lookup and reported as None.
    """

    def __init__(self, connection: Any | None = None) -> None:
        """Initialize the provider.

        Args:
            connection: Existing WMI connection; one is opened when omitted

        Raises:
            OSError: If WMI is unavailable or the connection fails
        """
        if connection is not None:
            self.wmi = connection
            return

        if not WMI_AVAILABLE:
            raise OSError("WMI library not available. Install with: pip install wmi")

        try:
            self.wmi = wmi.WMI()
        except Exception as e:
            exc_info = logging.getLogger().isEnabledFor(logging.DEBUG)
            logger.error("wmi_connection_failed", error=str(e), exc_info=exc_info)
            raise OSError(f"Failed to initialize WMI connection: {e}") from e

    def list_physical_disks(self) -> list[RawDiskRecord]:
        """List all Win32_DiskDrive instances.

        Raises:
            DiscoveryError: If the WMI query fails
        """
        try:
            drives = list(self.wmi.Win32_DiskDrive())
        except Exception as e:
            raise DiscoveryError(f"Failed to enumerate physical disks: {e}") from e

        records = []
        for drive in drives:
            records.append(
                RawDiskRecord(
                    interface_type=getattr(drive, "InterfaceType", None),
                    media_type=getattr(drive, "MediaType", None),
                    model=getattr(drive, "Model", None),
                    device_handle=getattr(drive, "DeviceID", None),
                    size_bytes=getattr(drive, "Size", None),
                    pnp_identity=getattr(drive, "PNPDeviceID", None),
                )
            )
        logger.debug("wmi_disks_listed", count=len(records))
        return records

    def find_serial_by_handle(self, handle: str) -> str | None:
        """Match Win32_PhysicalMedia.Tag against the device handle."""
        try:
            for media in self.wmi.Win32_PhysicalMedia():
                tag = getattr(media, "Tag", None) or ""
                if tag.casefold() == handle.casefold():
                    serial = (getattr(media, "SerialNumber", None) or "").strip()
                    return serial or None
        except Exception as e:
            exc_info = logging.getLogger().isEnabledFor(logging.DEBUG)
            logger.debug(
                "lookup_degraded",
                lookup="serial",
                handle=handle,
                error=str(e),
                exc_info=exc_info,
            )
        return None

    def find_volume_by_disk_handle(self, handle: str) -> VolumeInfo | None:
        """Walk disk -> partition -> logical disk and return the first volume."""
        try:
            for drive in self.wmi.Win32_DiskDrive(DeviceID=handle):
                for partition in drive.associators("Win32_DiskDriveToDiskPartition"):
                    for logical in partition.associators(
                        "Win32_LogicalDiskToPartition"
                    ):
                        return VolumeInfo(
                            file_system=getattr(logical, "FileSystem", None),
                            volume_label=getattr(logical, "VolumeName", None),
                        )
        except Exception as e:
            exc_info = logging.getLogger().isEnabledFor(logging.DEBUG)
            logger.debug(
                "lookup_degraded",
                lookup="volume",
                handle=handle,
                error=str(e),
                exc_info=exc_info,
            )
        return None


def create_device_query() -> DeviceQueryProtocol:
    """Create the device query provider for this host.

    Raises:
        DiscoveryError: If no provider is available on this platform
    """
    try:
        return WmiDeviceQuery()
    except OSError as e:
        raise DiscoveryError(
            f"Removable disk discovery is not available: {e}"
        ) from e
