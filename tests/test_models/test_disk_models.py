"""Tests for disk models and size helpers."""

import pytest
from pydantic import ValidationError

from safeformatter.models.disk import (
    FAT32_MAX_BYTES,
    FileSystem,
    RawDiskRecord,
    VolumeInfo,
    format_size,
    parse_disk_index,
    recommended_file_system,
)


GIB = 1024**3


class TestRecommendedFileSystem:
    """Test the FAT32/exFAT size threshold."""

    def test_threshold_is_32_gib(self):
        assert FAT32_MAX_BYTES == 34_359_738_368

    @pytest.mark.parametrize(
        "size_bytes, expected",
        [
            (1, FileSystem.FAT32),
            (16 * 1_000_000_000, FileSystem.FAT32),
            (32 * GIB, FileSystem.FAT32),
            (32 * GIB + 1, FileSystem.EXFAT),
            (64 * 1_000_000_000, FileSystem.EXFAT),
        ],
    )
    def test_recommended_file_system(self, size_bytes, expected):
        assert recommended_file_system(size_bytes) is expected

    def test_diskpart_tokens(self):
        assert FileSystem.FAT32.diskpart_token == "fat32"
        assert FileSystem.EXFAT.diskpart_token == "exfat"

    def test_max_label_lengths(self):
        assert FileSystem.FAT32.max_label_length == 11
        assert FileSystem.EXFAT.max_label_length == 15


class TestParseDiskIndex:
    """Test disk index extraction from device handles."""

    @pytest.mark.parametrize(
        "handle, expected",
        [
            ("\\\\.\\PHYSICALDRIVE2", 2),
            ("\\\\.\\PHYSICALDRIVE0", 0),
            ("\\\\.\\PhysicalDrive12", 12),
            ("  \\\\.\\PHYSICALDRIVE3  ", 3),
        ],
    )
    def test_valid_handles(self, handle, expected):
        assert parse_disk_index(handle) == expected

    @pytest.mark.parametrize(
        "handle",
        ["", "\\\\.\\PHYSICALDRIVE", "C:", "\\\\.\\CDROM0", "/dev/sdb"],
    )
    def test_invalid_handles(self, handle):
        assert parse_disk_index(handle) is None


def test_format_size_uses_decimal_gigabytes():
    assert format_size(16 * 1_000_000_000) == "16.0 GB"
    assert format_size(15_518_924_800) == "15.5 GB"


class TestRawDiskRecord:
    """Test normalisation of provider records."""

    def test_missing_properties_become_empty(self):
        record = RawDiskRecord(
            interface_type=None,
            media_type=None,
            model=None,
            device_handle=None,
            size_bytes=None,
            pnp_identity=None,
        )

        assert record.interface_type == ""
        assert record.model == ""
        assert record.pnp_identity == ""
        assert record.size_bytes == 0

    def test_size_is_coerced_from_string(self):
        record = RawDiskRecord(size_bytes="15518924800")
        assert record.size_bytes == 15_518_924_800

    def test_negative_size_rejected(self):
        with pytest.raises(ValidationError):
            RawDiskRecord(size_bytes=-1)

    def test_volume_info_defaults(self):
        volume = VolumeInfo(file_system=None, volume_label=None)
        assert volume.file_system == ""
        assert volume.volume_label == ""


class TestDiskDescriptor:
    """Test derived descriptor fields."""

    def test_manufacturer_is_first_model_token(self, disk_factory):
        disk = disk_factory(model="Kingston DataTraveler 3.0 USB Device")
        assert disk.manufacturer == "Kingston"

    def test_manufacturer_empty_model(self, disk_factory):
        assert disk_factory(model="").manufacturer == ""

    def test_display_name_prefers_volume_label(self, disk_factory):
        assert disk_factory(volume_label="BACKUP").display_name == "BACKUP"
        assert (
            disk_factory(volume_label="").display_name
            == "Kingston DataTraveler 3.0 USB Device"
        )

    def test_recommended_file_system_follows_size(self, disk_factory):
        assert disk_factory(size_bytes=32 * GIB).recommended_file_system is (
            FileSystem.FAT32
        )
        assert disk_factory(size_bytes=64 * GIB).recommended_file_system is (
            FileSystem.EXFAT
        )

    def test_size_display(self, disk_factory):
        assert disk_factory(size_bytes=16 * 1_000_000_000).size_display == "16.0 GB"

    def test_dedup_key(self, disk_factory):
        disk = disk_factory(serial_identity="ABC", disk_index=4)
        assert disk.dedup_key == ("ABC", 4)

    def test_descriptor_is_frozen(self, usb_disk):
        with pytest.raises(ValidationError):
            usb_disk.disk_index = 5

    def test_zero_size_rejected(self, disk_factory):
        with pytest.raises(ValidationError):
            disk_factory(size_bytes=0)

    def test_negative_index_rejected(self, disk_factory):
        with pytest.raises(ValidationError):
            disk_factory(disk_index=-1)

    def test_json_dump_includes_derived_fields(self, usb_disk):
        data = usb_disk.model_dump(mode="json")

        assert data["disk_index"] == 2
        assert data["manufacturer"] == "Kingston"
        assert data["recommended_file_system"] == "FAT32"
        assert data["size_display"] == "16.0 GB"

    def test_to_dict_full_keeps_unset_fields(self, usb_disk):
        data = usb_disk.to_dict_full()

        assert data["volume_label"] == ""
        assert data["recommended_file_system"] == "FAT32"
        assert data["is_removable_confirmed"] is True
