"""Tests for removable disk discovery and classification."""

import pytest

from safeformatter.core.errors import DiscoveryError
from safeformatter.disk.classifier import BusSignals, DiskClassifier
from safeformatter.models.disk import FileSystem, VolumeInfo


KINGSTON_HANDLE = "\\\\.\\PHYSICALDRIVE2"


class TestBusSignals:
    """Test the removable/internal veto rule."""

    def test_usb_interface_accepted(self, raw_record_factory):
        signals = BusSignals.from_record(raw_record_factory())
        assert signals.accepted is True
        assert signals.rejection_reason is None

    def test_usb_pnp_identity_counts_as_usb(self, raw_record_factory):
        record = raw_record_factory(
            interface_type="", media_type="", pnp_identity="USBSTOR\\DISK&VEN_X"
        )
        assert BusSignals.from_record(record).accepted is True

    @pytest.mark.parametrize("interface", ["SCSI", "IDE", "SATA", "RAID", "sata "])
    def test_internal_bus_vetoes_removable_media(self, raw_record_factory, interface):
        record = raw_record_factory(
            interface_type=interface,
            media_type="Removable Media",
            pnp_identity="SCSI\\DISK",
        )
        signals = BusSignals.from_record(record)

        assert signals.accepted is False
        assert signals.rejection_reason == "internal_bus"

    def test_fixed_media_vetoes_usb(self, raw_record_factory):
        record = raw_record_factory(media_type="Fixed hard disk media")
        signals = BusSignals.from_record(record)

        assert signals.accepted is False
        assert signals.rejection_reason == "fixed_media"

    def test_unknown_bus_without_removable_media(self, raw_record_factory):
        record = raw_record_factory(
            interface_type="1394", media_type="", pnp_identity="1394\\DISK"
        )
        assert BusSignals.from_record(record).rejection_reason == "not_removable"


class TestDiskClassifier:
    """Test DiskClassifier against a fake device query provider."""

    def test_kingston_stick_end_to_end(
        self, device_query_factory, raw_record_factory
    ):
        query = device_query_factory(
            records=[raw_record_factory()],
            serials={KINGSTON_HANDLE: "60A44C3FACC9"},
            volumes={KINGSTON_HANDLE: VolumeInfo(file_system="FAT32", volume_label="")},
        )
        disks = DiskClassifier(query).discover_removable_disks()

        assert len(disks) == 1
        disk = disks[0]
        assert disk.disk_index == 2
        assert disk.manufacturer == "Kingston"
        assert disk.serial_identity == "60A44C3FACC9"
        assert disk.file_system_label == "FAT32"
        assert disk.recommended_file_system is FileSystem.FAT32
        assert disk.is_removable_confirmed is True
        assert disk.bus_handle == KINGSTON_HANDLE

    def test_internal_sata_disk_never_offered(
        self, device_query_factory, usb_record, internal_sata_record
    ):
        query = device_query_factory(records=[internal_sata_record, usb_record])
        disks = DiskClassifier(query).discover_removable_disks()

        assert [d.disk_index for d in disks] == [2]

    def test_zero_size_skipped(self, device_query_factory, raw_record_factory):
        query = device_query_factory(records=[raw_record_factory(size_bytes=0)])
        assert DiskClassifier(query).discover_removable_disks() == []

    def test_unparseable_handle_skipped(
        self, device_query_factory, raw_record_factory
    ):
        query = device_query_factory(
            records=[raw_record_factory(device_handle="\\\\.\\PHYSICALDRIVE")]
        )
        assert DiskClassifier(query).discover_removable_disks() == []

    def test_duplicates_keep_first_seen(
        self, device_query_factory, raw_record_factory
    ):
        first = raw_record_factory(model="First Reader")
        second = raw_record_factory(model="Second Reader")
        query = device_query_factory(
            records=[first, second], serials={KINGSTON_HANDLE: "SERIAL1"}
        )

        disks = DiskClassifier(query).discover_removable_disks()

        assert len(disks) == 1
        assert disks[0].model == "First Reader"

    def test_sorted_by_disk_index(self, device_query_factory, raw_record_factory):
        records = [
            raw_record_factory(device_handle=f"\\\\.\\PHYSICALDRIVE{n}")
            for n in (5, 1, 3)
        ]
        query = device_query_factory(records=records)

        disks = DiskClassifier(query).discover_removable_disks()

        assert [d.disk_index for d in disks] == [1, 3, 5]

    def test_lookup_failures_degrade(self, device_query_factory, usb_record):
        query = device_query_factory(records=[usb_record])
        query.serial_error = RuntimeError("WMI timeout")
        query.volume_error = RuntimeError("WMI timeout")

        disks = DiskClassifier(query).discover_removable_disks()

        assert len(disks) == 1
        assert disks[0].serial_identity == ""
        assert disks[0].file_system_label == ""
        assert disks[0].volume_label == ""

    def test_listing_failure_raises_discovery_error(self, device_query_factory):
        query = device_query_factory()
        query.list_error = RuntimeError("RPC server unavailable")

        with pytest.raises(DiscoveryError, match="RPC server unavailable"):
            DiskClassifier(query).discover_removable_disks()

    def test_discovery_error_passes_through(self, device_query_factory):
        query = device_query_factory()
        query.list_error = DiscoveryError("listing failed")

        with pytest.raises(DiscoveryError, match="listing failed"):
            DiskClassifier(query).discover_removable_disks()

    def test_every_call_queries_again(self, device_query_factory, usb_record):
        query = device_query_factory(records=[usb_record])
        classifier = DiskClassifier(query)

        classifier.discover_removable_disks()
        query.records = []

        assert classifier.discover_removable_disks() == []
        assert query.list_calls == 2

    def test_no_disks(self, fake_device_query):
        assert DiskClassifier(fake_device_query).discover_removable_disks() == []
