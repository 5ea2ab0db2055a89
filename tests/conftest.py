"""Core test fixtures for the safeformatter project."""

from collections.abc import Callable, Generator, Sequence
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from safeformatter.models.disk import DiskDescriptor, RawDiskRecord, VolumeInfo
from safeformatter.models.results import CommandResult


# ---- Base Fixtures ----


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Keep user config files and SAFEFORMATTER_* variables out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(home / ".local" / "state"))
    monkeypatch.chdir(tmp_path)
    for key in ("LOG_LEVEL", "LOG_DIR", "DISKPART_PATH", "SCRIPT_DIR"):
        monkeypatch.delenv(f"SAFEFORMATTER_{key}", raising=False)
    yield home


@pytest.fixture
def log_dir(tmp_path: Path) -> Path:
    """Temporary directory receiving run logs."""
    path = tmp_path / "logs"
    path.mkdir()
    return path


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock starting at 2024-03-01 14:30:05 that advances 7 seconds per call."""
    state = {"now": datetime(2024, 3, 1, 14, 30, 5) - timedelta(seconds=7)}

    def clock() -> datetime:
        state["now"] += timedelta(seconds=7)
        return state["now"]

    return clock


# ---- Disk Fixtures ----


def make_raw_record(**overrides: Any) -> RawDiskRecord:
    """Build a USB stick record; keyword arguments override fields."""
    data: dict[str, Any] = {
        "interface_type": "USB",
        "media_type": "Removable Media",
        "model": "Kingston DataTraveler 3.0 USB Device",
        "device_handle": "\\\\.\\PHYSICALDRIVE2",
        "size_bytes": 16 * 1_000_000_000,
        "pnp_identity": "USBSTOR\\DISK&VEN_KINGSTON&PROD_DATATRAVELER_3.0\\001",
    }
    data.update(overrides)
    return RawDiskRecord(**data)


def make_disk(**overrides: Any) -> DiskDescriptor:
    """Build a removable disk descriptor; keyword arguments override fields."""
    data: dict[str, Any] = {
        "disk_index": 2,
        "model": "Kingston DataTraveler 3.0 USB Device",
        "file_system_label": "FAT32",
        "volume_label": "",
        "serial_identity": "60A44C3FACC9",
        "size_bytes": 16 * 1_000_000_000,
        "is_removable_confirmed": True,
        "bus_handle": "\\\\.\\PHYSICALDRIVE2",
    }
    data.update(overrides)
    return DiskDescriptor(**data)


@pytest.fixture
def usb_record() -> RawDiskRecord:
    return make_raw_record()


@pytest.fixture
def internal_sata_record() -> RawDiskRecord:
    """An internal SSD that also reports removable media."""
    return make_raw_record(
        interface_type="SATA",
        media_type="Removable Media",
        model="Samsung SSD 870 EVO 1TB",
        device_handle="\\\\.\\PHYSICALDRIVE0",
        size_bytes=1_000_204_886_016,
        pnp_identity="SCSI\\DISK&VEN_SAMSUNG\\4&1234",
    )


@pytest.fixture
def usb_disk() -> DiskDescriptor:
    return make_disk()


class FakeDeviceQuery:
    """In-memory device query provider."""

    def __init__(
        self,
        records: Sequence[RawDiskRecord] = (),
        serials: dict[str, str] | None = None,
        volumes: dict[str, VolumeInfo] | None = None,
    ) -> None:
        self.records = list(records)
        self.serials = serials or {}
        self.volumes = volumes or {}
        self.list_error: Exception | None = None
        self.serial_error: Exception | None = None
        self.volume_error: Exception | None = None
        self.list_calls = 0

    def list_physical_disks(self) -> list[RawDiskRecord]:
        self.list_calls += 1
        if self.list_error is not None:
            raise self.list_error
        return list(self.records)

    def find_serial_by_handle(self, handle: str) -> str | None:
        if self.serial_error is not None:
            raise self.serial_error
        return self.serials.get(handle)

    def find_volume_by_disk_handle(self, handle: str) -> VolumeInfo | None:
        if self.volume_error is not None:
            raise self.volume_error
        return self.volumes.get(handle)


@pytest.fixture
def fake_device_query() -> FakeDeviceQuery:
    return FakeDeviceQuery()


# ---- Executor Fixtures ----


class ScriptedExecutor:
    """Fake command executor that records every call.

    Results are taken from ``results`` in call order; once exhausted every
    further call succeeds. A result may also be an exception to raise. The
    script file named after ``/s`` is read at call time so tests can assert on
    the commands that were issued.
    """

    def __init__(
        self, results: Sequence[CommandResult | BaseException] = ()
    ) -> None:
        self.results = list(results)
        self.calls: list[tuple[str, list[str]]] = []
        self.scripts: list[str] = []

    async def run(
        self,
        executable: str,
        args: str | Sequence[str] = (),
        middleware: Any = None,
        check: bool = False,
    ) -> CommandResult:
        arg_list = [args] if isinstance(args, str) else list(args)
        self.calls.append((executable, arg_list))
        if "/s" in arg_list:
            script = Path(arg_list[arg_list.index("/s") + 1])
            self.scripts.append(script.read_text(encoding="ascii"))

        if self.results:
            result = self.results.pop(0)
            if isinstance(result, BaseException):
                raise result
            return result
        return CommandResult(
            exit_code=0, lines=["DiskPart successfully completed the operation."]
        )


@pytest.fixture
def scripted_executor() -> ScriptedExecutor:
    return ScriptedExecutor()


@pytest.fixture
def raw_record_factory() -> Callable[..., RawDiskRecord]:
    return make_raw_record


@pytest.fixture
def disk_factory() -> Callable[..., DiskDescriptor]:
    return make_disk


@pytest.fixture
def executor_factory() -> type[ScriptedExecutor]:
    return ScriptedExecutor


@pytest.fixture
def device_query_factory() -> type[FakeDeviceQuery]:
    return FakeDeviceQuery
