"""Session controller between a user interface and the format core.

Holds the selection, confirmation and busy state, gates the start action,
and reports property changes to subscribed observers.
"""

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from safeformatter.core.errors import FormatBusyError, FormatNotReadyError
from safeformatter.core.structlog_logger import StructlogMixin
from safeformatter.disk.classifier import DiskClassifier
from safeformatter.format.models import FormatResult
from safeformatter.format.orchestrator import FormatOrchestrator
from safeformatter.models.disk import DiskDescriptor, FileSystem


if TYPE_CHECKING:
    from safeformatter.config.models import UserConfigData


PropertyObserver = Callable[[str, Any], None]


class FormatController(StructlogMixin):
    """Drives discovery and one format run at a time."""

    def __init__(
        self,
        classifier: DiskClassifier,
        orchestrator: FormatOrchestrator,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__()
        self.classifier = classifier
        self.orchestrator = orchestrator
        self._clock = clock
        self._observers: list[PropertyObserver] = []

        self._disks: list[DiskDescriptor] = []
        self._selected: DiskDescriptor | None = None
        self._volume_label = ""
        self._confirmed = False
        self._busy = False
        self._progress = 0.0
        self._log_text = ""
        self._started_at: float | None = None
        self._elapsed = 0.0

    # Observers

    def subscribe(self, observer: PropertyObserver) -> None:
        """Register ``observer(property_name, value)`` for change notifications."""
        self._observers.append(observer)

    def unsubscribe(self, observer: PropertyObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _set(self, name: str, value: Any) -> None:
        setattr(self, f"_{name}", value)
        for observer in list(self._observers):
            try:
                observer(name, value)
            except Exception as e:
                exc_info = logging.getLogger().isEnabledFor(logging.DEBUG)
                self.logger.warning(
                    "observer_failed", property=name, error=str(e), exc_info=exc_info
                )

    # State

    @property
    def disks(self) -> list[DiskDescriptor]:
        return self._disks

    @property
    def selected(self) -> DiskDescriptor | None:
        return self._selected

    @property
    def volume_label(self) -> str:
        return self._volume_label

    @volume_label.setter
    def volume_label(self, value: str) -> None:
        self._set("volume_label", value or "")

    @property
    def confirmed(self) -> bool:
        return self._confirmed

    @confirmed.setter
    def confirmed(self, value: bool) -> None:
        self._set("confirmed", bool(value))

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def progress(self) -> float:
        return self._progress

    @property
    def log_text(self) -> str:
        return self._log_text

    @property
    def file_system_preview(self) -> FileSystem | None:
        return self._selected.recommended_file_system if self._selected else None

    @property
    def elapsed(self) -> float:
        """Seconds spent in the current run, or in the last one when idle."""
        if self._busy and self._started_at is not None:
            return self._clock() - self._started_at
        return self._elapsed

    # Actions

    def refresh(self) -> list[DiskDescriptor]:
        """Re-run discovery; a selection that disappeared is cleared.

        Raises:
            DiscoveryError: If the disk listing fails
        """
        disks = self.classifier.discover_removable_disks()
        self._set("disks", disks)

        if self._selected is not None:
            still_present = next(
                (d for d in disks if d.dedup_key == self._selected.dedup_key), None
            )
            if still_present is None:
                self.logger.info(
                    "selection_cleared", disk_index=self._selected.disk_index
                )
                self._set("confirmed", False)
            self._set("selected", still_present)

        return disks

    def select(self, disk_index: int) -> DiskDescriptor:
        """Select a discovered disk by index; confirmation is reset.

        Raises:
            ValueError: If no removable disk has this index
        """
        disk = next((d for d in self.disks if d.disk_index == disk_index), None)
        if disk is None:
            raise ValueError(f"Disk {disk_index} is not a removable disk")
        self._set("selected", disk)
        self._set("confirmed", False)
        return disk

    def can_start(self) -> bool:
        return self._selected is not None and self._confirmed and not self._busy

    async def start(self) -> FormatResult:
        """Run the format workflow on the selected disk.

        Raises:
            FormatBusyError: If a run is already active
            FormatNotReadyError: If no disk is selected or not confirmed
        """
        if self._busy:
            raise FormatBusyError("A format run is already in progress")
        if self._selected is None or not self._confirmed:
            raise FormatNotReadyError(
                "Select a disk and confirm the erase before starting"
            )

        disk = self._selected
        self._set("busy", True)
        self._set("progress", 0.0)
        self._set("log_text", "")
        self._started_at = self._clock()

        try:
            result = await self.orchestrator.run_format(
                disk,
                self._volume_label or None,
                on_log=self._append_log,
                on_progress=lambda fraction: self._set("progress", fraction),
            )
        finally:
            self._elapsed = self._clock() - self._started_at
            self._started_at = None
            self._set("busy", False)
            self._set("confirmed", False)

        if result.success:
            self._set("progress", 1.0)
        return result

    def _append_log(self, line: str) -> None:
        self._set("log_text", self._log_text + line + "\n")


def create_format_controller(
    user_config: "UserConfigData | None" = None,
) -> FormatController:
    """Create a controller wired to WMI discovery and diskpart.

    Raises:
        DiscoveryError: If the WMI device query is unavailable
    """
    from safeformatter.adapters.wmi_device_query import create_device_query
    from safeformatter.format.orchestrator import create_format_orchestrator

    classifier = DiskClassifier(create_device_query())
    return FormatController(classifier, create_format_orchestrator(user_config))
