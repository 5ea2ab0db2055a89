"""Ephemeral state of a single format run."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from safeformatter.core.structlog_logger import get_struct_logger
from safeformatter.format.error_translator import ErrorCategory
from safeformatter.models.disk import DiskDescriptor


logger = get_struct_logger(__name__)

LogCallback = Callable[[str], None]
ProgressCallback = Callable[[float], None]


class JobOutcome(str, Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class FormatJob:
    """Created at workflow start, dropped when the run ends. Never reused."""

    disk: DiskDescriptor
    label: str | None = None
    on_log: LogCallback | None = None
    on_progress: ProgressCallback | None = None
    log_lines: list[str] = field(default_factory=list)
    completed_steps: int = 0
    outcome: JobOutcome = JobOutcome.PENDING
    error_category: ErrorCategory | None = None
    _last_progress: float = 0.0

    def log(self, text: str) -> None:
        """Append to the run log and forward each line to the log callback."""
        for line in text.splitlines() or [""]:
            self.log_lines.append(line)
            if self.on_log is not None:
                _notify(self.on_log, line, "log")

    def report_progress(self, total_steps: int) -> None:
        """Emit ``completed_steps / total_steps`` if it moved forward."""
        fraction = self.completed_steps / total_steps
        if fraction <= self._last_progress:
            return
        self._last_progress = fraction
        if self.on_progress is not None:
            _notify(self.on_progress, fraction, "progress")

    @property
    def log_text(self) -> str:
        return "\n".join(self.log_lines) + ("\n" if self.log_lines else "")


def _notify(callback: Callable[..., None], value: object, kind: str) -> None:
    """Observer failures must not abort a destructive run."""
    try:
        callback(value)
    except Exception as e:
        exc_info = logging.getLogger().isEnabledFor(logging.DEBUG)
        logger.warning("callback_failed", kind=kind, error=str(e), exc_info=exc_info)
