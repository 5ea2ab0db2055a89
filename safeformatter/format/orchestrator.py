"""Destructive erase-and-reformat workflow for one removable disk.

Steps run strictly in order and the run stops at the first failing step.
Whatever happens, the run log is written to a timestamped file and the
caller gets a single FormatResult; exceptions never escape ``run_format``
apart from task cancellation.
"""

import asyncio
import os
import tempfile
import traceback
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from safeformatter.adapters.diskpart import DEFAULT_DISKPART, DiskpartRunner
from safeformatter.core.errors import CommandFailed
from safeformatter.core.structlog_logger import StructlogMixin
from safeformatter.format.error_translator import translate
from safeformatter.format.job import (
    FormatJob,
    JobOutcome,
    LogCallback,
    ProgressCallback,
)
from safeformatter.format.labels import normalize_label
from safeformatter.format.models import FormatResult
from safeformatter.format.steps import (
    FORMAT_STEPS,
    TOTAL_STEPS,
    FormatStep,
    StepDescriptor,
)
from safeformatter.models.disk import DiskDescriptor
from safeformatter.protocols.command_executor_protocol import (
    CommandExecutorProtocol,
)


if TYPE_CHECKING:
    from safeformatter.config.models import UserConfigData


LOG_FILE_PREFIX = "SafeFormatter"


def log_file_name(disk_index: int, started: datetime) -> str:
    """``SafeFormatter_<YYYYMMDD_HHMMSS>_Disk<N>.log``"""
    return f"{LOG_FILE_PREFIX}_{started:%Y%m%d_%H%M%S}_Disk{disk_index}.log"


def format_duration(seconds: float) -> str:
    """Format a duration as ``MM:SS``."""
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


class FormatOrchestrator(StructlogMixin):
    """Runs the five-step format workflow against a removable disk.

    The orchestrator holds no per-run state; each call to ``run_format``
    creates its own FormatJob.
    """

    service_name = "format"

    def __init__(
        self,
        executor: CommandExecutorProtocol,
        log_dir: Path,
        diskpart_path: str = DEFAULT_DISKPART,
        script_dir: Path | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        super().__init__()
        self.runner = DiskpartRunner(executor, diskpart_path, script_dir)
        self.log_dir = Path(log_dir)
        self._clock = clock

    async def run_format(
        self,
        disk: DiskDescriptor,
        label: str | None = None,
        on_log: LogCallback | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> FormatResult:
        """Erase, partition and format ``disk``.

        Args:
            disk: Target removable disk from discovery
            label: Optional volume label applied by the format step
            on_log: Receives each log line as it is produced
            on_progress: Receives increasing fractions of completed steps

        Returns:
            FormatResult with the user message, full log and log file path
        """
        started = self._clock()
        job = FormatJob(disk=disk, on_log=on_log, on_progress=on_progress)
        log_path = self.log_dir / log_file_name(disk.disk_index, started)
        file_system = disk.recommended_file_system
        op_logger = self.log_operation(
            "run_format", disk_index=disk.disk_index, file_system=file_system.value
        )
        op_logger.info("format_started", model=disk.model, size=disk.size_bytes)

        current: StepDescriptor | None = None
        try:
            job.label = normalize_label(label, file_system)
            for position, descriptor in enumerate(FORMAT_STEPS, start=1):
                current = descriptor
                await self._run_step(job, descriptor, position)
                job.completed_steps = position
                job.report_progress(TOTAL_STEPS)
        except CommandFailed as e:
            op_logger.warning(
                "format_step_failed",
                step=current.step.value if current else None,
                exit_code=e.exit_code,
            )
            return await self._finish_failed(job, e.output, current, started, log_path)
        except asyncio.CancelledError:
            job.log("Run cancelled")
            await self._write_log(job.log_text, log_path)
            raise
        except Exception as e:
            self.log_error_with_context(
                "format_unexpected_error",
                e,
                step=current.step.value if current else None,
            )
            job.log(f"Unexpected error: {e}")
            job.log(traceback.format_exc().rstrip())
            return await self._finish_failed(job, str(e), current, started, log_path)

        duration = self._elapsed(started)
        job.outcome = JobOutcome.SUCCEEDED
        job.log(f"Completed successfully in {format_duration(duration)}")
        written = await self._write_log(job.log_text, log_path)

        message = (
            f"{disk.model} {disk.size_display} successfully formatted as "
            f"{file_system.value}."
        )
        op_logger.info("format_succeeded", duration=duration, log_file=written)
        return FormatResult(
            success=True,
            user_message=message,
            log_text=job.log_text,
            log_file_path=written,
            disk_index=disk.disk_index,
            file_system=file_system,
            completed_steps=job.completed_steps,
            duration_seconds=duration,
            messages=[message],
        )

    async def _run_step(
        self, job: FormatJob, descriptor: StepDescriptor, position: int
    ) -> None:
        """Run one step, logging its marker and raw output.

        Raises:
            CommandFailed: If the step's command exits non-zero
        """
        job.log(f">> [{position}/{TOTAL_STEPS}] {descriptor.title}")
        self.logger.info(
            "format_step_started", step=descriptor.step.value, position=position
        )

        commands = descriptor.commands_for(job.disk, job.label)
        if not commands:
            job.log("ready")
            return

        result = await self.runner.run_script(job.disk.disk_index, commands)
        job.log(result.output)
        self.logger.info(
            "format_step_finished",
            step=descriptor.step.value,
            exit_code=result.exit_code,
        )

        if not result.ok:
            raise CommandFailed(
                f"diskpart ({descriptor.step.value})",
                result.exit_code,
                result.output,
                {"disk_index": job.disk.disk_index, "commands": commands},
            )

        if descriptor.step is FormatStep.FINALIZE and job.label:
            job.log(f'Volume label "{job.label}" applied by the format step')

    async def _finish_failed(
        self,
        job: FormatJob,
        raw: str,
        step: StepDescriptor | None,
        started: datetime,
        log_path: Path,
    ) -> FormatResult:
        category = translate(raw)
        job.outcome = JobOutcome.FAILED
        job.error_category = category
        written = await self._write_log(job.log_text, log_path)

        result = FormatResult(
            success=False,
            user_message=category.message,
            log_text=job.log_text,
            log_file_path=written,
            disk_index=job.disk.disk_index,
            file_system=job.disk.recommended_file_system,
            error_category=category,
            failed_step=step.step if step else None,
            completed_steps=job.completed_steps,
            duration_seconds=self._elapsed(started),
        )
        result.add_error(category.message)
        return result

    async def _write_log(self, text: str, log_path: Path) -> str:
        return await asyncio.to_thread(self._write_log_sync, text, log_path)

    def _write_log_sync(self, text: str, log_path: Path) -> str:
        """Write the run log atomically, falling back to the temp directory.

        Returns:
            Path actually written, or an empty string if every attempt failed
        """
        candidates = [log_path, Path(tempfile.gettempdir()) / log_path.name]
        for candidate in candidates:
            partial = candidate.with_name(candidate.name + ".partial")
            try:
                candidate.parent.mkdir(parents=True, exist_ok=True)
                partial.write_text(text, encoding="utf-8")
                os.replace(partial, candidate)
            except OSError as e:
                self.logger.warning(
                    "run_log_write_failed", path=str(candidate), error=str(e)
                )
                continue
            self.logger.debug("run_log_written", path=str(candidate))
            return str(candidate)
        return ""

    def _elapsed(self, started: datetime) -> float:
        return max((self._clock() - started).total_seconds(), 0.0)


def create_format_orchestrator(
    user_config: "UserConfigData | None" = None,
    executor: CommandExecutorProtocol | None = None,
) -> FormatOrchestrator:
    """Create a format orchestrator from user settings.

    Args:
        user_config: Settings; defaults are used when omitted
        executor: Command executor; the subprocess-backed one by default

    Returns:
        Configured FormatOrchestrator
    """
    from safeformatter.adapters.command_executor import create_command_executor
    from safeformatter.config.models import UserConfigData

    config = user_config or UserConfigData()
    return FormatOrchestrator(
        executor=executor or create_command_executor(),
        log_dir=config.log_dir,
        diskpart_path=config.diskpart_path,
        script_dir=config.script_dir,
    )
