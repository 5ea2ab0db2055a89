"""Runs diskpart command scripts against a single physical disk."""

import logging
import tempfile
import uuid
from collections.abc import Sequence
from pathlib import Path

from safeformatter.core.structlog_logger import get_struct_logger
from safeformatter.models.results import CommandResult
from safeformatter.protocols.command_executor_protocol import (
    CommandExecutorProtocol,
)


logger = get_struct_logger(__name__)

DEFAULT_DISKPART = "diskpart.exe"


def build_script(disk_index: int, commands: Sequence[str]) -> str:
    """Build the script text; every script first selects the target disk."""
    lines = [f"select disk {disk_index}", *commands]
    return "\n".join(lines) + "\n"


class DiskpartRunner:
    """Writes a temporary diskpart script and executes it.

    The script file is removed after the run whatever the outcome; a failed
    removal is only logged.
    """

    def __init__(
        self,
        executor: CommandExecutorProtocol,
        diskpart_path: str = DEFAULT_DISKPART,
        script_dir: Path | None = None,
    ) -> None:
        self.executor = executor
        self.diskpart_path = diskpart_path
        self.script_dir = script_dir

    def _script_path(self) -> Path:
        directory = self.script_dir or Path(tempfile.gettempdir())
        return directory / f"diskpart_{uuid.uuid4().hex}.txt"

    async def run_script(
        self, disk_index: int, commands: Sequence[str]
    ) -> CommandResult:
        """Run ``commands`` against disk ``disk_index``.

        Args:
            disk_index: Target physical disk
            commands: diskpart commands after ``select disk``

        Returns:
            CommandResult of the diskpart process

        Raises:
            LaunchError: If diskpart could not be started
            OSError: If the script file could not be written
        """
        script_path = self._script_path()
        script = build_script(disk_index, commands)
        script_path.parent.mkdir(parents=True, exist_ok=True)
        script_path.write_text(script, encoding="ascii")
        logger.debug(
            "diskpart_script_written",
            path=str(script_path),
            disk_index=disk_index,
            commands=list(commands),
        )

        try:
            return await self.executor.run(
                self.diskpart_path, ["/s", str(script_path)]
            )
        finally:
            try:
                script_path.unlink()
            except OSError as e:
                exc_info = logging.getLogger().isEnabledFor(logging.DEBUG)
                logger.debug(
                    "diskpart_script_cleanup_failed",
                    path=str(script_path),
                    error=str(e),
                    exc_info=exc_info,
                )
