"""The fixed, ordered step table of the format workflow."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from safeformatter.models.disk import DiskDescriptor


class FormatStep(str, Enum):
    """Named workflow steps in execution order."""

    LOCK = "lock"
    WIPE_ALL = "wipe_all"
    CREATE_PARTITION = "create_partition"
    FORMAT = "format"
    FINALIZE = "finalize"


CommandBuilder = Callable[[DiskDescriptor, str | None], list[str]]


@dataclass(frozen=True)
class StepDescriptor:
    """One workflow step and the diskpart commands it issues.

    A builder returning no commands marks a step that runs no process.
    """

    step: FormatStep
    title: str
    build_commands: CommandBuilder

    def commands_for(self, disk: DiskDescriptor, label: str | None) -> list[str]:
        return self.build_commands(disk, label)


def _lock_commands(disk: DiskDescriptor, label: str | None) -> list[str]:
    return []


def _wipe_commands(disk: DiskDescriptor, label: str | None) -> list[str]:
    return ["attributes disk clear readonly", "clean all"]


def _partition_commands(disk: DiskDescriptor, label: str | None) -> list[str]:
    return ["create partition primary", "select partition 1", "active"]


def _format_commands(disk: DiskDescriptor, label: str | None) -> list[str]:
    # Full format: never pass "quick"
    command = f"format fs={disk.recommended_file_system.diskpart_token}"
    if label:
        command += f' label="{label}"'
    return ["select partition 1", command]


def _finalize_commands(disk: DiskDescriptor, label: str | None) -> list[str]:
    return ["select partition 1", "assign"]


FORMAT_STEPS: tuple[StepDescriptor, ...] = (
    StepDescriptor(FormatStep.LOCK, "Lock device", _lock_commands),
    StepDescriptor(FormatStep.WIPE_ALL, "Wipe all data (clean all)", _wipe_commands),
    StepDescriptor(
        FormatStep.CREATE_PARTITION, "Create primary partition", _partition_commands
    ),
    StepDescriptor(FormatStep.FORMAT, "Format partition", _format_commands),
    StepDescriptor(
        FormatStep.FINALIZE, "Assign drive letter and label", _finalize_commands
    ),
)

TOTAL_STEPS = len(FORMAT_STEPS)


def get_step(step: FormatStep) -> StepDescriptor:
    """Look up the descriptor of a step."""
    for descriptor in FORMAT_STEPS:
        if descriptor.step is step:
            return descriptor
    raise KeyError(step)
