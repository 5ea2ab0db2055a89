"""Result model for format workflow runs."""

from pydantic import ConfigDict, Field

from safeformatter.format.error_translator import ErrorCategory
from safeformatter.format.steps import FormatStep
from safeformatter.models.disk import FileSystem
from safeformatter.models.results import BaseResult


class FormatResult(BaseResult):
    """Outcome of one format run.

    Every run, successful or not, carries a user message and the path of the
    log file written for it.
    """

    # Log text keeps its indentation; enum fields stay enum members
    model_config = ConfigDict(str_strip_whitespace=False, use_enum_values=False)

    user_message: str = ""
    log_text: str = ""
    log_file_path: str = ""
    disk_index: int | None = None
    file_system: FileSystem | None = None
    error_category: ErrorCategory | None = None
    failed_step: FormatStep | None = None
    completed_steps: int = Field(default=0, ge=0)
    duration_seconds: float = Field(default=0.0, ge=0.0)

    def as_tuple(self) -> tuple[bool, str, str, str]:
        """Return ``(success, user_message, log_text, log_file_path)``."""
        return (self.success, self.user_message, self.log_text, self.log_file_path)


__all__ = ["FormatResult"]
