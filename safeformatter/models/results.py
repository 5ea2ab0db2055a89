"""Base result model and command execution result."""

from datetime import datetime
from typing import Any

from pydantic import ConfigDict, Field, model_validator

from safeformatter.core.structlog_logger import get_struct_logger
from safeformatter.models.base import SafeFormatterBaseModel


logger = get_struct_logger(__name__)


class BaseResult(SafeFormatterBaseModel):
    """Base class for all operation results."""

    success: bool
    timestamp: datetime = Field(default_factory=datetime.now)
    messages: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_success_consistency(self) -> "BaseResult":
        """Ensure success flag is consistent with errors."""
        if self.errors and self.success:
            logger.warning("result_success_mismatch", error_count=len(self.errors))
            # Bypass validate_assignment to avoid re-entering this validator
            object.__setattr__(self, "success", False)
        return self

    def add_error(self, error: str) -> None:
        """Add an error message and mark the result as failed."""
        self.errors.append(error)
        logger.error("result_error_added", error=error)
        self.success = False

    def is_success(self) -> bool:
        """Check if the operation was successful."""
        return self.success and not self.errors

    def get_summary(self) -> dict[str, Any]:
        """Get a summary of the result."""
        return {
            "success": self.success,
            "timestamp": self.timestamp.isoformat(),
            "message_count": len(self.messages),
            "error_count": len(self.errors),
            "errors": self.errors if self.errors else None,
        }


class CommandResult(SafeFormatterBaseModel):
    """Exit status and combined output of one child process."""

    # Output lines keep their indentation
    model_config = ConfigDict(str_strip_whitespace=False)

    exit_code: int
    lines: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    @property
    def output(self) -> str:
        """Combined stdout/stderr text in arrival order."""
        return "\n".join(self.lines)


__all__ = ["BaseResult", "CommandResult"]
