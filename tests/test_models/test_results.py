"""Tests for result models."""

from safeformatter.format.error_translator import ErrorCategory
from safeformatter.format.models import FormatResult
from safeformatter.format.steps import FormatStep
from safeformatter.models.disk import FileSystem
from safeformatter.models.results import CommandResult


def test_command_result_output_joins_lines():
    result = CommandResult(exit_code=0, lines=["first", "second"])

    assert result.ok is True
    assert result.output == "first\nsecond"


def test_command_result_non_zero_is_not_ok():
    assert CommandResult(exit_code=1).ok is False
    assert CommandResult(exit_code=1).output == ""


def test_add_error_marks_result_failed():
    result = FormatResult(success=True, user_message="done")
    result.add_error("boom")

    assert result.success is False
    assert result.is_success() is False
    assert result.get_summary()["error_count"] == 1


def test_success_with_errors_is_corrected():
    result = FormatResult(success=True, errors=["boom"])
    assert result.success is False


def test_format_result_as_tuple():
    result = FormatResult(
        success=False,
        user_message="The medium is write-protected.",
        log_text="step one\nstep two\n",
        log_file_path="/tmp/SafeFormatter.log",
        error_category=ErrorCategory.WRITE_PROTECTED,
    )

    assert result.as_tuple() == (
        False,
        "The medium is write-protected.",
        "step one\nstep two\n",
        "/tmp/SafeFormatter.log",
    )
    assert result.error_category == ErrorCategory.WRITE_PROTECTED


def test_format_result_keeps_enum_members():
    result = FormatResult(
        success=False,
        file_system=FileSystem.FAT32,
        error_category=ErrorCategory.ACCESS_DENIED,
        failed_step=FormatStep.WIPE_ALL,
    )

    assert isinstance(result.error_category, ErrorCategory)
    assert result.error_category.message == ErrorCategory.ACCESS_DENIED.message
    assert result.failed_step is FormatStep.WIPE_ALL
    assert result.file_system is FileSystem.FAT32
    assert result.model_dump(mode="json")["error_category"] == "access_denied"
