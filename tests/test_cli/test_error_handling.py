"""Tests for the CLI error handling decorator."""

import pytest
import typer

from safeformatter.cli.decorators.error_handling import (
    PASSTHROUGH_ERRORS,
    handle_errors,
)
from safeformatter.core.errors import DiscoveryError


def _raising(error: BaseException):
    @handle_errors
    def command() -> None:
        raise error

    return command


def test_exit_keeps_its_code():
    with pytest.raises(typer.Exit) as exc_info:
        _raising(typer.Exit(3))()

    assert exc_info.value.exit_code == 3


def test_abort_passes_through():
    with pytest.raises(typer.Abort):
        _raising(typer.Abort())()


def test_bad_parameter_passes_through(capsys):
    with pytest.raises(typer.BadParameter):
        _raising(typer.BadParameter("bad label", param_hint="--label"))()

    assert "Unexpected error" not in capsys.readouterr().out


def test_usage_error_base_is_passed_through():
    assert any(
        issubclass(typer.BadParameter, cls) and cls is not typer.BadParameter
        for cls in PASSTHROUGH_ERRORS
    )


def test_domain_error_becomes_exit_1(capsys):
    with pytest.raises(typer.Exit) as exc_info:
        _raising(DiscoveryError("WMI is not available"))()

    assert exc_info.value.exit_code == 1
    assert "WMI is not available" in capsys.readouterr().out


def test_unexpected_error_becomes_exit_1(capsys):
    with pytest.raises(typer.Exit) as exc_info:
        _raising(KeyError("boom"))()

    assert exc_info.value.exit_code == 1
    assert "Unexpected error" in capsys.readouterr().out
