"""Decorators for CLI commands."""

from safeformatter.cli.decorators.error_handling import handle_errors


__all__ = ["handle_errors"]
