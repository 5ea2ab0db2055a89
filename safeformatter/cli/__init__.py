"""Command-line interface for SafeFormatter."""

from safeformatter.cli.app import app, main


__all__ = ["app", "main"]
