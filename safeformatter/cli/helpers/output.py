"""Helper functions for CLI output formatting with Rich integration."""

from rich.console import Console
from rich.table import Table

from safeformatter.models.disk import DiskDescriptor


class Colors:
    """Standardized color palette for CLI output."""

    SUCCESS = "bold green"
    ERROR = "bold red"
    WARNING = "bold yellow"
    INFO = "bold blue"
    PRIMARY = "cyan"
    MUTED = "dim"
    HEADER = "bold cyan"


class Icons:
    CHECKMARK = "✓"
    CROSS = "✗"
    WARNING = "!"
    INFO = "i"
    BULLET = "•"


_console: Console | None = None


def get_console() -> Console:
    """Shared console; created lazily so tests can capture stdout."""
    global _console
    if _console is None:
        _console = Console(highlight=False)
    return _console


def print_success_message(message: str) -> None:
    get_console().print(f"[{Colors.SUCCESS}]{Icons.CHECKMARK}[/] {message}")


def print_error_message(message: str) -> None:
    get_console().print(f"[{Colors.ERROR}]{Icons.CROSS}[/] {message}")


def print_warning_message(message: str) -> None:
    get_console().print(f"[{Colors.WARNING}]{Icons.WARNING}[/] {message}")


def print_info_message(message: str) -> None:
    get_console().print(f"[{Colors.INFO}]{Icons.INFO}[/] {message}")


def print_list_item(item: str, indent: int = 1) -> None:
    """Print a list item with bullet and indentation."""
    get_console().print(f"{' ' * (indent * 2)}{Icons.BULLET} {item}")


def build_disk_table(disks: list[DiskDescriptor]) -> Table:
    """Rich table of removable disks, one row per descriptor."""
    table = Table(
        title="Removable disks", show_header=True, header_style=Colors.HEADER
    )
    table.add_column("Disk", style=Colors.PRIMARY, justify="right", no_wrap=True)
    table.add_column("Name", style="bold")
    table.add_column("Manufacturer")
    table.add_column("Model")
    table.add_column("Serial", style=Colors.MUTED)
    table.add_column("Current FS")
    table.add_column("Size", justify="right")
    table.add_column("Target FS", style=Colors.SUCCESS)

    for disk in disks:
        table.add_row(
            str(disk.disk_index),
            disk.display_name,
            disk.manufacturer or "-",
            disk.model or "-",
            disk.serial_identity or "-",
            disk.file_system_label or "-",
            disk.size_display,
            disk.recommended_file_system.value,
        )
    return table
