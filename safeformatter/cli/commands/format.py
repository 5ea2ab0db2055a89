"""Format command: erase and reformat one removable disk."""

import asyncio
from typing import Annotated, Any

import typer
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from safeformatter.cli.app import AppContext
from safeformatter.cli.decorators import handle_errors
from safeformatter.cli.helpers.output import (
    Colors,
    get_console,
    print_error_message,
    print_info_message,
    print_list_item,
    print_success_message,
    print_warning_message,
)
from safeformatter.core.errors import LabelError
from safeformatter.format.labels import normalize_label
from safeformatter.format.steps import TOTAL_STEPS


STEP_MARKER = ">> "


@handle_errors
def format_disk(
    ctx: typer.Context,
    disk_index: Annotated[
        int, typer.Argument(help="Disk index as shown by 'safeformatter list'")
    ],
    label: Annotated[
        str | None,
        typer.Option("--label", "-l", help="Volume label for the new filesystem"),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip the erase confirmation prompt"),
    ] = False,
) -> None:
    """Erase a removable disk and format it as FAT32 or exFAT.

    Disks up to 32 GiB get FAT32, larger ones exFAT. ALL DATA on the disk is
    destroyed. A log file is written for every run.
    """
    from safeformatter.controller import create_format_controller

    app_ctx: AppContext = ctx.obj
    controller = create_format_controller(app_ctx.user_config.config)
    controller.refresh()

    try:
        disk = controller.select(disk_index)
    except ValueError as e:
        print_error_message(str(e))
        print_info_message("Run 'safeformatter list' to see removable disks")
        raise typer.Exit(1) from e

    try:
        controller.volume_label = (
            normalize_label(label, disk.recommended_file_system) or ""
        )
    except LabelError as e:
        raise typer.BadParameter(str(e), param_hint="--label") from e

    print_warning_message(f"ALL DATA on disk {disk.disk_index} will be erased:")
    print_list_item(disk.display_name)
    print_list_item(f"Target filesystem: {disk.recommended_file_system.value}")
    if controller.volume_label:
        print_list_item(f"Volume label: {controller.volume_label}")

    if not yes:
        typer.confirm("Continue?", abort=True)
    controller.confirmed = True

    console = get_console()
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        TimeElapsedColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("Starting", total=TOTAL_STEPS)
        shown = 0

        def on_change(name: str, value: Any) -> None:
            nonlocal shown
            if name == "progress":
                progress.update(task, completed=round(value * TOTAL_STEPS))
                return
            if name != "log_text":
                return

            fresh, shown = value[shown:], len(value)
            for line in fresh.splitlines():
                if line.startswith(STEP_MARKER):
                    progress.update(task, description=line[len(STEP_MARKER) :])
                    progress.console.print(line, style=Colors.PRIMARY, markup=False)
                elif app_ctx.verbose and line:
                    progress.console.print(line, style=Colors.MUTED, markup=False)

        controller.subscribe(on_change)
        try:
            result = asyncio.run(controller.start())
        finally:
            controller.unsubscribe(on_change)

    if result.success:
        print_success_message(result.user_message)
    else:
        print_error_message(result.user_message)

    if result.log_file_path:
        print_info_message(f"Log file: {result.log_file_path}")
    else:
        print_warning_message("The run log could not be written")

    if not result.success:
        raise typer.Exit(1)


def register_commands(app: typer.Typer) -> None:
    """Register the format command with the main app.

    Args:
        app: The main Typer app
    """
    app.command(name="format")(format_disk)
