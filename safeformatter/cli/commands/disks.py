"""Removable disk listing command."""

import json
from typing import Annotated

import typer

from safeformatter.cli.app import AppContext
from safeformatter.cli.decorators import handle_errors
from safeformatter.cli.helpers.output import (
    build_disk_table,
    get_console,
    print_info_message,
)


@handle_errors
def list_disks(
    ctx: typer.Context,
    as_json: Annotated[
        bool, typer.Option("--json", help="Print the disks as JSON")
    ] = False,
) -> None:
    """List removable USB and SD disks that may be formatted.

    Internal disks and disks whose bus reports SCSI, IDE, SATA or RAID are
    never listed.
    """
    from safeformatter.controller import create_format_controller

    app_ctx: AppContext = ctx.obj
    controller = create_format_controller(app_ctx.user_config.config)
    disks = controller.refresh()

    if as_json:
        print(json.dumps([d.to_dict_full() for d in disks], indent=2))
        return

    if not disks:
        print_info_message("No removable disks found")
        return

    get_console().print(build_disk_table(disks))


def register_commands(app: typer.Typer) -> None:
    """Register disk commands with the main app.

    Args:
        app: The main Typer app
    """
    app.command(name="list")(list_disks)
