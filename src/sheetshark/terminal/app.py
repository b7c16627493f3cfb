# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from sheetshark import state
from sheetshark.errors import ConfigurationError
from sheetshark.repository.configuration import CONFIGURATION_REPO
from sheetshark.terminal import configuration, day, entry, export
from sheetshark.terminal.custom_typer import OrderedAliasedTyperGroup

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="Sheet Shark - Timesheets with integrity checks and exports",
    no_args_is_help=True,
)
app.add_typer(entry.app, name="entry, e", help="Record and change entries")
app.add_typer(
    day.app, name="day, d", help="Show days and move them between states"
)
app.add_typer(export.app, name="export, x", help="Export days and bookings")
app.add_typer(configuration.app, name="config, c", help="Settings and projects")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
) -> None:
    """
    Sheet Shark - Timesheets with integrity checks and exports

    Global options that apply to all commands.
    """
    try:
        CONFIGURATION_REPO.get_config()
    except ConfigurationError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    if no_header:
        state.set_show_header(False)


def run() -> None:
    app()
