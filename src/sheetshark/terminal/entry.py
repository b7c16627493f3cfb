# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer

from sheetshark.errors import TimesheetError
from sheetshark.repository.timesheet import TIMESHEET_REPO
from sheetshark.service import timesheet as timesheet_service
from sheetshark.service.project import get_project_directory
from sheetshark.terminal.completion import complete_project, complete_ticket
from sheetshark.terminal.custom_typer import AliasedTyperGroup
from sheetshark.terminal.parse import (
    DAY_HELP,
    parse_day,
    parse_duration,
    parse_optional_key,
    parse_time,
    resolve_entry_reference,
)
from sheetshark.time import time_to_str, today_local
from sheetshark.version.version import Version
from sheetshark.view import timesheet as timesheet_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("add, a", no_args_is_help=True)
def add(
    start: Annotated[
        pendulum.Time,
        typer.Argument(parser=parse_time, help="start time, (H)H:mm"),
    ],
    duration: Annotated[
        int,
        typer.Argument(parser=parse_duration, help="minutes (90), H:mm or 1h30m"),
    ],
    description: str,
    day: Annotated[
        Optional[pendulum.Date],
        typer.Option("--day", "-d", parser=parse_day, help=DAY_HELP),
    ] = None,
    project: Annotated[
        Optional[str],
        typer.Option(
            "--project",
            "-p",
            help="project key, the default project is used when omitted",
            autocompletion=complete_project,
        ),
    ] = None,
    ticket: Annotated[
        Optional[str],
        typer.Option("--ticket", "-t", autocompletion=complete_ticket),
    ] = None,
) -> None:
    """
    Record a work entry.
    """
    entry_day = day if day is not None else today_local()

    try:
        entry = timesheet_service.add_entry(
            TIMESHEET_REPO,
            entry_day,
            start,
            duration,
            description,
            project_key=parse_optional_key(project) or "",
            ticket_key=parse_optional_key(ticket),
        )
    except TimesheetError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    Version().checkpoint_day(
        "add entry", entry_day, f"{time_to_str(start)} {description}"
    )

    timesheet_report.entry_view(entry, get_project_directory())


@app.command("edit, m", no_args_is_help=True)
def edit(
    reference: Annotated[
        str, typer.Argument(help="position in the day listing or entry id")
    ],
    day: Annotated[
        Optional[pendulum.Date],
        typer.Option("--day", "-d", parser=parse_day, help=DAY_HELP),
    ] = None,
    start: Annotated[
        Optional[pendulum.Time],
        typer.Option("--start", "-s", parser=parse_time, help="(H)H:mm"),
    ] = None,
    duration: Annotated[
        Optional[int],
        typer.Option(
            "--duration", "-du", parser=parse_duration, help="minutes, H:mm or 1h30m"
        ),
    ] = None,
    description: Annotated[
        Optional[str], typer.Option("--description", "-de")
    ] = None,
    project: Annotated[
        Optional[str],
        typer.Option(
            "--project",
            "-p",
            help="project key, pass an empty string to use the default project",
            autocompletion=complete_project,
        ),
    ] = None,
    ticket: Annotated[
        Optional[str],
        typer.Option("--ticket", "-t", autocompletion=complete_ticket),
    ] = None,
    remove_ticket: Annotated[bool, typer.Option("--remove-ticket", "-rt")] = False,
) -> None:
    """
    Change an entry of a day.
    """
    entry_day = day if day is not None else today_local()

    try:
        entries = TIMESHEET_REPO.entries_for(entry_day)
        entry_id = resolve_entry_reference(entries, reference)
        entry = timesheet_service.edit_entry(
            TIMESHEET_REPO,
            entry_day,
            entry_id,
            start_time=start,
            duration_mins=duration,
            description=description,
            project_key=(parse_optional_key(project) or "")
            if project is not None
            else None,
            ticket_key=parse_optional_key(ticket),
            remove_ticket_key=remove_ticket,
        )
    except TimesheetError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    Version().checkpoint_day("edit entry", entry_day, entry["id"])

    timesheet_report.entry_view(entry, get_project_directory())


@app.command("remove, rm", no_args_is_help=True)
def remove(
    reference: Annotated[
        str, typer.Argument(help="position in the day listing or entry id")
    ],
    day: Annotated[
        Optional[pendulum.Date],
        typer.Option("--day", "-d", parser=parse_day, help=DAY_HELP),
    ] = None,
) -> None:
    """
    Delete an entry of a day.
    """
    entry_day = day if day is not None else today_local()

    try:
        entries = TIMESHEET_REPO.entries_for(entry_day)
        entry_id = resolve_entry_reference(entries, reference)
        entry = timesheet_service.remove_entry(TIMESHEET_REPO, entry_day, entry_id)
    except TimesheetError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    Version().checkpoint_day("remove entry", entry_day, entry["description"])

    typer.echo(
        f"Removed {time_to_str(entry['start_time'])} {entry['description']}"
    )


@app.command("tickets, tk")
def tickets(query: Annotated[str, typer.Argument()] = "") -> None:
    """
    List recently used ticket keys, most used first.
    """
    try:
        suggestions = complete_ticket(query)
    except TimesheetError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    for ticket_key in suggestions:
        typer.echo(ticket_key)
