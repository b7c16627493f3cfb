# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer

from sheetshark.errors import TimesheetError
from sheetshark.repository.timesheet import TIMESHEET_REPO
from sheetshark.service import timesheet as timesheet_service
from sheetshark.service.project import get_project_directory
from sheetshark.service.summary import summarize
from sheetshark.terminal.custom_typer import AliasedTyperGroup
from sheetshark.terminal.parse import DAY_HELP, parse_day
from sheetshark.time import today_local
from sheetshark.version.version import Version
from sheetshark.view import timesheet as timesheet_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("show, s")
def show(
    day: Annotated[
        Optional[pendulum.Date], typer.Argument(parser=parse_day, help=DAY_HELP)
    ] = None,
) -> None:
    """
    Show the entries of a day.
    """
    shown_day = day if day is not None else today_local()
    directory = get_project_directory()

    try:
        timesheet = timesheet_service.get_day(TIMESHEET_REPO, shown_day)
    except TimesheetError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    summary = summarize(timesheet["entries"], directory)
    timesheet_report.timesheet_view(timesheet, summary, directory)


@app.command("finalize, f")
def finalize(
    day: Annotated[
        Optional[pendulum.Date], typer.Argument(parser=parse_day, help=DAY_HELP)
    ] = None,
) -> None:
    """
    Mark a day as exported. Its entries can't change until it is reopened.
    """
    finalized_day = day if day is not None else today_local()

    try:
        timesheet = timesheet_service.mark_exported(TIMESHEET_REPO, finalized_day)
    except TimesheetError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    Version().checkpoint_day("mark exported", finalized_day)

    directory = get_project_directory()
    timesheet_report.timesheet_view(
        timesheet, summarize(timesheet["entries"], directory), directory
    )


@app.command("reopen, r")
def reopen(
    day: Annotated[
        Optional[pendulum.Date], typer.Argument(parser=parse_day, help=DAY_HELP)
    ] = None,
) -> None:
    """
    Reopen an exported day for corrections.
    """
    reopened_day = day if day is not None else today_local()

    try:
        timesheet = timesheet_service.reopen(TIMESHEET_REPO, reopened_day)
    except TimesheetError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    Version().checkpoint_day("reopen", reopened_day)

    directory = get_project_directory()
    timesheet_report.timesheet_view(
        timesheet, summarize(timesheet["entries"], directory), directory
    )


@app.command("month, mo")
def month(
    day: Annotated[
        Optional[pendulum.Date], typer.Argument(parser=parse_day, help=DAY_HELP)
    ] = None,
) -> None:
    """
    Show the status and worked time of every day in a month.
    """
    month_day = day if day is not None else today_local()
    directory = get_project_directory()

    try:
        timesheets = TIMESHEET_REPO.get_timesheets_of_month(month_day)
    except TimesheetError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    summaries = {
        timesheet["day"]: summarize(timesheet["entries"], directory)
        for timesheet in timesheets
    }
    timesheet_report.month_view(month_day, timesheets, summaries)
