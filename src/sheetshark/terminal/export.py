# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Callable, Optional

import pendulum
import typer

from sheetshark import configuration
from sheetshark.errors import TimesheetError
from sheetshark.export.csv_file import export_to_csv
from sheetshark.export.json_file import export_to_json
from sheetshark.model.export import ExportResult
from sheetshark.repository.configuration import CONFIGURATION_REPO
from sheetshark.repository.timesheet import TIMESHEET_REPO
from sheetshark.service import timesheet as timesheet_service
from sheetshark.service.booking import booking_links
from sheetshark.service.defrag import defragment
from sheetshark.service.export import export_day
from sheetshark.service.project import get_project_directory
from sheetshark.service.summary import summarize
from sheetshark.terminal.custom_typer import AliasedTyperGroup
from sheetshark.terminal.parse import DAY_HELP, parse_day
from sheetshark.time import today_local
from sheetshark.version.version import Version
from sheetshark.view import export as export_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def __run_export(day: pendulum.Date) -> ExportResult:
    config = CONFIGURATION_REPO.get_config()
    try:
        return export_day(
            TIMESHEET_REPO,
            get_project_directory(),
            day,
            expected_minutes=config["expected_daily_minutes"],
        )
    except TimesheetError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)


def __write_export(
    day: Optional[pendulum.Date],
    finalize: bool,
    writer: Callable[[ExportResult, Path], Path],
) -> None:
    export_day_value = day if day is not None else today_local()

    result = __run_export(export_day_value)
    try:
        file_path = writer(result, configuration.DATA_EXPORTS_DIR)
    except TimesheetError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    if finalize:
        try:
            result["status"] = timesheet_service.mark_exported(
                TIMESHEET_REPO, export_day_value
            )["status"]
        except TimesheetError as e:
            typer.echo(f"Error: {e}")
            raise typer.Exit(1)

    Version().checkpoint_day("export", export_day_value, file_path.name)

    export_report.export_view(result)
    export_report.export_file_view(file_path)


@app.command("preview, p")
def preview(
    day: Annotated[
        Optional[pendulum.Date], typer.Argument(parser=parse_day, help=DAY_HELP)
    ] = None,
) -> None:
    """
    Show what an export of the day would contain without writing anything.
    """
    result = __run_export(day if day is not None else today_local())
    export_report.export_view(result)


@app.command("csv")
def csv(
    day: Annotated[
        Optional[pendulum.Date], typer.Argument(parser=parse_day, help=DAY_HELP)
    ] = None,
    finalize: Annotated[
        bool,
        typer.Option("--finalize", "-f", help="mark the day as exported afterwards"),
    ] = False,
) -> None:
    """
    Export the day as a spreadsheet CSV file.
    """
    __write_export(day, finalize, export_to_csv)


@app.command("json")
def json(
    day: Annotated[
        Optional[pendulum.Date], typer.Argument(parser=parse_day, help=DAY_HELP)
    ] = None,
    finalize: Annotated[
        bool,
        typer.Option("--finalize", "-f", help="mark the day as exported afterwards"),
    ] = False,
) -> None:
    """
    Export the day as a JSON document.
    """
    __write_export(day, finalize, export_to_json)


@app.command("bookings, b")
def bookings(
    day: Annotated[
        Optional[pendulum.Date], typer.Argument(parser=parse_day, help=DAY_HELP)
    ] = None,
    open_links: Annotated[
        bool,
        typer.Option("--open", "-o", help="open every booking link in the browser"),
    ] = False,
) -> None:
    """
    Show the day as consolidated bookings with issue tracker worklog links.
    """
    booking_day = day if day is not None else today_local()
    result = __run_export(booking_day)

    directory = get_project_directory()
    summary = summarize(TIMESHEET_REPO.entries_for(booking_day), directory)
    links = booking_links(booking_day, summary)
    export_report.bookings_view(defragment(summary), links)

    if result["under_filled"]:
        export_report.export_view(result)

    if open_links:
        for link in links:
            typer.launch(link["url"])
