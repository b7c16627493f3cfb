# SPDX-License-Identifier: MIT

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table

from sheetshark.model.entry import TimeEntry
from sheetshark.model.project import BREAK_PROJECT_KEY
from sheetshark.model.summary import TimesheetSummary
from sheetshark.model.timesheet import Timesheet
from sheetshark.service.project import ProjectDirectory
from sheetshark.service.validation import entry_range
from sheetshark.time import (
    date_to_display_str,
    end_of_month,
    minutes_to_str,
    start_of_month,
    time_to_str,
)
from sheetshark.view.header import header
from sheetshark.view.util import render_minutes, render_status

UNKNOWN_PROJECT_MARKER = "❔"


def timesheet_view(
    timesheet: Timesheet, summary: TimesheetSummary, directory: ProjectDirectory
) -> None:
    header(f"{date_to_display_str(timesheet['day'])}  {timesheet['status']}")

    entries_table = Table(box=box.SIMPLE)
    entries_table.add_column("#", justify="right")
    entries_table.add_column("start")
    entries_table.add_column("end")
    entries_table.add_column("duration", justify="right")
    entries_table.add_column("project")
    entries_table.add_column("ticket")
    entries_table.add_column("description")

    for position, entry in enumerate(timesheet["entries"], start=1):
        _, end = entry_range(entry)
        row_style = "bright_black" if entry["project_key"] == BREAK_PROJECT_KEY else None
        entries_table.add_row(
            str(position),
            time_to_str(entry["start_time"]),
            minutes_to_str(end),
            render_minutes(entry["duration_mins"]),
            __render_project(entry, directory),
            entry["ticket_key"] or "",
            entry["description"],
            style=row_style,
        )

    console = Console()
    console.print(entries_table)

    if len(timesheet["entries"]) == 0:
        console.print(" [bright_black]no entries[/bright_black]")
        return

    console.print(
        f" status {render_status(timesheet['status'])}"
        f"  span {summary['start_time']}-{summary['end_time']}"
        f"  worked [bold]{render_minutes(summary['total_minutes'])}[/bold]"
        f"  breaks {render_minutes(summary['break_minutes'])}"
    )


def entry_view(entry: TimeEntry, directory: ProjectDirectory) -> None:
    header("entry")

    entry_table = Table(box=box.SIMPLE)
    entry_table.add_column("property")
    entry_table.add_column("value")

    _, end = entry_range(entry)
    entry_table.add_row("id", entry["id"])
    entry_table.add_row("day", date_to_display_str(entry["day"]))
    entry_table.add_row("start", time_to_str(entry["start_time"]))
    entry_table.add_row("end", minutes_to_str(end))
    entry_table.add_row("duration", render_minutes(entry["duration_mins"]))
    entry_table.add_row("project", __render_project(entry, directory))
    entry_table.add_row("ticket", entry["ticket_key"] or "")
    entry_table.add_row("description", entry["description"])

    console = Console()
    console.print(entry_table)


def month_view(
    day: pendulum.Date,
    timesheets: list[Timesheet],
    summaries: dict[pendulum.Date, TimesheetSummary],
) -> None:
    header(day.format("MMMM YYYY"))

    month_table = Table(box=box.SIMPLE)
    month_table.add_column("day")
    month_table.add_column("status")
    month_table.add_column("entries", justify="right")
    month_table.add_column("worked", justify="right")

    timesheets_by_day = {timesheet["day"]: timesheet for timesheet in timesheets}
    current = start_of_month(day)
    last = end_of_month(day)
    while current <= last:
        timesheet = timesheets_by_day.get(current)
        weekend_style = "bright_black" if current.isoweekday() >= 6 else None
        if timesheet is None:
            month_table.add_row(
                date_to_display_str(current), "", "", "", style=weekend_style
            )
        else:
            month_table.add_row(
                date_to_display_str(current),
                render_status(timesheet["status"]),
                str(len(timesheet["entries"])),
                render_minutes(summaries[current]["total_minutes"]),
                style=weekend_style,
            )
        current = current.add(days=1)

    console = Console()
    console.print(month_table)


def __render_project(entry: TimeEntry, directory: ProjectDirectory) -> str:
    key = directory.effective_key(entry["project_key"])
    if key is None:
        return UNKNOWN_PROJECT_MARKER
    project = directory.resolve(key)
    name = project["internal_name"] if project is not None else UNKNOWN_PROJECT_MARKER
    if entry["project_key"] == "":
        return f"[italic]{key}[/italic] {name}"
    return f"{key} {name}"
