# SPDX-License-Identifier: MIT

from sheetshark.model.status import Status, TimesheetStatus
from sheetshark.time import duration_to_str


def render_status(status: Status) -> str:
    if status == TimesheetStatus.EXPORTED:
        return "[green]EXPORTED[/green]"
    return "[yellow]OPEN[/yellow]"


def render_minutes(minutes: int) -> str:
    return duration_to_str(minutes)
