# SPDX-License-Identifier: MIT

import logging
from typing import Optional

import pendulum

from sheetshark.errors import DayNotFoundError, UnknownProjectError
from sheetshark.model.export import ExportRecord, ExportResult
from sheetshark.model.project import BREAK_PROJECT_KEY
from sheetshark.repository.timesheet import TimesheetRepository
from sheetshark.service.project import ProjectDirectory
from sheetshark.service.validation import entry_range
from sheetshark.time import minutes_to_str

logger = logging.getLogger(__name__)


def build_issue_url(
    issue_tracker_url: Optional[str], ticket_key: Optional[str]
) -> Optional[str]:
    if not issue_tracker_url or not ticket_key:
        return None
    return f"{issue_tracker_url.rstrip('/')}/browse/{ticket_key}"


def export_day(
    repository: TimesheetRepository,
    directory: ProjectDirectory,
    day: pendulum.Date,
    expected_minutes: Optional[int] = None,
) -> ExportResult:
    """
    Project a day's entries into export records with their projects resolved.

    This is a read-only preview: it works for open and exported days alike and
    never changes the day's status. The export is all or nothing, the first
    project that cannot be resolved aborts it without returning any records.

    Args:
        repository: store to read the day from
        directory: project directory snapshot used for name and URL resolution
        day: the day to export
        expected_minutes: worked minutes expected for a full day; a day below
            it is flagged as under filled. None or 0 disables the check.

    Raises:
        DayNotFoundError: if the day has no entries
        UnknownProjectError: if an entry's project (or the default) is unknown
    """
    timesheet = repository.get_timesheet(day)
    if timesheet is None:
        raise DayNotFoundError(f"There is no timesheet for {day}.")

    default_key = directory.default_key()
    if default_key is not None and directory.resolve(default_key) is None:
        logger.info(
            "Export of %s aborted: default project %s unknown", day, default_key
        )
        raise UnknownProjectError(default_key)

    records: list[ExportRecord] = []
    total_minutes = 0
    break_minutes = 0
    for entry in timesheet["entries"]:
        try:
            project = directory.resolve_entry_project(entry["project_key"])
        except UnknownProjectError as e:
            logger.info("Export of %s aborted: project '%s' unknown", day, e.key)
            raise

        is_break = project["key"] == BREAK_PROJECT_KEY
        if is_break:
            break_minutes += entry["duration_mins"]
        else:
            total_minutes += entry["duration_mins"]

        _, end = entry_range(entry)
        records.append(
            {
                "day": day,
                "project_key": project["key"],
                "internal_name": project["internal_name"],
                "start_time": entry["start_time"],
                "end_time": minutes_to_str(end),
                "duration_minutes": entry["duration_mins"],
                "description": entry["description"],
                "ticket_key": entry["ticket_key"],
                "issue_url": build_issue_url(
                    project["issue_tracker_url"], entry["ticket_key"]
                ),
                "is_break": is_break,
            }
        )

    under_filled = bool(expected_minutes) and total_minutes < (expected_minutes or 0)
    if under_filled:
        logger.info(
            "Timesheet %s is under filled: %d of %d minutes",
            day,
            total_minutes,
            expected_minutes,
        )

    return {
        "day": day,
        "status": timesheet["status"],
        "records": records,
        "total_minutes": total_minutes,
        "break_minutes": break_minutes,
        "expected_minutes": expected_minutes or None,
        "under_filled": under_filled,
    }
