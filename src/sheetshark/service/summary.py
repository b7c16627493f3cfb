# SPDX-License-Identifier: MIT

from collections.abc import Sequence

from sheetshark.model.entry import TimeEntry
from sheetshark.model.project import BREAK_PROJECT_KEY
from sheetshark.model.summary import NO_TICKET, ProjectSummary, TimesheetSummary
from sheetshark.service.project import ProjectDirectory
from sheetshark.service.validation import entry_range
from sheetshark.time import minutes_to_str, time_to_str


def summarize(
    entries: Sequence[TimeEntry], directory: ProjectDirectory
) -> TimesheetSummary:
    """
    Sum up a day's entries per project and ticket.

    Entries without a project are counted under the default project key, or
    under "" when no default is configured. Unlike an export, unknown
    projects are kept (with internal_name None) so a day can always be
    summarized.
    """
    projects: dict[str, ProjectSummary] = {}
    summary: TimesheetSummary = {
        "projects": projects,
        "breaks": [],
        "start_time": None,
        "end_time": None,
        "total_minutes": 0,
        "break_minutes": 0,
    }

    start_minutes: list[int] = []
    end_minutes: list[int] = []
    for entry in sorted(entries, key=lambda entry: entry["start_time"]):
        if entry["duration_mins"] <= 0:
            continue

        project_key = directory.effective_key(entry["project_key"]) or ""
        ticket_key = entry["ticket_key"] or NO_TICKET
        start, end = entry_range(entry)
        start_minutes.append(start)
        end_minutes.append(end)

        if project_key not in projects:
            project = directory.resolve(project_key)
            projects[project_key] = {
                "internal_name": project["internal_name"] if project else None,
                "issue_tracker_url": project["issue_tracker_url"] if project else None,
                "ticket_minutes": {},
                "first_start": time_to_str(entry["start_time"]),
            }
        ticket_minutes = projects[project_key]["ticket_minutes"]
        ticket_minutes[ticket_key] = (
            ticket_minutes.get(ticket_key, 0) + entry["duration_mins"]
        )

        if project_key == BREAK_PROJECT_KEY:
            summary["breaks"].append(
                {
                    "start_time": time_to_str(entry["start_time"]),
                    "duration_mins": entry["duration_mins"],
                }
            )
            summary["break_minutes"] += entry["duration_mins"]
        else:
            summary["total_minutes"] += entry["duration_mins"]

    if len(start_minutes) > 0:
        summary["start_time"] = minutes_to_str(min(start_minutes))
        summary["end_time"] = minutes_to_str(max(end_minutes))

    return summary
