# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

NO_TICKET = "-"


class ProjectSummary(TypedDict):
    internal_name: Optional[str]  # None when the project is not configured
    issue_tracker_url: Optional[str]
    ticket_minutes: dict[str, int]  # Ticket key (NO_TICKET if none) to minutes
    first_start: str  # "HH:mm"


class BreakSpan(TypedDict):
    start_time: str  # "HH:mm"
    duration_mins: int


class TimesheetSummary(TypedDict):
    projects: dict[str, ProjectSummary]
    breaks: list[BreakSpan]
    start_time: Optional[str]  # "HH:mm" of the earliest entry
    end_time: Optional[str]  # "HH:mm" of the latest entry end
    total_minutes: int  # Worked minutes, breaks excluded
    break_minutes: int


class DefragmentedEntry(TypedDict):
    project_key: str
    ticket_key: str
    start_time: str
    end_time: str


class BookingLink(TypedDict):
    project_key: str
    ticket_key: str
    minutes: int
    url: str
