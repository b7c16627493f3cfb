# SPDX-License-Identifier: MIT

from collections import deque
from typing import TypedDict

from sheetshark.model.project import BREAK_PROJECT_KEY
from sheetshark.model.summary import DefragmentedEntry, TimesheetSummary
from sheetshark.time import minutes_from_str, minutes_to_str


class _ProjectTicket(TypedDict):
    project_key: str
    ticket_key: str
    duration_mins: int


class _Break(TypedDict):
    start_mins: int
    duration_mins: int


def defragment(summary: TimesheetSummary) -> list[DefragmentedEntry]:
    """
    Lay out a day's bookings as one contiguous block per project and ticket.

    Projects follow the order of their first entry, and blocks are placed back
    to back from the day's start time. A break that begins inside a block
    splits it: the block stops at the break and resumes once the break is over.
    """
    if summary["start_time"] is None:
        return []
    start_mins = minutes_from_str(summary["start_time"])
    if start_mins is None:
        raise ValueError(f"Invalid start time: {summary['start_time']}")

    project_tickets = __collect_project_tickets(summary)
    if len(project_tickets) == 0:
        return []

    return __allocate(project_tickets, __collect_breaks(summary), start_mins)


def __collect_project_tickets(summary: TimesheetSummary) -> list[_ProjectTicket]:
    project_keys = sorted(
        (key for key in summary["projects"] if key != BREAK_PROJECT_KEY),
        key=lambda key: summary["projects"][key]["first_start"],
    )

    project_tickets: list[_ProjectTicket] = []
    for project_key in project_keys:
        ticket_minutes = summary["projects"][project_key]["ticket_minutes"]
        for ticket_key, minutes in ticket_minutes.items():
            if minutes > 0:
                project_tickets.append(
                    {
                        "project_key": project_key,
                        "ticket_key": ticket_key,
                        "duration_mins": minutes,
                    }
                )
    return project_tickets


def __collect_breaks(summary: TimesheetSummary) -> list[_Break]:
    breaks: list[_Break] = []
    for span in summary["breaks"]:
        start_mins = minutes_from_str(span["start_time"])
        if start_mins is None:
            continue
        breaks.append(
            {"start_mins": start_mins, "duration_mins": span["duration_mins"]}
        )
    return sorted(breaks, key=lambda span: span["start_mins"])


def __allocate(
    project_tickets: list[_ProjectTicket], breaks: list[_Break], start_mins: int
) -> list[DefragmentedEntry]:
    result: list[DefragmentedEntry] = []
    pending_breaks = deque(breaks)
    current_mins = start_mins

    for project_ticket in project_tickets:
        remaining_mins = project_ticket["duration_mins"]

        while remaining_mins > 0:
            # Skip every break that has already started
            while pending_breaks and pending_breaks[0]["start_mins"] <= current_mins:
                current_mins += pending_breaks.popleft()["duration_mins"]

            next_end = current_mins + remaining_mins
            if pending_breaks and pending_breaks[0]["start_mins"] <= next_end:
                next_end = pending_breaks[0]["start_mins"]
            block_mins = next_end - current_mins

            result.append(
                {
                    "project_key": project_ticket["project_key"],
                    "ticket_key": project_ticket["ticket_key"],
                    "start_time": minutes_to_str(current_mins),
                    "end_time": minutes_to_str(next_end),
                }
            )

            remaining_mins -= block_mins
            current_mins = next_end

    return result
