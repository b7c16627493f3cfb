# SPDX-License-Identifier: MIT

import pendulum

from sheetshark.model.project import BREAK_PROJECT_KEY
from sheetshark.model.summary import NO_TICKET, BookingLink, TimesheetSummary

DEFAULT_BOOKING_TIME = "09:00"


def booking_links(day: pendulum.Date, summary: TimesheetSummary) -> list[BookingLink]:
    """
    Worklog links for every ticket of a project that has an issue tracker.

    Each link opens the ticket with the day's booked minutes prefilled.
    Projects without an issue tracker URL and time without a ticket are
    skipped, they have to be booked by hand.
    """
    date_str = day.format("DD.MM.YY")
    time_str = summary["start_time"] or DEFAULT_BOOKING_TIME

    links: list[BookingLink] = []
    for project_key, project_summary in summary["projects"].items():
        if project_key == BREAK_PROJECT_KEY:
            continue
        issue_tracker_url = project_summary["issue_tracker_url"]
        if issue_tracker_url is None:
            continue

        for ticket_key, minutes in project_summary["ticket_minutes"].items():
            if ticket_key == NO_TICKET or minutes <= 0:
                continue
            links.append(
                {
                    "project_key": project_key,
                    "ticket_key": ticket_key,
                    "minutes": minutes,
                    "url": format_booking_url(
                        issue_tracker_url, ticket_key, minutes, date_str, time_str
                    ),
                }
            )
    return links


def format_booking_url(
    issue_tracker_url: str, ticket_key: str, minutes: int, date_str: str, time_str: str
) -> str:
    return (
        f"{issue_tracker_url.rstrip('/')}/browse/{ticket_key}"
        f"?xxLogTime={minutes}m&xxLogDate={date_str}%20{time_str}"
    )
