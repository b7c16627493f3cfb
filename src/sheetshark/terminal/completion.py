# SPDX-License-Identifier: MIT

from sheetshark.repository.configuration import CONFIGURATION_REPO
from sheetshark.repository.timesheet import TIMESHEET_REPO
from sheetshark.service.project import get_project_directory
from sheetshark.time import today_local


def complete_project(incomplete: str) -> list[str]:
    """Return list of configured project keys for shell completion."""

    keys = get_project_directory().keys()
    return [key for key in keys if key.startswith(incomplete)]


def complete_ticket(incomplete: str) -> list[str]:
    """Return recently used ticket keys for shell completion."""

    config = CONFIGURATION_REPO.get_config()
    since = today_local().subtract(days=config.get("ticket_suggestion_days", 180))
    return TIMESHEET_REPO.suggest_tickets(incomplete, since=since)
