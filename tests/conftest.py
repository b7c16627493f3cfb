# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
import pytest

from sheetshark import configuration, state
from sheetshark.initialize import initialize
from sheetshark.model.entry import TimeEntry
from sheetshark.repository.configuration import CONFIGURATION_REPO
from sheetshark.repository.timesheet import TimesheetRepository
from sheetshark.service.project import ProjectDirectory
from sheetshark.template.entry import get_entry_template
from sheetshark.time import time_from_str

DAY = pendulum.date(2025, 9, 21)


@pytest.fixture
def day() -> pendulum.Date:
    return DAY


@pytest.fixture
def repository(tmp_path) -> TimesheetRepository:
    """A store writing into a temporary directory."""
    return TimesheetRepository(tmp_path / "timesheets")


@pytest.fixture
def directory() -> ProjectDirectory:
    return ProjectDirectory(
        {
            "M": {
                "internal_name": "Maintenance",
                "issue_tracker_url": "https://jira.example.com/",
            },
            "D": {"internal_name": "Development"},
        },
        default_project_key="D",
    )


@pytest.fixture
def make_entry():
    def _make_entry(
        start: str = "09:00",
        duration: int = 60,
        description: str = "work",
        project_key: str = "M",
        ticket_key: Optional[str] = None,
        day: pendulum.Date = DAY,
    ) -> TimeEntry:
        entry = get_entry_template(day)
        entry["start_time"] = time_from_str(start)
        entry["duration_mins"] = duration
        entry["description"] = description
        entry["project_key"] = project_key
        entry["ticket_key"] = ticket_key
        return entry

    return _make_entry


@pytest.fixture
def app_data(tmp_path, monkeypatch):
    """Initialize the application against temporary config and data dirs."""
    monkeypatch.setenv(configuration.CONFIG_ENV_VAR, str(tmp_path / "config"))
    monkeypatch.setenv(configuration.DATA_ENV_VAR, str(tmp_path / "data"))
    initialize()
    yield tmp_path / "data"
    CONFIGURATION_REPO.reload()
    state.set_show_header(True)
