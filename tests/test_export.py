# SPDX-License-Identifier: MIT

import pendulum
import pytest

from sheetshark.errors import DayNotFoundError, UnknownProjectError
from sheetshark.model.status import TimesheetStatus
from sheetshark.service import timesheet as timesheet_service
from sheetshark.service.export import build_issue_url, export_day
from sheetshark.service.project import ProjectDirectory


def _add(repository, day, hour, minute, duration, project_key="M", ticket_key=None):
    return timesheet_service.add_entry(
        repository,
        day,
        pendulum.time(hour, minute),
        duration,
        f"work at {hour}:{minute:02d}",
        project_key=project_key,
        ticket_key=ticket_key,
    )


def test_records_follow_start_order_with_resolved_projects(
    repository, directory, day
):
    _add(repository, day, 10, 0, 30, project_key="")
    _add(repository, day, 9, 0, 60, project_key="M", ticket_key="M-1")

    result = export_day(repository, directory, day)

    first, second = result["records"]
    assert first["start_time"] == pendulum.time(9, 0)
    assert first["end_time"] == "10:00"
    assert first["project_key"] == "M"
    assert first["internal_name"] == "Maintenance"
    assert first["ticket_key"] == "M-1"
    assert first["issue_url"] == "https://jira.example.com/browse/M-1"
    assert second["project_key"] == "D"
    assert second["internal_name"] == "Development"
    assert second["issue_url"] is None
    assert result["total_minutes"] == 90
    assert result["status"] == TimesheetStatus.OPEN


def test_issue_url_needs_url_and_ticket():
    assert build_issue_url("https://jira.example.com", "M-1") == (
        "https://jira.example.com/browse/M-1"
    )
    assert build_issue_url("https://jira.example.com/", None) is None
    assert build_issue_url(None, "M-1") is None
    assert build_issue_url("", "M-1") is None


def test_unknown_project_without_default_fails_without_records(repository, day):
    _add(repository, day, 9, 0, 60, project_key="M")
    _add(repository, day, 10, 0, 60, project_key="ZZZ")
    directory = ProjectDirectory({"M": {"internal_name": "Maintenance"}})

    with pytest.raises(UnknownProjectError) as exc_info:
        export_day(repository, directory, day)

    assert exc_info.value.key == "ZZZ"
    assert exc_info.value.kind == "UnknownProject"


def test_blank_project_without_default_fails(repository, day):
    _add(repository, day, 9, 0, 60, project_key="")
    directory = ProjectDirectory({"M": {"internal_name": "Maintenance"}})

    with pytest.raises(UnknownProjectError) as exc_info:
        export_day(repository, directory, day)
    assert exc_info.value.key == ""


def test_unresolvable_default_fails_every_export(repository, day):
    _add(repository, day, 9, 0, 60, project_key="M")
    directory = ProjectDirectory(
        {"M": {"internal_name": "Maintenance"}}, default_project_key="GONE"
    )

    with pytest.raises(UnknownProjectError) as exc_info:
        export_day(repository, directory, day)
    assert exc_info.value.key == "GONE"


def test_export_of_absent_day(repository, directory, day):
    with pytest.raises(DayNotFoundError):
        export_day(repository, directory, day)


def test_export_is_idempotent(repository, directory, day):
    _add(repository, day, 9, 0, 60, ticket_key="M-1")
    _add(repository, day, 10, 0, 30, project_key="")

    assert export_day(repository, directory, day) == export_day(
        repository, directory, day
    )


def test_export_does_not_change_status(repository, directory, day):
    _add(repository, day, 9, 0, 60)

    export_day(repository, directory, day)
    assert repository.get_timesheet(day)["status"] == TimesheetStatus.OPEN

    timesheet_service.mark_exported(repository, day)
    result = export_day(repository, directory, day)
    assert result["status"] == TimesheetStatus.EXPORTED
    assert len(result["records"]) == 1


def test_breaks_are_not_worked_time(repository, directory, day):
    _add(repository, day, 9, 0, 120)
    _add(repository, day, 11, 0, 30, project_key="x")
    _add(repository, day, 11, 30, 60)

    result = export_day(repository, directory, day, expected_minutes=180)

    break_record = result["records"][1]
    assert break_record["is_break"] is True
    assert break_record["internal_name"] == "Break"
    assert result["total_minutes"] == 180
    assert result["break_minutes"] == 30
    assert result["under_filled"] is False


@pytest.mark.parametrize(
    "expected_minutes,under_filled",
    [(480, True), (90, False), (60, False), (None, False), (0, False)],
)
def test_under_filled_flag_is_advisory(
    repository, directory, day, expected_minutes, under_filled
):
    _add(repository, day, 9, 0, 90)

    result = export_day(repository, directory, day, expected_minutes=expected_minutes)

    assert result["under_filled"] is under_filled
    assert len(result["records"]) == 1


def test_entry_ending_at_midnight(repository, directory, day):
    _add(repository, day, 23, 0, 60)

    record = export_day(repository, directory, day)["records"][0]

    assert record["end_time"] == "24:00"
