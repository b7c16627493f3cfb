# SPDX-License-Identifier: MIT

import threading

import pendulum
import pytest

from sheetshark.errors import (
    DayFinalizedError,
    DayNotFoundError,
    EntryNotFoundError,
    InvalidDurationError,
    OverlapError,
)
from sheetshark.model.status import TimesheetStatus
from sheetshark.service import timesheet as timesheet_service
from sheetshark.service.export import export_day


def test_scenario_from_empty_day_to_exported(repository, directory, day):
    assert timesheet_service.get_day(repository, day)["status"] == TimesheetStatus.OPEN

    first = timesheet_service.add_entry(
        repository, day, pendulum.time(9, 0), 60, "standup", project_key="M"
    )

    with pytest.raises(OverlapError) as exc_info:
        timesheet_service.add_entry(
            repository, day, pendulum.time(9, 30), 30, "review", project_key="M"
        )
    assert exc_info.value.conflicting_entry_id == first["id"]

    timesheet_service.add_entry(
        repository, day, pendulum.time(10, 0), 30, "emails", project_key=""
    )

    result = export_day(repository, directory, day)
    assert [record["internal_name"] for record in result["records"]] == [
        "Maintenance",
        "Development",
    ]

    timesheet = timesheet_service.mark_exported(repository, day)
    assert timesheet["status"] == TimesheetStatus.EXPORTED
    assert len(timesheet["entries"]) == 2

    with pytest.raises(DayFinalizedError):
        timesheet_service.add_entry(
            repository, day, pendulum.time(11, 0), 30, "late", project_key="M"
        )
    assert len(repository.entries_for(day)) == 2


def test_first_entry_creates_the_day(repository, day):
    assert repository.get_timesheet(day) is None

    timesheet_service.add_entry(repository, day, pendulum.time(8, 0), 15, "mail")

    timesheet = repository.get_timesheet(day)
    assert timesheet is not None
    assert timesheet["status"] == TimesheetStatus.OPEN
    assert timesheet["status_history"] == []


def test_rejected_entry_does_not_create_the_day(repository, day):
    with pytest.raises(InvalidDurationError):
        timesheet_service.add_entry(repository, day, pendulum.time(8, 0), 0, "mail")
    assert repository.get_timesheet(day) is None


def test_mutation_on_exported_day_fails_until_reopened(repository, day):
    entry = timesheet_service.add_entry(
        repository, day, pendulum.time(9, 0), 60, "standup", project_key="M"
    )
    timesheet_service.mark_exported(repository, day)

    with pytest.raises(DayFinalizedError):
        timesheet_service.edit_entry(repository, day, entry["id"], duration_mins=30)
    with pytest.raises(DayFinalizedError):
        timesheet_service.remove_entry(repository, day, entry["id"])
    assert repository.entries_for(day)[0]["duration_mins"] == 60

    reopened = timesheet_service.reopen(repository, day)
    assert reopened["status"] == TimesheetStatus.OPEN
    assert [change["status"] for change in reopened["status_history"]] == [
        TimesheetStatus.EXPORTED,
        TimesheetStatus.OPEN,
    ]

    edited = timesheet_service.edit_entry(
        repository, day, entry["id"], duration_mins=30
    )
    assert edited["duration_mins"] == 30
    assert repository.entries_for(day)[0]["duration_mins"] == 30


def test_mark_exported_requires_entries(repository, day):
    with pytest.raises(DayNotFoundError):
        timesheet_service.mark_exported(repository, day)
    assert repository.get_timesheet(day) is None


def test_reopen_requires_entries(repository, day):
    with pytest.raises(DayNotFoundError):
        timesheet_service.reopen(repository, day)


def test_mark_exported_twice_changes_nothing(repository, day):
    timesheet_service.add_entry(repository, day, pendulum.time(9, 0), 60, "standup")
    timesheet_service.mark_exported(repository, day)

    timesheet = timesheet_service.mark_exported(repository, day)

    assert timesheet["status"] == TimesheetStatus.EXPORTED
    assert len(timesheet["status_history"]) == 1


def test_reopen_open_day_changes_nothing(repository, day):
    timesheet_service.add_entry(repository, day, pendulum.time(9, 0), 60, "standup")

    timesheet = timesheet_service.reopen(repository, day)

    assert timesheet["status"] == TimesheetStatus.OPEN
    assert timesheet["status_history"] == []


def test_edit_keeps_id_and_created(repository, day):
    entry = timesheet_service.add_entry(
        repository, day, pendulum.time(9, 0), 60, "standup", ticket_key="M-1"
    )

    edited = timesheet_service.edit_entry(
        repository,
        day,
        entry["id"],
        start_time=pendulum.time(13, 0),
        description="planning",
        remove_ticket_key=True,
    )

    stored = repository.entries_for(day)[0]
    assert stored["id"] == entry["id"]
    assert stored["created"] == entry["created"]
    assert stored["start_time"] == pendulum.time(13, 0)
    assert stored["description"] == "planning"
    assert stored["ticket_key"] is None
    assert stored["duration_mins"] == 60
    assert edited["id"] == entry["id"]


def test_edit_of_unknown_entry(repository, day):
    timesheet_service.add_entry(repository, day, pendulum.time(9, 0), 60, "standup")
    with pytest.raises(EntryNotFoundError):
        timesheet_service.edit_entry(
            repository, day, "tent_" + "f" * 32, duration_mins=5
        )


def test_removing_last_entry_removes_the_day(repository, day):
    entry = timesheet_service.add_entry(
        repository, day, pendulum.time(9, 0), 60, "standup"
    )

    removed = timesheet_service.remove_entry(repository, day, entry["id"])

    assert removed["id"] == entry["id"]
    assert repository.get_timesheet(day) is None
    assert not (repository.timesheets_dir / "2025-09-21.yaml").exists()


def test_entries_are_returned_in_start_order(repository, day):
    for hour in (14, 9, 11):
        timesheet_service.add_entry(
            repository, day, pendulum.time(hour, 0), 30, f"at {hour}"
        )

    assert [entry["description"] for entry in repository.entries_for(day)] == [
        "at 9",
        "at 11",
        "at 14",
    ]


def test_concurrent_overlapping_adds_accept_exactly_one(repository, day):
    worker_count = 8
    barrier = threading.Barrier(worker_count)
    accepted: list[int] = []
    rejected: list[int] = []

    def worker(index: int) -> None:
        barrier.wait()
        try:
            timesheet_service.add_entry(
                repository, day, pendulum.time(9, index), 60, f"task {index}"
            )
            accepted.append(index)
        except OverlapError:
            rejected.append(index)

    threads = [
        threading.Thread(target=worker, args=(index,)) for index in range(worker_count)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(accepted) == 1
    assert len(rejected) == worker_count - 1
    assert len(repository.entries_for(day)) == 1
