# SPDX-License-Identifier: MIT

import pendulum
import pytest
from yaml import safe_load

from sheetshark.errors import DayNotFoundError, StoreUnavailableError
from sheetshark.model.mutation import Operation
from sheetshark.model.status import TimesheetStatus
from sheetshark.repository.timesheet import TimesheetRepository
from sheetshark.service import timesheet as timesheet_service


def test_day_is_stored_as_one_yaml_file(repository, make_entry, day):
    entry = make_entry("09:00", 60, "standup", ticket_key="M-1")

    with repository.transaction(day) as transaction:
        transaction.commit({"operation": Operation.ADD, "entry": entry})

    file_path = repository.timesheets_dir / "2025-09-21.yaml"
    stored = safe_load(file_path.read_text(encoding="utf-8"))
    assert stored["day"] == "2025-09-21"
    assert stored["status"] == "OPEN"
    assert stored["entries"][0]["id"] == entry["id"]
    assert stored["entries"][0]["start_time"] == "09:00"
    assert stored["entries"][0]["ticket_key"] == "M-1"
    assert "day" not in stored["entries"][0]
    assert [path.name for path in repository.timesheets_dir.iterdir()] == [
        "2025-09-21.yaml"
    ]


def test_stored_entries_read_back_with_their_types(repository, make_entry, day):
    entry = make_entry("10:30", 45, "review", project_key="", ticket_key=None)

    with repository.transaction(day) as transaction:
        transaction.commit({"operation": Operation.ADD, "entry": entry})

    stored = repository.entries_for(day)[0]
    assert stored["day"] == day
    assert stored["start_time"] == pendulum.time(10, 30)
    assert stored["duration_mins"] == 45
    assert stored["project_key"] == ""
    assert stored["ticket_key"] is None
    assert stored["created"] == entry["created"]


def test_failed_transaction_writes_nothing(repository, make_entry, day):
    with pytest.raises(RuntimeError):
        with repository.transaction(day) as transaction:
            transaction.commit({"operation": Operation.ADD, "entry": make_entry()})
            raise RuntimeError("interrupted")

    assert repository.get_timesheet(day) is None


def test_commit_rejects_entry_of_another_day(repository, make_entry, day):
    other_day_entry = make_entry(day=day.add(days=1))
    with pytest.raises(ValueError):
        with repository.transaction(day) as transaction:
            transaction.commit({"operation": Operation.ADD, "entry": other_day_entry})


def test_set_status_on_absent_day(repository, day):
    with pytest.raises(DayNotFoundError):
        with repository.transaction(day) as transaction:
            transaction.set_status(TimesheetStatus.EXPORTED)


def test_timesheets_of_month(repository, day):
    for current in (day, pendulum.date(2025, 9, 1), pendulum.date(2025, 10, 1)):
        timesheet_service.add_entry(repository, current, pendulum.time(9, 0), 30, "x")

    timesheets = repository.get_timesheets_of_month(day)

    assert [timesheet["day"] for timesheet in timesheets] == [
        pendulum.date(2025, 9, 1),
        day,
    ]


def test_suggest_tickets_ranks_by_use(repository, day):
    for hour, ticket in enumerate(["PROJ-123", "PROJ-123", "PROJECT-1200", "OTHER-1"]):
        timesheet_service.add_entry(
            repository, day, pendulum.time(8 + hour, 0), 30, "x", ticket_key=ticket
        )

    assert repository.suggest_tickets("proj-12") == ["PROJ-123", "PROJECT-1200"]
    assert repository.suggest_tickets("") == ["PROJ-123", "OTHER-1", "PROJECT-1200"]
    assert repository.suggest_tickets("oth") == ["OTHER-1"]
    assert repository.suggest_tickets("proj-9") == []


def test_suggest_tickets_ignores_old_days(repository, day):
    timesheet_service.add_entry(
        repository,
        day.subtract(days=30),
        pendulum.time(9, 0),
        30,
        "x",
        ticket_key="OLD-1",
    )
    timesheet_service.add_entry(
        repository, day, pendulum.time(9, 0), 30, "x", ticket_key="NEW-1"
    )

    assert repository.suggest_tickets("", since=day.subtract(days=7)) == ["NEW-1"]


def test_malformed_yaml_is_store_unavailable(repository, day):
    repository.timesheets_dir.mkdir(parents=True)
    (repository.timesheets_dir / "2025-09-21.yaml").write_text("day: [unclosed\n")

    with pytest.raises(StoreUnavailableError):
        repository.get_timesheet(day)


def test_incomplete_document_is_store_unavailable(repository, day):
    repository.timesheets_dir.mkdir(parents=True)
    (repository.timesheets_dir / "2025-09-21.yaml").write_text("day: '2025-09-21'\n")

    with pytest.raises(StoreUnavailableError) as exc_info:
        repository.get_timesheet(day)
    assert exc_info.value.kind == "StoreUnavailable"


def test_unwritable_store_is_store_unavailable(tmp_path, make_entry, day):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    repository = TimesheetRepository(blocker / "timesheets")

    with pytest.raises(StoreUnavailableError):
        with repository.transaction(day) as transaction:
            transaction.commit({"operation": Operation.ADD, "entry": make_entry()})
