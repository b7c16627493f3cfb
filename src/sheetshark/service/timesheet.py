# SPDX-License-Identifier: MIT

import logging
from typing import Optional

import pendulum

from sheetshark.errors import DayFinalizedError, EntryNotFoundError, TimesheetError
from sheetshark.model.entity_id import EntityId
from sheetshark.model.entry import TimeEntry
from sheetshark.model.mutation import Operation
from sheetshark.model.status import TimesheetStatus
from sheetshark.model.timesheet import Timesheet
from sheetshark.repository.timesheet import DayTransaction, TimesheetRepository
from sheetshark.service.validation import validate
from sheetshark.template.entry import get_entry_template
from sheetshark.template.timesheet import get_timesheet_template
from sheetshark.time import now_utc

logger = logging.getLogger(__name__)


def get_day(repository: TimesheetRepository, day: pendulum.Date) -> Timesheet:
    """The stored timesheet for a day, or a fresh OPEN one if the day is untouched."""
    timesheet = repository.get_timesheet(day)
    if timesheet is None:
        return get_timesheet_template(day)
    return timesheet


def add_entry(
    repository: TimesheetRepository,
    day: pendulum.Date,
    start_time: pendulum.Time,
    duration_mins: int,
    description: str,
    project_key: str = "",
    ticket_key: Optional[str] = None,
) -> TimeEntry:
    """
    Record a new entry. The day is created implicitly with the first entry.

    Raises:
        DayFinalizedError: if the day has been exported and not reopened
        TimesheetError: if the entry fails validation
    """
    entry = get_entry_template(day)
    entry["start_time"] = start_time
    entry["duration_mins"] = duration_mins
    entry["description"] = description
    entry["project_key"] = project_key
    entry["ticket_key"] = ticket_key

    with repository.transaction(day) as transaction:
        __ensure_open(transaction)
        __validate(transaction, entry, Operation.ADD)
        transaction.commit({"operation": Operation.ADD, "entry": entry})

    logger.info("Added entry %s on %s", entry["id"], day)
    return entry


def edit_entry(
    repository: TimesheetRepository,
    day: pendulum.Date,
    entry_id: EntityId,
    start_time: Optional[pendulum.Time] = None,
    duration_mins: Optional[int] = None,
    description: Optional[str] = None,
    project_key: Optional[str] = None,
    ticket_key: Optional[str] = None,
    remove_ticket_key: bool = False,
) -> TimeEntry:
    """Change the given fields of an existing entry; None leaves a field as it is."""
    with repository.transaction(day) as transaction:
        __ensure_open(transaction)

        existing = __find_entry(transaction, entry_id)
        candidate: TimeEntry = TimeEntry(**existing)
        if start_time is not None:
            candidate["start_time"] = start_time
        if duration_mins is not None:
            candidate["duration_mins"] = duration_mins
        if description is not None:
            candidate["description"] = description
        if project_key is not None:
            candidate["project_key"] = project_key
        if ticket_key is not None:
            candidate["ticket_key"] = ticket_key
        if remove_ticket_key:
            candidate["ticket_key"] = None
        candidate["updated"] = now_utc()

        __validate(transaction, candidate, Operation.EDIT)
        transaction.commit({"operation": Operation.EDIT, "entry": candidate})

    logger.info("Edited entry %s on %s", entry_id, day)
    return candidate


def remove_entry(
    repository: TimesheetRepository, day: pendulum.Date, entry_id: EntityId
) -> TimeEntry:
    with repository.transaction(day) as transaction:
        __ensure_open(transaction)
        entry = __find_entry(transaction, entry_id)
        __validate(transaction, entry, Operation.REMOVE)
        transaction.commit({"operation": Operation.REMOVE, "entry": entry})

    logger.info("Removed entry %s on %s", entry_id, day)
    return entry


def mark_exported(repository: TimesheetRepository, day: pendulum.Date) -> Timesheet:
    """
    Finalize a day: OPEN -> EXPORTED. Its entries are frozen until reopen().

    Marking an already exported day again changes nothing.

    Raises:
        DayNotFoundError: if the day has no entries
    """
    with repository.transaction(day) as transaction:
        already_exported = transaction.status == TimesheetStatus.EXPORTED
        transaction.set_status(TimesheetStatus.EXPORTED)
        timesheet = transaction.timesheet

    if already_exported:
        logger.info("Timesheet %s was already exported", day)
    else:
        logger.info("Marked timesheet %s as exported", day)
    return timesheet


def reopen(repository: TimesheetRepository, day: pendulum.Date) -> Timesheet:
    """
    Undo a finalize: EXPORTED -> OPEN, leaving the entries untouched.

    The change is appended to the day's status history. Reopening an open
    day changes nothing.

    Raises:
        DayNotFoundError: if the day has no entries
    """
    with repository.transaction(day) as transaction:
        transaction.set_status(TimesheetStatus.OPEN)
        timesheet = transaction.timesheet

    logger.info("Reopened timesheet %s", day)
    return timesheet


def __ensure_open(transaction: DayTransaction) -> None:
    if transaction.status == TimesheetStatus.EXPORTED:
        logger.info("Rejected mutation on exported timesheet %s", transaction.day)
        raise DayFinalizedError(
            f"Timesheet {transaction.day} has been exported. Reopen it to make changes."
        )


def __find_entry(transaction: DayTransaction, entry_id: EntityId) -> TimeEntry:
    for entry in transaction.entries:
        if entry["id"] == entry_id:
            return entry
    raise EntryNotFoundError(f"Entry {entry_id} does not exist on {transaction.day}.")


def __validate(
    transaction: DayTransaction, candidate: TimeEntry, operation: Operation
) -> None:
    try:
        validate(transaction.entries, candidate, operation)
    except TimesheetError as e:
        logger.info("Rejected %s on %s: %s", operation.value, transaction.day, e.kind)
        raise
