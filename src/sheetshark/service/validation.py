# SPDX-License-Identifier: MIT

import logging
from collections.abc import Sequence

from sheetshark.errors import (
    CrossesDayBoundaryError,
    EmptyDescriptionError,
    EntryNotFoundError,
    InvalidDurationError,
    InvalidProjectKeyError,
    InvalidTicketKeyError,
    OverlapError,
)
from sheetshark.model.entry import TimeEntry
from sheetshark.model.mutation import Operation
from sheetshark.time import MINUTES_PER_DAY, minutes_to_str, time_to_minutes

logger = logging.getLogger(__name__)


def entry_range(entry: TimeEntry) -> tuple[int, int]:
    """Return the half-open [start, end) range of an entry in minutes since midnight."""
    start = time_to_minutes(entry["start_time"])
    return start, start + entry["duration_mins"]


def validate(
    day_entries: Sequence[TimeEntry],
    candidate: TimeEntry,
    operation: Operation,
) -> bool:
    """
    Decide whether a candidate add, edit or remove is acceptable for a day.

    Pure function over the supplied entries: nothing is read or written.
    Project keys are only checked for shape here, resolving them is left to
    the export.

    Returns True if the mutation is allowed, raises a TimesheetError if not.
    """
    if operation is Operation.REMOVE:
        __validate_exists(day_entries, candidate)
        return True

    __validate_fields(candidate)

    if operation is Operation.EDIT:
        __validate_exists(day_entries, candidate)

    __validate_no_overlap(day_entries, candidate)
    return True


def __validate_fields(candidate: TimeEntry) -> None:
    duration = candidate["duration_mins"]
    if isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0:
        raise InvalidDurationError(
            f"Duration must be a positive number of minutes. Got: {duration}"
        )

    if candidate["description"] is None or candidate["description"].strip() == "":
        raise EmptyDescriptionError("Description must not be empty.")

    start, end = entry_range(candidate)
    if end > MINUTES_PER_DAY:
        raise CrossesDayBoundaryError(
            f"Entry starting at {minutes_to_str(start)} for {duration} minutes "
            f"would end after midnight."
        )

    project_key = candidate["project_key"]
    if project_key != "" and project_key.strip() == "":
        raise InvalidProjectKeyError(
            "Project key must not be blank. Leave it empty to use the default project."
        )

    ticket_key = candidate["ticket_key"]
    if ticket_key is not None and ticket_key.strip() == "":
        raise InvalidTicketKeyError("Ticket key must not be blank when present.")


def __validate_exists(day_entries: Sequence[TimeEntry], candidate: TimeEntry) -> None:
    if not any(entry["id"] == candidate["id"] for entry in day_entries):
        raise EntryNotFoundError(
            f"Entry {candidate['id']} does not exist on {candidate['day']}."
        )


def __validate_no_overlap(
    day_entries: Sequence[TimeEntry], candidate: TimeEntry
) -> None:
    candidate_start, candidate_end = entry_range(candidate)
    for entry in day_entries:
        if entry["id"] == candidate["id"]:
            continue
        start, end = entry_range(entry)
        # Half-open ranges: touching ends do not overlap
        if candidate_start < end and start < candidate_end:
            logger.info(
                "Rejected entry %s: overlaps %s on %s",
                candidate["id"],
                entry["id"],
                candidate["day"],
            )
            raise OverlapError(
                entry["id"],
                f"Entry {minutes_to_str(candidate_start)}-{minutes_to_str(candidate_end)} "
                f"overlaps '{entry['description']}' "
                f"({minutes_to_str(start)}-{minutes_to_str(end)}).",
            )
