# SPDX-License-Identifier: MIT

from typing import Optional


class TimesheetError(Exception):
    """Base class for every recoverable timesheet failure.

    `kind` names the failure category so callers can react to it without
    matching on the message.
    """

    kind = "TimesheetError"


class OverlapError(TimesheetError):
    """Raised when an entry's time range intersects another entry of the day."""

    kind = "Overlap"

    def __init__(self, conflicting_entry_id: Optional[str], message: str) -> None:
        super().__init__(message)
        self.conflicting_entry_id = conflicting_entry_id


class InvalidDurationError(TimesheetError):
    kind = "InvalidDuration"


class EmptyDescriptionError(TimesheetError):
    kind = "EmptyDescription"


class CrossesDayBoundaryError(TimesheetError):
    kind = "CrossesDayBoundary"


class InvalidProjectKeyError(TimesheetError):
    kind = "InvalidProjectKey"


class InvalidTicketKeyError(TimesheetError):
    kind = "InvalidTicketKey"


class DayFinalizedError(TimesheetError):
    """Raised when an exported day is mutated without being reopened first."""

    kind = "DayFinalized"


class DayNotFoundError(TimesheetError):
    kind = "DayNotFound"


class EntryNotFoundError(TimesheetError):
    kind = "EntryNotFound"


class UnknownProjectError(TimesheetError):
    """Raised when a project key cannot be resolved by the project directory."""

    kind = "UnknownProject"

    def __init__(self, key: str) -> None:
        if key == "":
            message = "Entry has no project and no default project is configured."
        else:
            message = f"Unknown project '{key}'. Add it to the configured projects."
        super().__init__(message)
        self.key = key


class StoreUnavailableError(TimesheetError):
    """Raised when the timesheet storage cannot be read or written."""

    kind = "StoreUnavailable"


class ConfigurationError(TimesheetError):
    """Raised when the configuration file holds values the engine cannot use."""

    kind = "Configuration"
