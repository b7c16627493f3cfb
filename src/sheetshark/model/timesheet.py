# SPDX-License-Identifier: MIT

from typing import TypedDict

import pendulum

from sheetshark.model.entry import TimeEntry
from sheetshark.model.status import Status


class StatusChange(TypedDict):
    status: Status
    changed: pendulum.DateTime


class Timesheet(TypedDict):
    day: pendulum.Date
    status: Status
    entries: list[TimeEntry]  # Ordered by start_time
    status_history: list[StatusChange]
    created: pendulum.DateTime
    updated: pendulum.DateTime
