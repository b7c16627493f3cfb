# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from sheetshark.model.status import Status


class ExportRecord(TypedDict):
    day: pendulum.Date
    project_key: str  # Resolved key, the default project when the entry had none
    internal_name: str
    start_time: pendulum.Time
    end_time: str  # "HH:mm", "24:00" for entries ending at midnight
    duration_minutes: int
    description: str
    ticket_key: Optional[str]
    issue_url: Optional[str]
    is_break: bool


class ExportResult(TypedDict):
    day: pendulum.Date
    status: Status
    records: list[ExportRecord]
    total_minutes: int  # Worked minutes, breaks excluded
    break_minutes: int
    expected_minutes: Optional[int]
    under_filled: bool
