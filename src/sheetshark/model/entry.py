# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from sheetshark.model.entity_id import EntityId


class TimeEntry(TypedDict):
    id: EntityId
    day: pendulum.Date  # Owning timesheet day
    start_time: pendulum.Time  # Minute resolution
    duration_mins: int
    description: str
    project_key: str  # "" falls back to the configured default project
    ticket_key: Optional[str]
    created: pendulum.DateTime
    updated: pendulum.DateTime
