# SPDX-License-Identifier: MIT

import pendulum

from sheetshark.model.entity_id import generate_entity_id
from sheetshark.model.entry import TimeEntry
from sheetshark.time import now_utc


def get_entry_template(day: pendulum.Date) -> TimeEntry:
    now = now_utc()
    return {
        "id": generate_entity_id(),
        "day": day,
        "start_time": pendulum.time(0, 0),  # Must be set
        "duration_mins": 0,  # Must be set
        "description": "",  # Must be set
        "project_key": "",
        "ticket_key": None,
        "created": now,
        "updated": now,
    }
