# SPDX-License-Identifier: MIT

import pendulum

from sheetshark.model.status import TimesheetStatus
from sheetshark.model.timesheet import Timesheet
from sheetshark.time import now_utc


def get_timesheet_template(day: pendulum.Date) -> Timesheet:
    now = now_utc()
    return {
        "day": day,
        "status": TimesheetStatus.OPEN,
        "entries": [],
        "status_history": [],
        "created": now,
        "updated": now,
    }
