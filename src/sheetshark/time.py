# SPDX-License-Identifier: MIT

import re
from typing import Optional, cast

import pendulum

MINUTES_PER_DAY = 24 * 60

_DATE_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def today_local() -> pendulum.Date:
    return pendulum.today("local").date()


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def date_to_str(date: pendulum.Date) -> str:
    """Format a date as 'YYYY-MM-DD', the identity key of a timesheet day."""
    return date.format("YYYY-MM-DD")


def date_from_str(date: str) -> pendulum.Date:
    """Parse a 'YYYY-MM-DD' string, raising ValueError on anything else."""
    match = _DATE_PATTERN.match(date)
    if match is None:
        raise ValueError(f"Expected a date in YYYY-MM-DD format, got '{date}'")
    year, month, day = (int(part) for part in match.groups())
    return pendulum.date(year, month, day)


def date_to_display_str(date: pendulum.Date) -> str:
    return date.format("YYYY-MM-DD ddd")


def time_to_str(time: pendulum.Time) -> str:
    return time.format("HH:mm")


def time_from_str(time: str) -> pendulum.Time:
    """Parse an '(H)H:mm' string, raising ValueError on anything else."""
    match = _TIME_PATTERN.match(time.strip())
    if match is None:
        raise ValueError(f"Expected a time in HH:mm format, got '{time}'")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValueError(f"Time out of range: '{time}'")
    return pendulum.time(hour, minute)


def time_to_minutes(time: pendulum.Time) -> int:
    return time.hour * 60 + time.minute


def minutes_to_str(minutes: int) -> str:
    """Format minutes since midnight as 'HH:mm'; 1440 renders as '24:00'."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def minutes_from_str(time: str) -> Optional[int]:
    match = _TIME_PATTERN.match(time)
    if match is None:
        return None
    return int(match.group(1)) * 60 + int(match.group(2))


def duration_to_str(minutes: int) -> str:
    return f"{minutes // 60}:{minutes % 60:02d}"


def start_of_month(date: pendulum.Date) -> pendulum.Date:
    return date.start_of("month")


def end_of_month(date: pendulum.Date) -> pendulum.Date:
    return date.end_of("month")
