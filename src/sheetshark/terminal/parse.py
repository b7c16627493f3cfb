# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from sheetshark.model.entity_id import EntityId, is_entity_id
from sheetshark.model.entry import TimeEntry
from sheetshark.time import date_from_str, time_from_str, today_local

DAY_HELP = "valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1"

_DURATION_TEXT_PATTERN = re.compile(r"^(?:(\d+)\s*h)?\s*(?:(\d+)\s*m(?:in)?)?$")
_DURATION_CLOCK_PATTERN = re.compile(r"^(\d+):([0-5]\d)$")


def parse_day(day_param: Optional[str | int]) -> Optional[pendulum.Date]:
    if day_param is None:
        return None

    day = str(day_param).strip()

    if re.match(r"^\d{4}-\d{2}-\d{2}$", day):
        try:
            return date_from_str(day)
        except ValueError as e:
            raise typer.BadParameter(str(e))

    # Numeric input for relative days (e.g., "1", "-1")
    if re.match(r"^-?\d+$", day):
        return today_local().add(days=int(day))

    if day == "today" or day == "t":
        return today_local()
    if day == "yesterday" or day == "y":
        return today_local().subtract(days=1)
    if day == "tomorrow" or day == "o":
        return today_local().add(days=1)
    raise typer.BadParameter(DAY_HELP)


def parse_time(time_param: Optional[str]) -> Optional[pendulum.Time]:
    """
    Parse a time string in (H)H:mm format.

    Raises:
        typer.BadParameter: If the time format is invalid or values are out of range
    """
    if time_param is None:
        return None
    try:
        return time_from_str(time_param)
    except ValueError as e:
        raise typer.BadParameter(str(e))


def parse_duration(duration_param: Optional[str | int]) -> Optional[int]:
    """
    Parse a duration into minutes.

    Accepts plain minutes ("90"), clock notation ("1:30") and hour/minute
    text ("1h30m", "2h", "45m").
    """
    if duration_param is None:
        return None

    duration = str(duration_param).strip().lower()

    if re.match(r"^\d+$", duration):
        return int(duration)

    clock_match = _DURATION_CLOCK_PATTERN.match(duration)
    if clock_match:
        return int(clock_match.group(1)) * 60 + int(clock_match.group(2))

    text_match = _DURATION_TEXT_PATTERN.match(duration)
    if text_match and (text_match.group(1) or text_match.group(2)):
        hours = int(text_match.group(1) or 0)
        minutes = int(text_match.group(2) or 0)
        return hours * 60 + minutes

    raise typer.BadParameter(
        f"Duration must be minutes (90), H:mm (1:30) or 1h30m, got '{duration_param}'"
    )


def parse_optional_key(key_param: Optional[str]) -> Optional[str]:
    """Strip a project or ticket key; a blank key means 'not given'."""
    if key_param is None:
        return None
    key = key_param.strip()
    return key if key != "" else None


def resolve_entry_reference(entries: list[TimeEntry], reference: str) -> EntityId:
    """
    Resolve an entry reference: a 1-based position in the day listing or a
    full entry id.
    """
    reference = reference.strip()
    if re.match(r"^\d+$", reference):
        position = int(reference)
        if position < 1 or position > len(entries):
            raise typer.BadParameter(
                f"No entry at position {position}, the day has {len(entries)} entries"
            )
        return entries[position - 1]["id"]

    if is_entity_id(reference):
        return reference

    raise typer.BadParameter(
        f"Expected an entry position or an entry id, got '{reference}'"
    )
