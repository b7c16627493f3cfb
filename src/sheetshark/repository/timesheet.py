# SPDX-License-Identifier: MIT

import logging
import os
import tempfile
import threading
from collections import Counter
from collections.abc import Iterator
from contextlib import contextmanager
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional

import pendulum
from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from sheetshark import configuration, time
from sheetshark.errors import DayNotFoundError, EntryNotFoundError, StoreUnavailableError
from sheetshark.model.entry import TimeEntry
from sheetshark.model.mutation import Mutation, Operation
from sheetshark.model.status import Status
from sheetshark.model.timesheet import StatusChange, Timesheet
from sheetshark.template.timesheet import get_timesheet_template

logger = logging.getLogger(__name__)


def _sort_entries(entries: list[TimeEntry]) -> None:
    entries.sort(key=lambda entry: (entry["start_time"], entry["id"]))


class DayTransaction:
    """
    Working copy of one timesheet day inside TimesheetRepository.transaction().

    Mutations only touch the working copy. The repository writes it back when
    the transaction block exits without an exception.
    """

    def __init__(self, day: pendulum.Date, timesheet: Optional[Timesheet]) -> None:
        self.day = day
        self.timesheet: Timesheet = (
            timesheet if timesheet is not None else get_timesheet_template(day)
        )
        self.is_dirty = False

    @property
    def exists(self) -> bool:
        return len(self.timesheet["entries"]) > 0

    @property
    def status(self) -> Status:
        return self.timesheet["status"]

    @property
    def entries(self) -> list[TimeEntry]:
        return deepcopy(self.timesheet["entries"])

    def commit(self, mutation: Mutation) -> None:
        entry = deepcopy(mutation["entry"])
        if entry["day"] != self.day:
            raise ValueError(
                f"Entry belongs to {entry['day']}, not to the transaction day {self.day}"
            )
        entries = self.timesheet["entries"]

        match mutation["operation"]:
            case Operation.ADD:
                entries.append(entry)
            case Operation.EDIT:
                index = self.__index_of(entry["id"])
                entry["created"] = entries[index]["created"]
                entry["updated"] = time.now_utc()
                entries[index] = entry
            case Operation.REMOVE:
                del entries[self.__index_of(entry["id"])]

        _sort_entries(entries)
        self.timesheet["updated"] = time.now_utc()
        self.is_dirty = True

    def set_status(self, status: Status) -> None:
        if not self.exists:
            raise DayNotFoundError(f"There is no timesheet for {self.day}.")
        if self.timesheet["status"] == status:
            return
        now = time.now_utc()
        change: StatusChange = {"status": status, "changed": now}
        self.timesheet["status"] = status
        self.timesheet["status_history"].append(change)
        self.timesheet["updated"] = now
        self.is_dirty = True

    def __index_of(self, entry_id: str) -> int:
        for index, entry in enumerate(self.timesheet["entries"]):
            if entry["id"] == entry_id:
                return index
        raise EntryNotFoundError(f"Entry {entry_id} does not exist on {self.day}.")


class TimesheetRepository:
    """
    One YAML document per day holding the timesheet record and its entries.

    Every write goes through transaction(), which serializes all mutations in
    the process, so validating against the current entries and writing the
    result cannot be interleaved with another mutation.
    """

    def __init__(self, timesheets_dir: Optional[Path] = None) -> None:
        self._timesheets_dir = timesheets_dir
        self._lock = threading.RLock()

    @property
    def timesheets_dir(self) -> Path:
        if self._timesheets_dir is not None:
            return self._timesheets_dir
        return configuration.DATA_TIMESHEETS_DIR

    @contextmanager
    def transaction(self, day: pendulum.Date) -> Iterator[DayTransaction]:
        with self._lock:
            transaction = DayTransaction(day, self.__load_timesheet(day))
            yield transaction
            if transaction.is_dirty:
                self.__save_timesheet(transaction.timesheet)

    def get_timesheet(self, day: pendulum.Date) -> Optional[Timesheet]:
        with self._lock:
            return self.__load_timesheet(day)

    def entries_for(self, day: pendulum.Date) -> list[TimeEntry]:
        timesheet = self.get_timesheet(day)
        if timesheet is None:
            return []
        return timesheet["entries"]

    def get_timesheets_of_month(self, day: pendulum.Date) -> list[Timesheet]:
        month_prefix = day.format("YYYY-MM")
        with self._lock:
            timesheets = [
                self.__load_file(file_path)
                for file_path in self.__day_files()
                if file_path.stem.startswith(month_prefix)
            ]
        return sorted(timesheets, key=lambda timesheet: timesheet["day"])

    def suggest_tickets(
        self, query: str, since: Optional[pendulum.Date] = None, limit: int = 20
    ) -> list[str]:
        """
        Ticket keys used after `since`, most used first.

        A query like "proj-12" matches the project prefix and the issue number
        separately, so "proj-12" finds "PROJ-123" and "PROJECT-1200".
        """
        query = query.strip().lower()
        jira_project, separator, issue_key = query.partition("-")

        counts: Counter[str] = Counter()
        spelling: dict[str, str] = {}
        with self._lock:
            for file_path in self.__day_files():
                if since is not None and file_path.stem <= time.date_to_str(since):
                    continue
                for entry in self.__load_file(file_path)["entries"]:
                    ticket_key = entry["ticket_key"]
                    if ticket_key is None:
                        continue
                    lowered = ticket_key.lower()
                    if separator:
                        if not lowered.startswith(jira_project):
                            continue
                        if f"-{issue_key}" not in lowered:
                            continue
                    elif not lowered.startswith(query):
                        continue
                    counts[lowered] += 1
                    spelling.setdefault(lowered, ticket_key)

        ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        return [spelling[lowered] for lowered, _ in ranked[:limit]]

    def __file_path(self, day: pendulum.Date) -> Path:
        return self.timesheets_dir / f"{time.date_to_str(day)}.yaml"

    def __day_files(self) -> list[Path]:
        try:
            if not self.timesheets_dir.is_dir():
                return []
            return sorted(
                file_path
                for file_path in self.timesheets_dir.iterdir()
                if file_path.suffix == ".yaml"
            )
        except OSError as e:
            raise StoreUnavailableError(
                f"Cannot list timesheets in {self.timesheets_dir}: {e}"
            ) from e

    def __load_timesheet(self, day: pendulum.Date) -> Optional[Timesheet]:
        file_path = self.__file_path(day)
        try:
            if not file_path.is_file():
                return None
        except OSError as e:
            raise StoreUnavailableError(f"Cannot access {file_path}: {e}") from e
        timesheet = self.__load_file(file_path)
        if len(timesheet["entries"]) == 0:
            return None
        return timesheet

    def __load_file(self, file_path: Path) -> Timesheet:
        try:
            raw_timesheet = load(file_path.read_text(encoding="utf-8"), Loader=Loader)
            return self.__convert_timesheet_for_deserialization(raw_timesheet)
        except (OSError, YAMLError) as e:
            raise StoreUnavailableError(f"Cannot read {file_path}: {e}") from e
        except (KeyError, TypeError, ValueError) as e:
            raise StoreUnavailableError(f"Malformed timesheet {file_path}: {e}") from e

    def __save_timesheet(self, timesheet: Timesheet) -> None:
        file_path = self.__file_path(timesheet["day"])
        try:
            if len(timesheet["entries"]) == 0:
                if file_path.exists():
                    logger.warning(
                        "Removing timesheet %s, its last entry was deleted",
                        timesheet["day"],
                    )
                    file_path.unlink()
                return

            file_path.parent.mkdir(parents=True, exist_ok=True)
            content = dump(
                self.__convert_timesheet_for_serialization(timesheet),
                Dumper=Dumper,
                sort_keys=False,
                allow_unicode=True,
            )
            # Replace the whole day in one step so readers never see half a write
            descriptor, temp_name = tempfile.mkstemp(
                dir=file_path.parent, prefix=f".{file_path.stem}.", suffix=".tmp"
            )
            try:
                with os.fdopen(descriptor, "w", encoding="utf-8") as temp_file:
                    temp_file.write(content)
                os.replace(temp_name, file_path)
            except BaseException:
                Path(temp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StoreUnavailableError(f"Cannot write {file_path}: {e}") from e

        logger.info(
            "Stored timesheet %s (%s, %d entries)",
            timesheet["day"],
            timesheet["status"],
            len(timesheet["entries"]),
        )

    def __convert_timesheet_for_serialization(
        self, timesheet: Timesheet
    ) -> dict[str, Any]:
        return {
            "day": time.date_to_str(timesheet["day"]),
            "status": timesheet["status"],
            "created": time.datetime_to_iso_str(timesheet["created"]),
            "updated": time.datetime_to_iso_str(timesheet["updated"]),
            "status_history": [
                {
                    "status": change["status"],
                    "changed": time.datetime_to_iso_str(change["changed"]),
                }
                for change in timesheet["status_history"]
            ],
            "entries": [
                {
                    "id": entry["id"],
                    "start_time": time.time_to_str(entry["start_time"]),
                    "duration_mins": entry["duration_mins"],
                    "description": entry["description"],
                    "project_key": entry["project_key"],
                    "ticket_key": entry["ticket_key"],
                    "created": time.datetime_to_iso_str(entry["created"]),
                    "updated": time.datetime_to_iso_str(entry["updated"]),
                }
                for entry in timesheet["entries"]
            ],
        }

    def __convert_timesheet_for_deserialization(
        self, raw_timesheet: dict[str, Any]
    ) -> Timesheet:
        day = time.date_from_str(str(raw_timesheet["day"]))
        entries: list[TimeEntry] = [
            {
                "id": raw_entry["id"],
                "day": day,
                "start_time": time.time_from_str(str(raw_entry["start_time"])),
                "duration_mins": int(raw_entry["duration_mins"]),
                "description": raw_entry["description"],
                "project_key": raw_entry.get("project_key") or "",
                "ticket_key": raw_entry.get("ticket_key"),
                "created": time.datetime_from_str(raw_entry["created"]),
                "updated": time.datetime_from_str(raw_entry["updated"]),
            }
            for raw_entry in raw_timesheet.get("entries") or []
        ]
        _sort_entries(entries)
        return {
            "day": day,
            "status": raw_timesheet["status"],
            "entries": entries,
            "status_history": [
                {
                    "status": raw_change["status"],
                    "changed": time.datetime_from_str(raw_change["changed"]),
                }
                for raw_change in raw_timesheet.get("status_history") or []
            ],
            "created": time.datetime_from_str(raw_timesheet["created"]),
            "updated": time.datetime_from_str(raw_timesheet["updated"]),
        }


TIMESHEET_REPO = TimesheetRepository()
