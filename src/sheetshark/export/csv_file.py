# SPDX-License-Identifier: MIT

import csv
from pathlib import Path
from typing import TextIO

from sheetshark.errors import StoreUnavailableError
from sheetshark.export.path import get_export_file_path
from sheetshark.model.export import ExportRecord, ExportResult
from sheetshark.time import minutes_from_str, time_to_minutes

BREAK_LABEL = "Pause"

CSV_HEADER = [
    "",
    "start",
    "",
    "",
    "",
    "end",
    "",
    "",
    "",
    "proj",
    "tracking code",
    "",
    "",
    "",
    "duration",
    "min",
    "h",
]


def export_to_csv(result: ExportResult, exports_dir: Path) -> Path:
    file_path = get_export_file_path(exports_dir, result["day"], "csv")
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with file_path.open("w", encoding="utf-8", newline="") as csv_file:
            generate_csv_content(result, csv_file)
    except OSError as e:
        raise StoreUnavailableError(f"Cannot write {file_path}: {e}") from e
    return file_path


def generate_csv_content(result: ExportResult, writer: TextIO) -> None:
    """
    Write the records in the spreadsheet layout used for time booking: a
    fixed 17 column grid with spacer columns, times as hour, minute and
    HH:MM:SS, and the duration as HH:MM:SS, minutes and fractional hours.
    """
    csv_writer = csv.writer(writer, lineterminator="\n")
    csv_writer.writerow(CSV_HEADER)
    for record in result["records"]:
        csv_writer.writerow(__csv_row(record))


def __csv_row(record: ExportRecord) -> list[str]:
    start_mins = time_to_minutes(record["start_time"])
    end_mins = minutes_from_str(record["end_time"])
    if end_mins is None:
        end_mins = start_mins + record["duration_minutes"]
    duration_secs = record["duration_minutes"] * 60

    project_label = BREAK_LABEL if record["is_break"] else record["project_key"]

    return [
        "",
        str(start_mins // 60),
        str(start_mins % 60),
        format_hms(start_mins * 60),
        "",
        str(end_mins // 60),
        str(end_mins % 60),
        format_hms(end_mins * 60),
        "",
        project_label,
        record["ticket_key"] or "",
        "",
        record["description"],
        "",
        format_hms(duration_secs),
        str(record["duration_minutes"]),
        format_hours(duration_secs),
    ]


def format_hours(seconds: int) -> str:
    # Whole hours without a trailing ".0"
    hours = seconds / 3600
    return str(int(hours)) if hours.is_integer() else str(hours)


def format_hms(seconds: int) -> str:
    return f"{seconds // 3600:02d}:{(seconds % 3600) // 60:02d}:{seconds % 60:02d}"
