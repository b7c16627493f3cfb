# SPDX-License-Identifier: MIT

from pathlib import Path

import pendulum

from sheetshark.time import date_to_str


def get_export_file_path(exports_dir: Path, day: pendulum.Date, extension: str) -> Path:
    """exports/YYYY/MM/YYYY-MM-DD.<extension>"""
    return (
        exports_dir
        / f"{day.year:04d}"
        / f"{day.month:02d}"
        / f"{date_to_str(day)}.{extension}"
    )
