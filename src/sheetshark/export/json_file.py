# SPDX-License-Identifier: MIT

import json
from pathlib import Path
from typing import Any, Optional

import pendulum

from sheetshark.errors import StoreUnavailableError
from sheetshark.export.path import get_export_file_path
from sheetshark.model.export import ExportResult
from sheetshark.time import date_to_str, datetime_to_iso_str, now_utc, time_to_str


class ProjectKind:
    CONFIGURED = "Configured"
    SPECIAL_BREAK = "SpecialBreak"


def export_to_json(result: ExportResult, exports_dir: Path) -> Path:
    file_path = get_export_file_path(exports_dir, result["day"], "json")
    content = generate_json_content(result) + "\n"
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise StoreUnavailableError(f"Cannot write {file_path}: {e}") from e
    return file_path


def generate_json_content(
    result: ExportResult, exported_at: Optional[pendulum.DateTime] = None
) -> str:
    projects: dict[str, dict[str, str]] = {}
    entries: list[dict[str, Any]] = []

    for record in result["records"]:
        projects[record["project_key"]] = {
            "internal_name": record["internal_name"],
            "kind": (
                ProjectKind.SPECIAL_BREAK
                if record["is_break"]
                else ProjectKind.CONFIGURED
            ),
        }

        entry: dict[str, Any] = {
            "start": time_to_str(record["start_time"]),
            "end": record["end_time"],
            "project_key": record["project_key"],
            "duration_mins": record["duration_minutes"],
            "description": record["description"],
        }
        if record["ticket_key"] is not None:
            entry["ticket"] = record["ticket_key"]
        if record["issue_url"] is not None:
            entry["issue_url"] = record["issue_url"]
        entries.append(entry)

    document = {
        "meta": {
            "day": date_to_str(result["day"]),
            "exported_at": datetime_to_iso_str(exported_at or now_utc()),
            "total_minutes": result["total_minutes"],
            "break_minutes": result["break_minutes"],
            "under_filled": result["under_filled"],
        },
        "projects": dict(sorted(projects.items())),
        "entries": entries,
    }
    return json.dumps(document, indent=2, ensure_ascii=False)
