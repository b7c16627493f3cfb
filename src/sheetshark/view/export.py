# SPDX-License-Identifier: MIT

from pathlib import Path

from rich import box
from rich.console import Console
from rich.table import Table

from sheetshark.model.export import ExportResult
from sheetshark.model.summary import BookingLink, DefragmentedEntry
from sheetshark.time import date_to_display_str, time_to_str
from sheetshark.view.header import header
from sheetshark.view.util import render_minutes, render_status


def export_view(result: ExportResult) -> None:
    header(f"export {date_to_display_str(result['day'])}")

    records_table = Table(box=box.SIMPLE)
    records_table.add_column("start")
    records_table.add_column("end")
    records_table.add_column("duration", justify="right")
    records_table.add_column("project")
    records_table.add_column("ticket")
    records_table.add_column("description")

    for record in result["records"]:
        ticket = record["ticket_key"] or ""
        if record["issue_url"] is not None:
            ticket = f"[link={record['issue_url']}]{ticket}[/link]"
        records_table.add_row(
            time_to_str(record["start_time"]),
            record["end_time"],
            render_minutes(record["duration_minutes"]),
            record["internal_name"],
            ticket,
            record["description"],
            style="bright_black" if record["is_break"] else None,
        )

    console = Console()
    console.print(records_table)
    console.print(
        f" status {render_status(result['status'])}"
        f"  worked [bold]{render_minutes(result['total_minutes'])}[/bold]"
        f"  breaks {render_minutes(result['break_minutes'])}"
    )
    if result["under_filled"] and result["expected_minutes"] is not None:
        console.print(
            f" [yellow]under filled: {render_minutes(result['total_minutes'])}"
            f" of {render_minutes(result['expected_minutes'])} expected[/yellow]"
        )


def export_file_view(file_path: Path) -> None:
    console = Console()
    console.print(f" exported to [cyan]{file_path}[/cyan]")


def bookings_view(
    defragmented: list[DefragmentedEntry], links: list[BookingLink]
) -> None:
    header("bookings")

    blocks_table = Table(box=box.SIMPLE)
    blocks_table.add_column("start")
    blocks_table.add_column("end")
    blocks_table.add_column("project")
    blocks_table.add_column("ticket")
    for block in defragmented:
        blocks_table.add_row(
            block["start_time"],
            block["end_time"],
            block["project_key"],
            block["ticket_key"],
        )

    links_table = Table(box=box.SIMPLE)
    links_table.add_column("ticket")
    links_table.add_column("time", justify="right")
    links_table.add_column("url", overflow="fold")
    for link in links:
        links_table.add_row(
            link["ticket_key"], render_minutes(link["minutes"]), link["url"]
        )

    console = Console()
    console.print(blocks_table)
    if len(links) > 0:
        console.print(links_table)
    else:
        console.print(" [bright_black]no tickets with an issue tracker[/bright_black]")
