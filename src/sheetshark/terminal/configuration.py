# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from sheetshark import configuration
from sheetshark.model.project import BREAK_PROJECT_KEY, ProjectConfig
from sheetshark.repository.configuration import CONFIGURATION_REPO
from sheetshark.service.project import get_project_directory
from sheetshark.terminal.completion import complete_project
from sheetshark.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def __settings_table(
    config: configuration.Configuration, title: Optional[str] = None
) -> Table:
    table = Table(title=title)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row(
        "use_git_versioning",
        "✓ Enabled" if config["use_git_versioning"] else "✗ Disabled",
    )
    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row(
        "default_project_key",
        config["default_project_key"]
        if config["default_project_key"] is not None
        else "None",
    )
    table.add_row(
        "expected_daily_minutes",
        str(config["expected_daily_minutes"])
        if config["expected_daily_minutes"]
        else "None (no under-fill warning)",
    )
    table.add_row(
        "ticket_suggestion_days", str(config.get("ticket_suggestion_days", 180))
    )
    table.add_row("log_level", config["log_level"])
    table.add_row("data_path", str(configuration.DATA_PATH))
    return table


def __projects_table(config: configuration.Configuration) -> Table:
    table = Table(title="Projects")
    table.add_column("Key", style="cyan")
    table.add_column("Internal Name", style="magenta")
    table.add_column("Issue Tracker URL")

    for key in sorted(config["projects"]):
        project = config["projects"][key]
        table.add_row(
            key,
            project["internal_name"],
            project.get("issue_tracker_url") or "",
        )
    return table


@app.command("view, v")
def view() -> None:
    """Display current configuration settings and projects."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    console.print(__settings_table(config))

    if config["projects"]:
        console.print()
        console.print(__projects_table(config))
    else:
        console.print("\nNo projects configured")

    yaml_library_type = "untested"
    try:
        from yaml import CLoader as Loader  # noqa: F401

        yaml_library_type = "C"
    except ImportError:
        yaml_library_type = "Python"

    console.print()
    console.print(f"YAML Library Type: {yaml_library_type}")


@app.command("set, s")
def set(
    use_git_versioning: Annotated[
        Optional[bool],
        typer.Option(
            "--use-git-versioning/--no-use-git-versioning",
            help="Enable/disable git checkpoints of the data directory",
        ),
    ] = None,
    show_header: Annotated[
        Optional[bool],
        typer.Option(
            "--show-header/--no-show-header",
            help="Enable/disable the header above reports",
        ),
    ] = None,
    default_project_key: Annotated[
        Optional[str],
        typer.Option(
            "--default-project",
            help="Project key used for entries without one",
            autocompletion=complete_project,
        ),
    ] = None,
    remove_default_project_key: Annotated[
        bool,
        typer.Option("--remove-default-project", help="Unset the default project"),
    ] = False,
    expected_daily_minutes: Annotated[
        Optional[int],
        typer.Option(
            "--expected-daily-minutes",
            min=0,
            help="Minutes a full day should contain, 0 disables the warning",
        ),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="One of " + ", ".join(LOG_LEVELS)),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option(
            "--data-path",
            help="Directory path for storing timesheets and exports",
        ),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path",
            help="Reset data path to the platform default",
        ),
    ] = False,
) -> None:
    """
    Update configuration settings.
    """
    console = Console()

    if log_level is not None and log_level.upper() not in LOG_LEVELS:
        console.print(
            f"[red]Error: log level must be one of {', '.join(LOG_LEVELS)}[/red]"
        )
        raise typer.Exit(1)

    CONFIGURATION_REPO.update_config(
        use_git_versioning=use_git_versioning,
        show_header=show_header,
        default_project_key=default_project_key.strip()
        if default_project_key is not None
        else None,
        remove_default_project_key=remove_default_project_key,
        expected_daily_minutes=expected_daily_minutes,
        log_level=log_level,
        data_path=data_path,
        remove_data_path=remove_data_path,
    )

    config = CONFIGURATION_REPO.get_config()

    console.print("[green]Configuration updated successfully![/green]\n")
    console.print(__settings_table(config, title="Updated Configuration"))

    default_key = config["default_project_key"]
    if default_key is not None and not get_project_directory().is_configured(
        default_key
    ):
        console.print(
            f"\n[yellow]Warning: default project '{default_key}' is not configured, "
            "exports will fail until it is added[/yellow]"
        )


@app.command("project-add, pa")
def project_add(
    key: Annotated[str, typer.Argument(help="Short key used on entries")],
    internal_name: Annotated[
        str, typer.Argument(help="Name of the project in exports")
    ],
    issue_tracker_url: Annotated[
        Optional[str],
        typer.Option(
            "--issue-tracker-url",
            "-u",
            help="Base URL of the issue tracker, enables ticket links",
        ),
    ] = None,
) -> None:
    """Add a project, or replace the one with the same key."""
    console = Console()
    project_key = key.strip()

    if project_key == "":
        console.print("[red]Error: project key must not be blank[/red]")
        raise typer.Exit(1)
    if project_key == BREAK_PROJECT_KEY:
        console.print(
            f"[red]Error: '{BREAK_PROJECT_KEY}' is reserved for breaks[/red]"
        )
        raise typer.Exit(1)

    project: ProjectConfig = {"internal_name": internal_name.strip()}
    if issue_tracker_url:
        project["issue_tracker_url"] = issue_tracker_url.strip()

    CONFIGURATION_REPO.set_project(project_key, project)

    console.print(f"[green]Saved project '{project_key}'[/green]\n")
    console.print(__projects_table(CONFIGURATION_REPO.get_config()))


@app.command("project-remove, pr")
def project_remove(
    key: Annotated[
        str,
        typer.Argument(help="Key of the project", autocompletion=complete_project),
    ],
) -> None:
    """Remove a project from config."""
    console = Console()

    if not CONFIGURATION_REPO.remove_project(key.strip()):
        console.print(f"[red]Error: Project '{key}' not found[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Removed project '{key.strip()}'[/green]")
