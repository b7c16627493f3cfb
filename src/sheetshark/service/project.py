# SPDX-License-Identifier: MIT

from collections.abc import Mapping
from types import MappingProxyType
from typing import Optional

from sheetshark.errors import UnknownProjectError
from sheetshark.model.project import (
    BREAK_PROJECT_KEY,
    BREAK_PROJECT_NAME,
    ProjectConfig,
    ProjectInfo,
)
from sheetshark.repository.configuration import CONFIGURATION_REPO


class ProjectDirectory:
    """
    Read-only mapping of short project keys to their descriptive metadata.

    A directory is a snapshot: it copies the project configuration when it is
    built, so a configuration change never shows up halfway through an export.
    """

    def __init__(
        self,
        projects: Mapping[str, ProjectConfig],
        default_project_key: Optional[str] = None,
    ) -> None:
        snapshot: dict[str, ProjectInfo] = {}
        for key, project in projects.items():
            snapshot[key] = {
                "key": key,
                "internal_name": project["internal_name"],
                "issue_tracker_url": project.get("issue_tracker_url") or None,
            }
        self._projects: Mapping[str, ProjectInfo] = MappingProxyType(snapshot)
        self._default_project_key = (
            default_project_key.strip()
            if default_project_key is not None and default_project_key.strip()
            else None
        )

    def resolve(self, key: str) -> Optional[ProjectInfo]:
        """Return the project for a key, or None when the key is unknown."""
        project = self._projects.get(key)
        if project is not None:
            return ProjectInfo(**project)
        if key == BREAK_PROJECT_KEY:
            return {
                "key": BREAK_PROJECT_KEY,
                "internal_name": BREAK_PROJECT_NAME,
                "issue_tracker_url": None,
            }
        return None

    def default_key(self) -> Optional[str]:
        return self._default_project_key

    def effective_key(self, project_key: Optional[str]) -> Optional[str]:
        """The key an entry books on: its own, or the default when blank."""
        if project_key is None or project_key.strip() == "":
            return self._default_project_key
        return project_key

    def resolve_entry_project(self, project_key: Optional[str]) -> ProjectInfo:
        """
        Resolve an entry's project key, falling back to the default key when the
        entry has none.

        Raises:
            UnknownProjectError: if the key (or the default) is not configured
        """
        key = self.effective_key(project_key)
        if key is None:
            raise UnknownProjectError("")
        project = self.resolve(key)
        if project is None:
            raise UnknownProjectError(key)
        return project

    def keys(self) -> list[str]:
        return sorted(self._projects.keys())

    def is_configured(self, key: str) -> bool:
        return key in self._projects


def get_project_directory() -> ProjectDirectory:
    """Build a directory snapshot from the current configuration."""
    config = CONFIGURATION_REPO.get_config()
    return ProjectDirectory(config["projects"], config["default_project_key"])
