# SPDX-License-Identifier: MIT

from pathlib import Path
from textwrap import dedent
from typing import Optional

import pendulum

from sheetshark import configuration
from sheetshark.repository.configuration import CONFIGURATION_REPO
from sheetshark.time import date_to_str
from sheetshark.version.git import Git

DATA_GITIGNORE = dedent("""
    *.log
    *.tmp
""").lstrip()


class Version:
    """
    Git checkpoints of the data directory.

    With versioning enabled every change to a day becomes a commit, so an
    exported day that was reopened and corrected can be traced afterwards.
    """

    def __init__(self, data_path: Optional[Path] = None) -> None:
        self.git = Git()
        self._data_path = data_path

    @property
    def data_path(self) -> Path:
        if self._data_path is not None:
            return self._data_path
        return configuration.DATA_PATH

    def initialize_data_versioning(self) -> None:
        if self.git.is_git_repo(self.data_path):
            return
        self.git.init(self.data_path)
        (self.data_path / ".gitignore").write_text(DATA_GITIGNORE)

    def create_data_checkpoint(self, message: str) -> None:
        if self.git.is_git_repo(self.data_path):
            self.git.checkpoint(self.data_path, message)

    def checkpoint_day(
        self, action: str, day: pendulum.Date, detail: Optional[str] = None
    ) -> None:
        """Commit the data directory after `action` changed `day`, if enabled."""
        if not CONFIGURATION_REPO.get_config()["use_git_versioning"]:
            return
        message = f"{action}: {date_to_str(day)}"
        if detail:
            message = f"{message}: {detail}"
        self.create_data_checkpoint(message)
