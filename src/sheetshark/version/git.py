# SPDX-License-Identifier: MIT

import logging
import shutil
import subprocess
from enum import Enum
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class GitUnavailableError(Exception):
    """Raised when data versioning is enabled but no git executable is found."""

    pass


class GitCommand(Enum):
    STATUS = 0
    INIT = 1
    CHECKPOINT = 2


class Git:
    def is_git_repo(self, folder: Path) -> bool:
        self.__fail_if_git_not_available()
        results = self.__execute_git_command(GitCommand.STATUS, folder)
        return "not a git repository" not in results[-1]

    def init(self, folder: Path) -> None:
        self.__fail_if_git_not_available()
        self.__execute_git_command(GitCommand.INIT, folder)
        logger.info("Initialized data versioning in %s", folder)

    def checkpoint(self, folder: Path, message: str) -> None:
        self.__fail_if_git_not_available()
        self.__execute_git_command(GitCommand.CHECKPOINT, folder, message=message)
        logger.debug("Created data checkpoint: %s", message)

    def __fail_if_git_not_available(self) -> None:
        if shutil.which("git") is None:
            raise GitUnavailableError("Git is not available on the system")

    def __execute_git_command(
        self, command: GitCommand, folder: Path, message: Optional[str] = None
    ) -> list[str]:
        base_command = ["git", "-C", str(folder.resolve())]
        git_commands: list[list[str]] = []

        match command:
            case GitCommand.STATUS:
                git_commands.append(base_command + ["status"])
            case GitCommand.INIT:
                git_commands.append(base_command + ["init"])
            case GitCommand.CHECKPOINT:
                git_commands.append(base_command + ["add", "-A"])
                git_commands.append(base_command + ["commit", "-m", message or ""])

        results = []
        for git_command in git_commands:
            result = subprocess.run(git_command, text=True, capture_output=True)
            results.append(result.stdout + result.stderr)
        return results
