# SPDX-License-Identifier: MIT

from typing import NotRequired, Optional, TypedDict

BREAK_PROJECT_KEY = "x"
BREAK_PROJECT_NAME = "Break"


class ProjectConfig(TypedDict):
    internal_name: str
    issue_tracker_url: NotRequired[Optional[str]]


class ProjectInfo(TypedDict):
    key: str
    internal_name: str
    issue_tracker_url: Optional[str]
