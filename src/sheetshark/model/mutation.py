# SPDX-License-Identifier: MIT

from enum import Enum
from typing import TypedDict

from sheetshark.model.entry import TimeEntry


class Operation(Enum):
    ADD = "add"
    EDIT = "edit"
    REMOVE = "remove"


class Mutation(TypedDict):
    operation: Operation
    entry: TimeEntry
