# SPDX-License-Identifier: MIT

from typing import Literal, TypeAlias

Status: TypeAlias = Literal["OPEN", "EXPORTED"]


class TimesheetStatus:
    OPEN: Status = "OPEN"
    EXPORTED: Status = "EXPORTED"
