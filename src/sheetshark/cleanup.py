# SPDX-License-Identifier: MIT

import atexit

from sheetshark.repository.configuration import CONFIGURATION_REPO


def flush() -> None:
    # Timesheets are written per transaction, only configuration edits are buffered
    CONFIGURATION_REPO.flush()


def register_cleanup() -> None:
    atexit.register(flush)
