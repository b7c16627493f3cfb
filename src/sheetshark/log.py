# SPDX-License-Identifier: MIT

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_HANDLER_MARKER = "_sheetshark_handler"


def setup_logging(level: str = "WARNING", log_path: Optional[Path] = None) -> None:
    """
    Route the package loggers to stderr through rich, and to a log file.

    Calling it again replaces the handlers installed by a previous call, so
    the level can be changed after the configuration has been loaded.
    """
    package_logger = logging.getLogger("sheetshark")
    package_logger.setLevel(logging.DEBUG)
    package_logger.propagate = False

    for handler in list(package_logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            package_logger.removeHandler(handler)
            handler.close()

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setLevel(_parse_level(level))
    setattr(console_handler, _HANDLER_MARKER, True)
    package_logger.addHandler(console_handler)

    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        setattr(file_handler, _HANDLER_MARKER, True)
        package_logger.addHandler(file_handler)


def _parse_level(level: str) -> int:
    resolved = logging.getLevelName(level.upper())
    if isinstance(resolved, int):
        return resolved
    return logging.WARNING
