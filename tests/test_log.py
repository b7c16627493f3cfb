# SPDX-License-Identifier: MIT

import logging

from rich.logging import RichHandler

from sheetshark.log import setup_logging


def test_setup_logging_replaces_its_handlers(tmp_path):
    log_path = tmp_path / "sheet-shark.log"

    setup_logging("INFO", log_path)
    setup_logging("DEBUG", log_path)

    package_logger = logging.getLogger("sheetshark")
    rich_handlers = [
        handler for handler in package_logger.handlers if isinstance(handler, RichHandler)
    ]
    file_handlers = [
        handler
        for handler in package_logger.handlers
        if isinstance(handler, logging.FileHandler)
    ]
    assert len(rich_handlers) == 1
    assert rich_handlers[0].level == logging.DEBUG
    assert len(file_handlers) == 1
    assert package_logger.propagate is False


def test_module_loggers_write_to_the_log_file(tmp_path):
    log_path = tmp_path / "sheet-shark.log"
    setup_logging("ERROR", log_path)

    logging.getLogger("sheetshark.service.timesheet").info("Added entry tent_1")

    for handler in logging.getLogger("sheetshark").handlers:
        handler.flush()
    assert "Added entry tent_1" in log_path.read_text(encoding="utf-8")


def test_unknown_level_falls_back_to_warning():
    setup_logging("LOUD")

    rich_handler = next(
        handler
        for handler in logging.getLogger("sheetshark").handlers
        if isinstance(handler, RichHandler)
    )
    assert rich_handler.level == logging.WARNING
