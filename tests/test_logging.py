"""Tests for the logging setup."""

import logging

import pytest

from booking_platform_api.app.core.logging_config import setup_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    root.handlers = []
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)


def test_handlers_are_added_once_and_file_dir_created(root_logger, tmp_path):
    logfile = tmp_path / "logs" / "api.log"
    setup_logging("info", str(logfile))
    setup_logging("debug", str(logfile))

    names = sorted(handler.get_name() for handler in root_logger.handlers)
    assert names == ["booking-console", "booking-file"]
    assert root_logger.level == logging.DEBUG
    assert logfile.parent.is_dir()

    logging.getLogger("booking_platform_api.test").debug("written to file")
    for handler in root_logger.handlers:
        handler.flush()
    assert "written to file" in logfile.read_text(encoding="utf-8")


def test_multipart_parser_is_kept_quiet(root_logger):
    setup_logging("INFO")
    assert logging.getLogger("python_multipart").level == logging.WARNING
    assert logging.getLogger("multipart").level == logging.WARNING
