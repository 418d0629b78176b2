import logging

import pytest

from logging_config import setup_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, list(root.handlers)
    yield root
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


def test_repeated_setup_keeps_one_console_handler(root_logger):
    other = logging.NullHandler()
    root_logger.addHandler(other)

    setup_logging("debug")
    handler = setup_logging("warning")

    ours = [h for h in root_logger.handlers if h.get_name() == handler.get_name()]
    assert ours == [handler]
    assert other in root_logger.handlers
    assert root_logger.level == logging.WARNING


def test_unknown_level_name_falls_back_to_info(root_logger):
    handler = setup_logging("chatty")
    assert handler.level == logging.INFO
    assert logging.getLogger("urllib3").level == logging.WARNING
