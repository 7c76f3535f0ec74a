"""Tests for logging setup."""

import logging

import pytest

from imagery.derivatives.logging_config import setup_logging


@pytest.fixture(autouse=True)
def reset_logger():
    """Restore the engine logger after each test."""
    logger = logging.getLogger("derivatives")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)


class TestSetupLogging:
    def test_returns_engine_logger(self):
        logger = setup_logging("DEBUG")
        assert logger.name == "derivatives"
        assert logger.level == logging.DEBUG

    def test_repeated_calls_do_not_duplicate_handlers(self):
        setup_logging()
        count = len(logging.getLogger("derivatives").handlers)
        setup_logging()
        assert len(logging.getLogger("derivatives").handlers) == count

    def test_unknown_level_falls_back_to_info(self):
        assert setup_logging("chatty").level == logging.INFO

    def test_quietens_pyvips(self):
        setup_logging()
        assert logging.getLogger("pyvips").level == logging.WARNING
