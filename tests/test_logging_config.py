"""Tests for logging setup."""

import logging
import sys

import pytest
from sixslides.logging_config import setup_logging


@pytest.fixture(autouse=True)
def reset_logger():
    """Restore the package logger after each test."""
    logger = logging.getLogger("sixslides")
    saved = list(logger.handlers)
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        if handler not in saved:
            handler.close()
    for handler in saved:
        logger.addHandler(handler)


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_console_handler_uses_stderr(self):
        """Test console logs go to stderr, leaving stdout for deck output."""
        logger = setup_logging(level="DEBUG", force=True)

        streams = [h.stream for h in logger.handlers if type(h) is logging.StreamHandler]
        assert streams == [sys.stderr]
        assert logger.level == logging.DEBUG
        assert logger.propagate is False

    def test_log_file_handler(self, tmp_path):
        """Test an optional file handler is added."""
        log_file = tmp_path / "sixslides.log"
        logger = setup_logging(log_file=log_file, force=True)

        logger.info("written")
        for handler in logger.handlers:
            handler.flush()

        assert any(isinstance(h, logging.FileHandler) for h in logger.handlers)
        assert "written" in log_file.read_text()
