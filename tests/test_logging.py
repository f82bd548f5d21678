"""Tests for logging setup."""

import logging

import pytest

from clipmark.logging_config import setup_logging


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger("clipmark")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_console_goes_to_stderr(self, capsys):
        """Test records are written to stderr, never stdout."""
        logger = setup_logging("INFO", force=True)

        logger.info("hello")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "INFO clipmark: hello" in captured.err

    def test_level_and_fallback(self):
        """Test level names and the INFO fallback."""
        assert setup_logging("debug", force=True).level == logging.DEBUG
        assert setup_logging("nonsense", force=True).level == logging.INFO

    def test_keeps_handlers_unless_forced(self):
        """Test a second call without force leaves handlers alone."""
        logger = setup_logging(force=True)
        handlers = list(logger.handlers)

        setup_logging("ERROR")

        assert logger.handlers == handlers
        assert logger.level == logging.ERROR
        assert logger.propagate is False

    def test_log_file(self, tmp_path):
        """Test records are appended to the log file with timestamps."""
        log_file = tmp_path / "clip.log"
        logger = setup_logging("WARNING", str(log_file), force=True)

        logging.getLogger("clipmark.conversion").warning("careful")
        for handler in logger.handlers:
            handler.flush()

        assert " - clipmark.conversion - WARNING - careful" in log_file.read_text(encoding="utf-8")
