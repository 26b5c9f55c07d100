"""
Tests for the logging module.

Tests logger setup, configuration, and output handling.
"""

import logging
import sys
from pathlib import Path

from pdfscout.core import logger as logger_module
from pdfscout.core.logger import LOG_FILENAME, setup_logging, get_logger, set_console_level


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_creates_root_logger(self, reset_logger_singleton):
        """Test that setup_logging configures the root logger."""
        setup_logging(log_level="DEBUG")

        root_logger = logging.getLogger()
        assert root_logger.level == logging.DEBUG

    def test_setup_with_file_handler(self, temp_dir: Path, reset_logger_singleton):
        """Test that setup_logging creates file handler when directory provided."""
        logs_dir = temp_dir / "logs"

        setup_logging(
            log_level="INFO",
            logs_directory=logs_dir,
            max_file_size_mb=1,
            backup_count=1
        )

        logger = get_logger("test")
        logger.info("Test message")

        assert (logs_dir / LOG_FILENAME).exists()

    def test_setup_only_runs_once(self, reset_logger_singleton):
        """Test that setup_logging only initializes once."""
        setup_logging(log_level="DEBUG")
        initial_handlers = len(logging.getLogger().handlers)

        setup_logging(log_level="WARNING")

        assert len(logging.getLogger().handlers) == initial_handlers

    def test_console_writes_to_stderr(self, reset_logger_singleton):
        """Test that console output stays off stdout."""
        setup_logging(log_level="INFO")

        assert logger_module._console_handler.stream is sys.stderr

    def test_console_level_separate_from_root(self, reset_logger_singleton):
        """Test that the console threshold can be stricter than the root level."""
        setup_logging(log_level="DEBUG", console_level="WARNING")

        assert logging.getLogger().level == logging.DEBUG
        assert logger_module._console_handler.level == logging.WARNING


class TestSetConsoleLevel:
    """Tests for adjusting the console threshold after setup."""

    def test_raises_console_threshold(self, reset_logger_singleton):
        """Test that set_console_level changes only the console handler."""
        setup_logging(log_level="INFO")

        set_console_level("ERROR")

        assert logger_module._console_handler.level == logging.ERROR
        assert logging.getLogger().level == logging.INFO

    def test_noop_before_setup(self, reset_logger_singleton):
        """Test that set_console_level is harmless before logging is set up."""
        set_console_level("ERROR")

        assert logger_module._console_handler is None


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger_returns_named_logger(self, reset_logger_singleton):
        """Test that get_logger returns a logger with the given name."""
        logger = get_logger("my_module")

        assert logger.name == "my_module"

    def test_get_logger_initializes_from_config(self, temp_config: Path, reset_logger_singleton):
        """Test that get_logger picks up level and log directory from config."""
        get_logger("auto_init_test").info("written to the config log directory")

        logs_dir = temp_config.parent.parent / "output" / "logs"
        assert logging.getLogger().level == logging.DEBUG
        assert (logs_dir / LOG_FILENAME).exists()
