"""
Centralized logging setup for PDF Scout.

Console output goes to stderr so command output on stdout (JSON results,
reports) stays machine-readable; a rotating file in the configured logs
directory keeps the full record. Searches run on a thread pool, so the
default format carries the thread name.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path


LOG_FILENAME = "pdfscout.log"

DEFAULT_FORMAT = "%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s"

_logger_initialized = False
_console_handler = None


def _level(name: str) -> int:
    return getattr(logging, str(name).upper(), logging.INFO)


def setup_logging(
    log_level: str = "INFO",
    log_format: str = DEFAULT_FORMAT,
    logs_directory: Path = None,
    max_file_size_mb: int = 10,
    backup_count: int = 5,
    console_level: str = None
) -> None:
    """
    Initialize the root logger with a stderr handler and an optional log file.

    Args:
        log_level: Level of the root logger and the log file.
        log_format: Format string for log messages.
        logs_directory: Directory for the log file. If None, file logging disabled.
        max_file_size_mb: Maximum size of each log file in MB.
        backup_count: Number of rotated files to keep.
        console_level: Separate threshold for the console. Defaults to `log_level`.
    """
    global _logger_initialized, _console_handler

    if _logger_initialized:
        return

    root_logger = logging.getLogger()
    root_logger.setLevel(_level(log_level))

    formatter = logging.Formatter(log_format)

    _console_handler = logging.StreamHandler(sys.stderr)
    _console_handler.setFormatter(formatter)
    _console_handler.setLevel(_level(console_level or log_level))
    root_logger.addHandler(_console_handler)

    if logs_directory:
        logs_directory = Path(logs_directory)
        logs_directory.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            logs_directory / LOG_FILENAME,
            maxBytes=max_file_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    _logger_initialized = True


def set_console_level(level: str) -> None:
    """Change the console threshold without touching the log file."""
    if _console_handler is not None:
        _console_handler.setLevel(_level(level))


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger instance.

    Initializes logging from config on first call, falling back to
    console-only logging when no config file can be found.
    """
    if not _logger_initialized:
        from .config_loader import get_config
        from .exceptions import ConfigurationError

        try:
            config = get_config()
        except ConfigurationError:
            setup_logging()
        else:
            setup_logging(
                log_level=config.logging.level,
                log_format=config.logging.format,
                logs_directory=config.paths.logs_directory,
                max_file_size_mb=config.logging.max_file_size_mb,
                backup_count=config.logging.backup_count,
                console_level=config.logging.console_level
            )

    return logging.getLogger(name)
