"""
Core module providing foundational components.

This module contains the configuration loader, centralized logging setup,
and custom exception hierarchy. It has no internal dependencies.
"""

from .config_loader import get_config, reload_config, Config
from .logger import get_logger, set_console_level
from .exceptions import (
    PDFScoutError,
    ConfigurationError,
    InvalidPatternError,
    ExtractionError,
    MetadataUnavailableError,
    DatabaseNotFoundError,
    DatabaseUnreadableError,
    FileAccessError
)

__all__ = [
    "get_config",
    "reload_config",
    "Config",
    "get_logger",
    "set_console_level",
    "PDFScoutError",
    "ConfigurationError",
    "InvalidPatternError",
    "ExtractionError",
    "MetadataUnavailableError",
    "DatabaseNotFoundError",
    "DatabaseUnreadableError",
    "FileAccessError"
]
