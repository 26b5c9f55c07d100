"""
Utility module providing shared helper functions.

Contains file operations and text processing utilities used across
the application. Depends only on the core module.
"""

from .file_utils import (
    get_file_size_mb,
    get_relative_path,
    ensure_directory,
    read_pdf_bytes
)
from .text_utils import (
    first_words,
    last_words,
    truncate_text
)

__all__ = [
    "get_file_size_mb",
    "get_relative_path",
    "ensure_directory",
    "read_pdf_bytes",
    "first_words",
    "last_words",
    "truncate_text"
]
