"""
Filesystem helpers shared by the scanner, the exporter and the CLI.
"""

from pathlib import Path
from typing import Union

from ..core import FileAccessError


def get_file_size_mb(filepath: Union[str, Path]) -> float:
    """Size of `filepath` in megabytes, rounded to two decimals."""
    return round(Path(filepath).stat().st_size / (1024 * 1024), 2)


def get_relative_path(filepath: Union[str, Path], base: Union[str, Path]) -> str:
    """
    Display path of `filepath` relative to `base`.

    Files outside `base` are shown by their absolute path.
    """
    resolved = Path(filepath).resolve()
    try:
        return str(resolved.relative_to(Path(base).resolve()))
    except ValueError:
        return str(resolved)


def ensure_directory(path: Union[str, Path]) -> Path:
    """Create `path` and its parents if missing; return it as a Path."""
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def read_pdf_bytes(filepath: Union[str, Path]) -> bytes:
    """
    Read the raw bytes of a PDF for display.

    Raises:
        FileAccessError: If the file cannot be read.
    """
    try:
        return Path(filepath).read_bytes()
    except OSError as e:
        raise FileAccessError(f"Failed to read PDF file: {e}", path=str(filepath))
