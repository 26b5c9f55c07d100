"""
Scoped read-only snapshots of SQLite databases.

Zotero keeps its database locked while running, so the linker reads a
temporary copy. The copy lives in its own temporary directory, which is
removed on every exit path.
"""

import shutil
import sqlite3
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Union

from ..core import get_logger, DatabaseUnreadableError

logger = get_logger(__name__)


@contextmanager
def database_snapshot(db_path: Union[str, Path]) -> Generator[Path, None, None]:
    """
    Copy a database file to a temporary location for the duration of a block.

    Args:
        db_path: Path to the database file.

    Yields:
        Path to the temporary copy.

    Raises:
        DatabaseUnreadableError: If the file cannot be copied.
    """
    db_path = Path(db_path)
    temp_dir = Path(tempfile.mkdtemp(prefix="pdfscout_db_"))

    try:
        snapshot_path = temp_dir / db_path.name

        try:
            shutil.copyfile(db_path, snapshot_path)
        except OSError as e:
            raise DatabaseUnreadableError(
                f"Failed to create temporary copy of {db_path.name}: {e}",
                path=str(db_path)
            )

        logger.debug(f"Created database snapshot: {snapshot_path}")
        yield snapshot_path

    finally:
        shutil.rmtree(temp_dir, ignore_errors=True)
        logger.debug(f"Removed database snapshot directory: {temp_dir}")


@contextmanager
def open_readonly(db_path: Union[str, Path]) -> Generator[sqlite3.Connection, None, None]:
    """
    Open a SQLite database in read-only mode.

    Yields:
        SQLite connection with Row factory enabled.

    Raises:
        DatabaseUnreadableError: If the database cannot be opened.
    """
    db_path = Path(db_path)

    try:
        conn = sqlite3.connect(f"{db_path.resolve().as_uri()}?mode=ro", uri=True)
    except sqlite3.Error as e:
        raise DatabaseUnreadableError(
            f"Failed to open database {db_path.name}: {e}",
            path=str(db_path)
        )

    conn.row_factory = sqlite3.Row

    try:
        yield conn
    finally:
        conn.close()
