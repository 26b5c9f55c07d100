"""
Filename to bibliographic metadata lookup built from a Zotero library.

Reads a snapshot of zotero.sqlite (and better-bibtex.sqlite when present),
resolves every PDF attachment to its parent record, and keys the result
by the attachment's bare filename.
"""

import re
from contextlib import ExitStack
from pathlib import Path
from typing import Dict, Optional, Union

from ..core import get_config, get_logger, DatabaseNotFoundError
from .models import BibMetadata
from .snapshot import database_snapshot, open_readonly
from .zotero_reader import AttachmentRow, CitekeyReader, ZoteroReader

logger = get_logger(__name__)


def extract_year(date: Optional[str]) -> Optional[str]:
    """
    Return the first run of exactly four digits in a date field, if in 1000-9999.

    Zotero stores dates like "2023-01-00 01/2023" or "2023".
    """
    if not date:
        return None

    for part in re.split(r"\D+", date):
        if len(part) == 4:
            year = int(part)
            if 1000 <= year <= 9999:
                return str(year)

    return None


def attachment_filename(path: str) -> str:
    """
    Strip the storage prefix and directories from an attachment path.

    >>> attachment_filename("storage:paper.pdf")
    'paper.pdf'
    """
    name = path.rsplit(":", 1)[-1]
    return name.replace("\\", "/").rsplit("/", 1)[-1]


class MetadataLinker:
    """
    Builds the filename to BibMetadata table for one search.

    The table is built once before fan-out and only read afterwards.
    """

    def __init__(
        self,
        database_filename: str = None,
        citekey_database_filename: str = None,
        library_link_template: str = None
    ):
        config = get_config()

        self.database_filename = database_filename or config.bibliography.database_filename
        self.citekey_database_filename = (
            citekey_database_filename or config.bibliography.citekey_database_filename
        )
        self.library_link_template = (
            library_link_template or config.bibliography.library_link_template
        )

    def build_index(self, zotero_path: Union[str, Path]) -> Dict[str, BibMetadata]:
        """
        Build the lookup table from the Zotero data directory.

        Args:
            zotero_path: Directory holding zotero.sqlite.

        Returns:
            Mapping of attachment filename to metadata.

        Raises:
            DatabaseNotFoundError: If zotero.sqlite is missing.
            DatabaseUnreadableError: If a database cannot be copied or read.
        """
        zotero_path = Path(zotero_path)
        db_path = zotero_path / self.database_filename
        citekey_db_path = zotero_path / self.citekey_database_filename

        if not db_path.is_file():
            raise DatabaseNotFoundError(
                f"Zotero database not found at {db_path}",
                path=str(db_path)
            )

        with ExitStack() as stack:
            snapshot = stack.enter_context(database_snapshot(db_path))
            reader = ZoteroReader(stack.enter_context(open_readonly(snapshot)))

            citekeys = None
            if citekey_db_path.is_file():
                citekey_snapshot = stack.enter_context(database_snapshot(citekey_db_path))
                citekeys = CitekeyReader(stack.enter_context(open_readonly(citekey_snapshot)))

            index = {}
            for row in reader.attachments():
                index[attachment_filename(row.path)] = self._build_metadata(row, reader, citekeys)

        logger.info(f"Loaded Zotero metadata for {len(index)} attachments")
        return index

    def _build_metadata(
        self,
        row: AttachmentRow,
        reader: ZoteroReader,
        citekeys: Optional[CitekeyReader]
    ) -> BibMetadata:
        record_id = row.record_id
        record_key = row.record_key

        citekey = citekeys.citekey(record_key) if citekeys else None

        return BibMetadata(
            citekey=citekey or record_key,
            library_link=self.library_link_template.format(key=record_key),
            title=reader.field_value(record_id, "title"),
            year=extract_year(reader.field_value(record_id, "date")),
            authors=reader.creators(record_id),
            attachment_key=row.key
        )
