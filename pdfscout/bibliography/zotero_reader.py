"""
Row-level access to a Zotero library database.

Reads attachment rows, item fields, creators and Better BibTeX citation
keys. Lookups for data a record simply lacks return None; SQLite errors
are raised as DatabaseUnreadableError.
"""

import sqlite3
from dataclasses import dataclass
from typing import List, Optional

from ..core import get_logger, DatabaseUnreadableError

logger = get_logger(__name__)


ATTACHMENTS_SQL = """
    SELECT items.itemID, items.key, itemAttachments.path,
           itemAttachments.parentItemID, parent.key AS parentKey
    FROM items
    JOIN itemAttachments ON items.itemID = itemAttachments.itemID
    LEFT JOIN items AS parent ON itemAttachments.parentItemID = parent.itemID
    WHERE itemAttachments.path IS NOT NULL
"""

FIELD_SQL = """
    SELECT itemDataValues.value
    FROM itemData
    JOIN fields ON itemData.fieldID = fields.fieldID
    JOIN itemDataValues ON itemData.valueID = itemDataValues.valueID
    WHERE itemData.itemID = ? AND fields.fieldName = ?
"""

CREATORS_SQL = """
    SELECT creators.firstName, creators.lastName
    FROM creators
    JOIN itemCreators ON creators.creatorID = itemCreators.creatorID
    WHERE itemCreators.itemID = ?
    ORDER BY itemCreators.orderIndex
"""

CITEKEY_SQL = "SELECT citationKey FROM citationkey WHERE itemKey = ?"


@dataclass(frozen=True)
class AttachmentRow:
    """An attachment item joined with its parent item, if any."""
    item_id: int
    key: str
    path: str
    parent_id: Optional[int]
    parent_key: Optional[str]

    @property
    def record_id(self) -> int:
        """Item holding the bibliographic fields: the parent, else the attachment."""
        if self.parent_id is not None and self.parent_key is not None:
            return self.parent_id
        return self.item_id

    @property
    def record_key(self) -> str:
        if self.parent_id is not None and self.parent_key is not None:
            return self.parent_key
        return self.key


class ZoteroReader:
    """Queries over an open zotero.sqlite connection."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def _query(self, sql: str, params: tuple = ()) -> List[sqlite3.Row]:
        try:
            return self.conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise DatabaseUnreadableError(f"Failed to read Zotero database: {e}")

    def attachments(self) -> List[AttachmentRow]:
        return [
            AttachmentRow(
                item_id=row[0],
                key=row[1],
                path=row[2],
                parent_id=row[3],
                parent_key=row[4]
            )
            for row in self._query(ATTACHMENTS_SQL)
        ]

    def field_value(self, item_id: int, field_name: str) -> Optional[str]:
        """Return the value of a named field, or None if the item lacks it."""
        rows = self._query(FIELD_SQL, (item_id, field_name))
        if not rows or rows[0][0] is None:
            return None
        return str(rows[0][0])

    def creators(self, item_id: int) -> Optional[str]:
        """
        Return creators in order, joined as "First Last, First Last".

        Creators with only one name part use that part alone.
        """
        names = []

        for first_name, last_name in self._query(CREATORS_SQL, (item_id,)):
            parts = [part for part in (first_name, last_name) if part]
            if parts:
                names.append(" ".join(parts))

        return ", ".join(names) if names else None


class CitekeyReader:
    """Queries over an open Better BibTeX database."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn
        self.available = self._has_citekey_table()

        if not self.available:
            logger.warning("Better BibTeX database has no citationkey table, using Zotero keys")

    def _has_citekey_table(self) -> bool:
        try:
            row = self.conn.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'citationkey'"
            ).fetchone()
        except sqlite3.Error as e:
            raise DatabaseUnreadableError(f"Failed to read Better BibTeX database: {e}")
        return row is not None

    def citekey(self, item_key: str) -> Optional[str]:
        if not self.available:
            return None

        try:
            row = self.conn.execute(CITEKEY_SQL, (item_key,)).fetchone()
        except sqlite3.Error as e:
            raise DatabaseUnreadableError(f"Failed to read Better BibTeX database: {e}")

        return row[0] if row and row[0] else None
