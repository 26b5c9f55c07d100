"""
Bibliography module linking PDFs to Zotero metadata.

Provides scoped database snapshots, row-level Zotero and Better BibTeX
readers, and the filename to metadata index used during searches.
"""

from .models import BibMetadata
from .snapshot import database_snapshot, open_readonly
from .zotero_reader import ZoteroReader, CitekeyReader, AttachmentRow
from .linker import MetadataLinker, extract_year, attachment_filename

__all__ = [
    "BibMetadata",
    "database_snapshot",
    "open_readonly",
    "ZoteroReader",
    "CitekeyReader",
    "AttachmentRow",
    "MetadataLinker",
    "extract_year",
    "attachment_filename"
]
