"""
Data models for bibliographic metadata.

Defines the per-attachment record built from a Zotero library.
"""

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass(frozen=True)
class BibMetadata:
    """
    Bibliographic metadata linked to one PDF attachment.

    Attributes:
        citekey: Better BibTeX citation key, or the Zotero item key.
        title: Item title, if the record has one.
        year: Four-digit year parsed from the item date.
        authors: Creators joined as "First Last, First Last".
        library_link: URI selecting the item in the Zotero library.
        attachment_key: Zotero key of the PDF attachment item.
    """
    citekey: str
    library_link: str
    title: Optional[str] = None
    year: Optional[str] = None
    authors: Optional[str] = None
    attachment_key: Optional[str] = None

    def to_dict(self) -> dict:
        """Serialize with the JSON field names the search front end uses."""
        data = asdict(self)
        return {
            "citekey": data["citekey"],
            "title": data["title"],
            "year": data["year"],
            "authors": data["authors"],
            "zotero_link": data["library_link"],
            "pdf_attachment_key": data["attachment_key"],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BibMetadata":
        return cls(
            citekey=data["citekey"],
            library_link=data.get("zotero_link", data.get("library_link", "")),
            title=data.get("title"),
            year=data.get("year"),
            authors=data.get("authors"),
            attachment_key=data.get("pdf_attachment_key", data.get("attachment_key")),
        )
