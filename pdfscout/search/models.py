"""
Data models for search functionality.

Defines the query, page, match, request and statistics types used
throughout the search module, plus conversion to and from the JSON
wire format exchanged with a UI layer.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, List, NamedTuple, Optional

from ..bibliography.models import BibMetadata
from ..core import get_config


class QueryRole(Enum):
    """How a query takes part in document evaluation."""
    PARALLEL = "parallel"
    FILTER = "filter"


@dataclass(frozen=True)
class SearchQuery:
    """
    A single search term.

    Attributes:
        text: The literal text or regular expression.
        is_regex: Whether `text` is a regular expression.
        role: FILTER terms gate documents, PARALLEL terms produce matches.
        color: Highlight colour for the UI (hex string).
        case_sensitive: Match case exactly instead of ignoring it.
    """
    text: str
    is_regex: bool = False
    role: QueryRole = QueryRole.PARALLEL
    color: Optional[str] = None
    case_sensitive: bool = False

    @property
    def is_filter(self) -> bool:
        return self.role is QueryRole.FILTER

    @classmethod
    def from_dict(cls, data: dict) -> "SearchQuery":
        """
        Build a query from its wire representation.

        Raises:
            ValueError: If `query_type` is not "parallel" or "filter".
        """
        return cls(
            text=data["query"],
            is_regex=bool(data.get("use_regex", False)),
            role=QueryRole(data.get("query_type", QueryRole.PARALLEL.value)),
            color=data.get("color"),
            case_sensitive=bool(data.get("case_sensitive", False)),
        )

    def to_dict(self) -> dict:
        return {
            "query": self.text,
            "use_regex": self.is_regex,
            "query_type": self.role.value,
            "color": self.color or get_config().search.default_color,
            "case_sensitive": self.case_sensitive,
        }


class Page(NamedTuple):
    """Text of one physical page. `number` is 1-based."""
    number: int
    text: str


@dataclass(frozen=True)
class SearchMatch:
    """
    One occurrence of a parallel query in a document.

    Attributes:
        document_path: Path of the PDF file.
        document_name: File name of the PDF.
        page_number: 1-based page the match was found on.
        context_before: Words preceding the match.
        matched_text: The matched span of normalized page text.
        context_after: Words following the match.
        library_link: Zotero link for the document, if known.
        metadata: Bibliographic metadata for the document, if known.
    """
    document_path: str
    document_name: str
    page_number: int
    context_before: str
    matched_text: str
    context_after: str
    library_link: Optional[str] = None
    metadata: Optional[BibMetadata] = None

    @property
    def context_line(self) -> str:
        return f"...{self.context_before} **{self.matched_text}** {self.context_after}..."

    def to_dict(self) -> dict:
        return {
            "file_path": self.document_path,
            "file_name": self.document_name,
            "page_number": self.page_number,
            "context_before": self.context_before,
            "matched_text": self.matched_text,
            "context_after": self.context_after,
            "zotero_link": self.library_link,
            "zotero_metadata": self.metadata.to_dict() if self.metadata else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SearchMatch":
        metadata = data.get("zotero_metadata")
        return cls(
            document_path=data["file_path"],
            document_name=data["file_name"],
            page_number=int(data["page_number"]),
            context_before=data.get("context_before", ""),
            matched_text=data["matched_text"],
            context_after=data.get("context_after", ""),
            library_link=data.get("zotero_link"),
            metadata=BibMetadata.from_dict(metadata) if metadata else None,
        )


@dataclass
class SearchRequest:
    """
    Parameters of a corpus-wide search.

    Attributes:
        queries: Queries in submission order.
        directory: Root directory of the PDF corpus.
        context_words: Words of context on each side of a match.
        zotero_path: Zotero data directory, or None to skip metadata.
    """
    queries: List[SearchQuery]
    directory: str
    context_words: int = 100
    zotero_path: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict, palette: List[str] = None) -> "SearchRequest":
        queries = [SearchQuery.from_dict(item) for item in data.get("queries", [])]
        if palette:
            queries = assign_colors(queries, palette)

        context_words = int(data.get("context_words", 100))
        if context_words < 0:
            raise ValueError(f"context_words must not be negative: {context_words}")

        return cls(
            queries=queries,
            directory=data["directory"],
            context_words=context_words,
            zotero_path=data.get("zotero_path") or None,
        )


@dataclass
class SearchStats:
    """
    Statistics about a search execution.

    Attributes:
        files_scanned: PDF files discovered under the root directory.
        files_matched: Files contributing at least one match.
        files_failed: Files dropped because extraction or matching failed.
        total_matches: Matches returned.
        execution_time_ms: Wall-clock time of the search.
        metadata_entries: Entries in the Zotero lookup table (0 if unused).
        errors: One "<file>: <message>" line per failed file.
    """
    files_scanned: int = 0
    files_matched: int = 0
    files_failed: int = 0
    total_matches: int = 0
    execution_time_ms: float = 0.0
    metadata_entries: int = 0
    errors: List[str] = field(default_factory=list)


def assign_colors(queries: Iterable[SearchQuery], palette: List[str]) -> List[SearchQuery]:
    """
    Give every query without a colour one from `palette`.

    The first parallel query gets the first colour, filters get the second,
    and further parallel queries take the remaining colours in turn.
    """
    assigned = []
    parallel_seen = 0
    rest = palette[2:] or palette

    for query in queries:
        if query.is_filter:
            color = palette[1 % len(palette)]
        elif parallel_seen == 0:
            color = palette[0]
        else:
            color = rest[(parallel_seen - 1) % len(rest)]

        if not query.is_filter:
            parallel_seen += 1

        assigned.append(query if query.color else replace(query, color=color))

    return assigned
