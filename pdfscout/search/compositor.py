"""
Document-level query composition.

Applies filter queries (every one must occur somewhere in the document)
and then collects the matches of parallel queries for documents that
pass all filters.
"""

from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from ..bibliography.models import BibMetadata
from ..core import get_logger
from .models import Page, SearchMatch, SearchQuery
from .page_matcher import find_matches

logger = get_logger(__name__)


def split_queries(queries: Sequence[SearchQuery]) -> Tuple[List[SearchQuery], List[SearchQuery]]:
    """
    Partition queries into (filters, effective parallel set).

    When no query is tagged parallel, the first query of the list is
    searched as the parallel set, so untagged single-query searches
    behave like explicitly parallel ones.
    """
    filters = [query for query in queries if query.is_filter]
    parallels = [query for query in queries if not query.is_filter]

    if not parallels and queries:
        parallels = [queries[0]]

    return filters, parallels


def _contains(pages: Sequence[Page], query: SearchQuery) -> bool:
    for page in pages:
        if find_matches(page.text, query, 0):
            return True
    return False


def evaluate_document(
    pages: Iterable[Union[Page, Tuple[int, str]]],
    queries: Sequence[SearchQuery],
    context_words: int,
    document_path: Union[str, Path],
    metadata: Optional[BibMetadata] = None
) -> List[SearchMatch]:
    """
    Evaluate all queries against one document.

    Args:
        pages: (page_number, text) pairs in physical page order.
        queries: Queries in submission order.
        context_words: Words of context on each side of a match.
        document_path: Path of the PDF the pages came from.
        metadata: Bibliographic metadata linked to the document.

    Returns:
        Matches ordered by parallel query, then page. Empty if any filter
        query does not occur anywhere in the document.

    Raises:
        InvalidPatternError: If a regex query does not compile.
    """
    pages = [Page(*page) for page in pages]
    filters, parallels = split_queries(queries)

    for query in filters:
        if not _contains(pages, query):
            logger.debug(f"Filter '{query.text}' not found, skipping {Path(document_path).name}")
            return []

    document_path = str(document_path)
    document_name = Path(document_path).name
    library_link = metadata.library_link if metadata else None

    results = []

    for query in parallels:
        for page in pages:
            for context_before, matched_text, context_after in find_matches(page.text, query, context_words):
                results.append(SearchMatch(
                    document_path=document_path,
                    document_name=document_name,
                    page_number=page.number,
                    context_before=context_before,
                    matched_text=matched_text,
                    context_after=context_after,
                    library_link=library_link,
                    metadata=metadata
                ))

    return results
