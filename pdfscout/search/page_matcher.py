"""
Page-level match finding.

Finds every occurrence of one query in the text of one page, on the
normalized form of both, and returns each occurrence with a word-based
context window taken from the raw page text.
"""

import re
from functools import lru_cache
from typing import Iterable, Iterator, List, Pattern, Tuple

from ..core import InvalidPatternError
from ..utils import first_words, last_words
from .models import SearchQuery
from .normalizer import NormalizedText, fold_case, normalize, normalize_with_offsets

MatchTuple = Tuple[str, str, str]


@lru_cache(maxsize=256)
def _compile(pattern: str, case_sensitive: bool) -> Pattern:
    flags = 0 if case_sensitive else re.IGNORECASE
    return re.compile(pattern, flags)


def compile_query(query: SearchQuery) -> Pattern:
    """
    Compile a regex query after normalization.

    Raises:
        InvalidPatternError: If the pattern is not a valid regular expression.
    """
    try:
        return _compile(normalize(query.text), query.case_sensitive)
    except re.error as e:
        raise InvalidPatternError(
            f"Invalid regex pattern '{query.text}': {e}",
            query=query.text,
            details={"position": e.pos}
        )


def validate_queries(queries: Iterable[SearchQuery]) -> None:
    """
    Compile every regex query so malformed patterns fail before any work.

    Raises:
        InvalidPatternError: On the first pattern that does not compile.
    """
    for query in queries:
        if query.is_regex:
            compile_query(query)


def _regex_spans(query: SearchQuery, page: NormalizedText) -> Iterator[Tuple[int, int]]:
    pattern = compile_query(query)

    for match in pattern.finditer(page.text):
        if match.end() > match.start():
            yield match.start(), match.end()


def _literal_spans(needle: str, page: NormalizedText, case_sensitive: bool) -> Iterator[Tuple[int, int]]:
    haystack = page.text

    if not case_sensitive:
        needle = fold_case(needle)
        haystack = fold_case(haystack)

    position = haystack.find(needle)
    while position != -1:
        end = position + len(needle)
        yield position, end
        # Resume after the match so occurrences never overlap
        position = haystack.find(needle, end)


def _is_word(token: str) -> bool:
    return bool(normalize(token))


def _build_match(page: NormalizedText, start: int, end: int, context_words: int) -> MatchTuple:
    source_start, source_end = page.source_span(start, end)

    # Tokens made only of separators, like a dangling line-end hyphen, are not words
    context_before = " ".join(last_words(page.source[:source_start], context_words, keep=_is_word))
    context_after = " ".join(first_words(page.source[source_end:], context_words, keep=_is_word))

    return context_before, page.text[start:end], context_after


def find_matches(page_text: str, query: SearchQuery, context_words: int) -> List[MatchTuple]:
    """
    Find all occurrences of `query` in `page_text`.

    Both texts are normalized first, so matches survive broken words,
    missing spaces and line-end hyphenation. Literal queries are found
    by substring search over the whole normalized page; regex queries
    are compiled from the normalized query text.

    Args:
        page_text: Raw text of one page.
        query: The query to look for.
        context_words: Words of context to keep on each side.

    Returns:
        List of (context_before, matched_text, context_after) tuples in
        page order. `matched_text` is the normalized span.

    Raises:
        InvalidPatternError: If a regex query does not compile.
    """
    if query.is_regex:
        # Validate even when the page is empty so bad patterns always surface
        compile_query(query)

    needle = normalize(query.text)
    if not page_text or not needle:
        return []

    page = normalize_with_offsets(page_text)
    if not page.text:
        return []

    if query.is_regex:
        spans = _regex_spans(query, page)
    else:
        spans = _literal_spans(needle, page, query.case_sensitive)

    return [_build_match(page, start, end, context_words) for start, end in spans]
