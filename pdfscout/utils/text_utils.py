"""
Word helpers for match context and console output.
"""

from typing import Callable, List, Optional


def _words(text: str, keep: Optional[Callable[[str], bool]]) -> List[str]:
    words = text.split()
    if keep is not None:
        words = [word for word in words if keep(word)]
    return words


def last_words(text: str, count: int, keep: Callable[[str], bool] = None) -> List[str]:
    """
    Return the last `count` whitespace-separated words of `text`.

    Fewer words are returned when the text holds fewer. Words for which
    `keep` returns false are skipped and do not count toward `count`.
    """
    if count <= 0 or not text:
        return []
    return _words(text, keep)[-count:]


def first_words(text: str, count: int, keep: Callable[[str], bool] = None) -> List[str]:
    """Return the first `count` whitespace-separated words of `text`, filtered by `keep`."""
    if count <= 0 or not text:
        return []
    return _words(text, keep)[:count]


def truncate_text(text: str, max_length: int, suffix: str = "...") -> str:
    """
    Shorten `text` to at most `max_length` characters, suffix included.

    Cuts at the last space when that keeps most of the budget.
    """
    if not text or len(text) <= max_length:
        return text

    truncate_at = max_length - len(suffix)
    if truncate_at <= 0:
        return suffix[:max_length]

    truncated = text[:truncate_at]
    last_space = truncated.rfind(" ")

    if last_space > truncate_at * 0.7:
        truncated = truncated[:last_space]

    return truncated + suffix
