"""
Text normalization for matching.

PDF text extraction breaks words at line ends, inserts or drops spaces,
and keeps soft hyphens. Matching therefore runs on a canonical form with
all whitespace and hyphen characters removed, applied identically to page
text and query text.
"""

from typing import List, NamedTuple


WHITESPACE_CHARS = frozenset(
    " \t\n\r"
    "\u00a0"  # no-break space
    "\u2007"  # figure space
    "\u2008"  # punctuation space
    "\u2009"  # thin space
    "\u200a"  # hair space
    "\u202f"  # narrow no-break space
)

HYPHEN_CHARS = frozenset(
    "-"
    "\u00ad"  # soft hyphen
    "\u2010"  # hyphen
    "\u2011"  # non-breaking hyphen
)

SEPARATOR_CHARS = WHITESPACE_CHARS | HYPHEN_CHARS


class NormalizedText(NamedTuple):
    """
    Normalized text with a map back to the source.

    `offsets[i]` is the index in the source string of `text[i]`.
    """
    text: str
    offsets: List[int]
    source: str

    def source_span(self, start: int, end: int) -> tuple:
        """Map a [start, end) span of `text` to the matching source span."""
        if start >= len(self.offsets):
            source_start = len(self.source)
        else:
            source_start = self.offsets[start]

        if end <= start:
            return source_start, source_start

        return source_start, self.offsets[end - 1] + 1


def normalize(text: str) -> str:
    """
    Remove whitespace and hyphen characters, keeping everything else in order.

    >>> normalize("infor-\\nmation retrieval")
    'informationretrieval'
    """
    if not text:
        return ""
    return "".join(char for char in text if char not in SEPARATOR_CHARS)


def normalize_with_offsets(text: str) -> NormalizedText:
    """Normalize `text` and record where each kept character came from."""
    chars = []
    offsets = []

    for index, char in enumerate(text or ""):
        if char in SEPARATOR_CHARS:
            continue
        chars.append(char)
        offsets.append(index)

    return NormalizedText("".join(chars), offsets, text or "")


def fold_case(text: str) -> str:
    """
    Lowercase `text` character by character without changing its length.

    Characters whose lowercase form is longer than one character are
    kept as they are, so offsets stay valid.
    """
    folded = []
    for char in text:
        lower = char.lower()
        folded.append(lower if len(lower) == 1 else char)
    return "".join(folded)
