"""
Markdown report rendering for search results.

`render_markdown` is a pure function; `write_report` adds the file write.
"""

from pathlib import Path
from typing import Iterable, Union

from ..core import get_config, get_logger, FileAccessError
from ..search.models import SearchMatch
from ..utils import ensure_directory

logger = get_logger(__name__)


def render_markdown(matches: Iterable[SearchMatch], title: str = None) -> str:
    """
    Render matches as a Markdown report.

    Consecutive matches from the same file share one file heading.

    Args:
        matches: Matches in display order.
        title: Report heading. Defaults to config value.

    Returns:
        The report text.
    """
    matches = list(matches)
    title = title or get_config().export.report_title

    lines = [f"# {title}\n\n", f"Total matches found: {len(matches)}\n\n"]
    current_file = None

    for index, match in enumerate(matches, start=1):
        if match.document_path != current_file:
            current_file = match.document_path
            lines.append(f"\n## File: `{match.document_path}`\n")
            lines.append(f"**Filename:** {match.document_name}\n\n")

            if match.metadata:
                lines.append(_metadata_block(match))

        lines.append(f"### Match {index} (Page {match.page_number})\n\n")
        lines.append(f"**Page:** {match.page_number}\n\n")
        lines.append("**Context:**\n\n")
        lines.append(f"{match.context_line}\n\n")
        lines.append("---\n\n")

    return "".join(lines)


def _metadata_block(match: SearchMatch) -> str:
    metadata = match.metadata
    parts = [f"**Citekey:** {metadata.citekey}\n"]

    if metadata.title:
        parts.append(f"**Title:** {metadata.title}\n")
    if metadata.authors:
        parts.append(f"**Authors:** {metadata.authors}\n")
    if metadata.year:
        parts.append(f"**Year:** {metadata.year}\n")

    parts.append(f"**Zotero:** {metadata.library_link}\n\n")
    return "".join(parts)


def write_report(
    matches: Iterable[SearchMatch],
    output_path: Union[str, Path],
    title: str = None
) -> Path:
    """
    Render matches and write the report to `output_path`.

    Raises:
        FileAccessError: If the file cannot be written.
    """
    return save_report(render_markdown(matches, title), output_path)


def save_report(report: str, output_path: Union[str, Path]) -> Path:
    """
    Write already rendered report text to `output_path` as UTF-8.

    Raises:
        FileAccessError: If the file cannot be written.
    """
    output_path = Path(output_path)

    try:
        ensure_directory(output_path.parent)
        output_path.write_text(report, encoding="utf-8")
    except OSError as e:
        raise FileAccessError(
            f"Failed to write report: {e}",
            path=str(output_path)
        )

    logger.info(f"Report written to {output_path}")
    return output_path
