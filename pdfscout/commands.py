"""
Operations exposed to a UI or CLI layer.

Each command takes plain JSON-compatible parameters and returns a
CommandResult holding either the payload or a human-readable error.
"""

from dataclasses import dataclass
from typing import Any, List, Optional

from .core import get_config, get_logger, PDFScoutError
from .export import render_markdown, save_report
from .search import SearchMatch, SearchOrchestrator, SearchQuery, SearchRequest, assign_colors
from .utils import read_pdf_bytes

logger = get_logger(__name__)


@dataclass
class CommandResult:
    """Outcome of a command: `payload` on success, `error` otherwise."""
    payload: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, error: Exception) -> "CommandResult":
        if isinstance(error, PDFScoutError):
            message = error.message
        elif isinstance(error, KeyError):
            message = f"Missing parameter: {error}"
        else:
            message = str(error)

        logger.error(f"Command failed: {message}")
        return cls(error=message)


def _parse_queries(items: List[dict]) -> List[SearchQuery]:
    queries = [SearchQuery.from_dict(item) for item in items]
    return assign_colors(queries, get_config().search.color_palette)


def search_pdf_files(params: dict, orchestrator: SearchOrchestrator = None) -> CommandResult:
    """
    Search every PDF under `params["directory"]`.

    Payload: list of match dicts.
    """
    try:
        request = SearchRequest.from_dict(params, palette=get_config().search.color_palette)
        orchestrator = orchestrator or SearchOrchestrator()
        matches = orchestrator.run(request)
    except (PDFScoutError, KeyError, ValueError) as e:
        return CommandResult.failure(e)

    return CommandResult(payload=[match.to_dict() for match in matches])


def search_single_pdf(params: dict, orchestrator: SearchOrchestrator = None) -> CommandResult:
    """
    Run the query composition against `params["file_path"]` only.

    Payload: list of match dicts.
    """
    try:
        queries = _parse_queries(params.get("queries", []))
        context_words = int(params.get("context_words", get_config().search.context_words))
        if context_words < 0:
            raise ValueError(f"context_words must not be negative: {context_words}")

        orchestrator = orchestrator or SearchOrchestrator()
        matches = orchestrator.search_document(
            params["file_path"],
            queries,
            context_words,
            params.get("zotero_path") or None
        )
    except (PDFScoutError, KeyError, ValueError) as e:
        return CommandResult.failure(e)

    return CommandResult(payload=[match.to_dict() for match in matches])


def export_results_to_markdown(matches: List[dict], output_path: str = None) -> CommandResult:
    """
    Render match dicts as a Markdown report, writing it when `output_path` is given.

    Payload: the report text.
    """
    try:
        report = render_markdown(SearchMatch.from_dict(item) for item in matches)

        if output_path:
            save_report(report, output_path)
    except (PDFScoutError, KeyError, ValueError) as e:
        return CommandResult.failure(e)

    return CommandResult(payload=report)


def read_pdf_file(file_path: str) -> CommandResult:
    """
    Read a PDF for the viewer.

    Payload: the file bytes.
    """
    try:
        return CommandResult(payload=read_pdf_bytes(file_path))
    except PDFScoutError as e:
        return CommandResult.failure(e)
