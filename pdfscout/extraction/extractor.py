"""
Unified PDF extraction over an ordered chain of backends.

The first backend whose pages contain any text wins. If none finds
text, the first backend that opened the document at all is used, so a
genuinely blank PDF still yields its (empty) pages instead of an error.
"""

from pathlib import Path
from typing import List, Optional, Tuple, Union

from ..core import get_config, get_logger, ExtractionError
from .base import ExtractionBackend
from .pdfplumber_backend import PDFPlumberBackend
from .pypdf_backend import PyPDFBackend

logger = get_logger(__name__)


BACKENDS = {
    backend.name: backend
    for backend in (PyPDFBackend, PDFPlumberBackend)
}


def _has_text(pages: List[Tuple[int, str]]) -> bool:
    return any(text.strip() for _, text in pages)


class PDFExtractor:
    """
    Per-page text extraction with automatic backend fallback.

    Thread-safe: backends keep no per-document state, so one extractor
    is shared by all search workers.
    """

    def __init__(
        self,
        primary_backend: str = None,
        fallback_backend: str = None
    ):
        """
        Build the backend chain.

        Args:
            primary_backend: Name of primary backend ("pypdf" or "pdfplumber").
                Defaults to config value.
            fallback_backend: Name of fallback backend, or "none" to disable.
                Defaults to config value.

        Raises:
            ExtractionError: If the primary backend name is unknown.
        """
        config = get_config()

        primary_name = primary_backend or config.extraction.primary_backend
        fallback_name = fallback_backend or config.extraction.fallback_backend

        if primary_name not in BACKENDS:
            raise ExtractionError(
                f"Unknown backend: {primary_name}",
                details={"available": sorted(BACKENDS)}
            )

        self.backends: List[ExtractionBackend] = [BACKENDS[primary_name]()]

        if fallback_name in BACKENDS and fallback_name != primary_name:
            self.backends.append(BACKENDS[fallback_name]())
        elif fallback_name not in (primary_name, "none"):
            logger.warning(f"Unknown fallback backend '{fallback_name}', fallback disabled")

        logger.debug(
            f"Extraction chain: {' -> '.join(backend.name for backend in self.backends)}"
        )

    def extract(self, filepath: Union[str, Path]) -> List[Tuple[int, str]]:
        """
        Extract per-page text from a PDF.

        Args:
            filepath: Path to the PDF file.

        Returns:
            List of (page_number, text) tuples, one per physical page.

        Raises:
            ExtractionError: The first backend's error, if no backend
                could open the document.
        """
        filepath = Path(filepath)
        first_result: Optional[List[Tuple[int, str]]] = None
        first_error: Optional[ExtractionError] = None

        for backend in self.backends:
            try:
                pages = backend.extract(filepath)
            except ExtractionError as e:
                logger.debug(f"[{backend.name}] failed on {filepath.name}: {e.message}")
                first_error = first_error or e
                continue

            if _has_text(pages):
                return pages

            logger.debug(f"[{backend.name}] found no text in {filepath.name}")
            if first_result is None:
                first_result = pages

        if first_result is not None:
            return first_result

        raise first_error
