"""
Shared page loop for text extraction backends.

A backend only knows how to open a document and hand out its page
objects. This base class turns that into one (page_number, text) entry
per physical page, so page numbering stays aligned with the PDF even
when single pages fail.
"""

from pathlib import Path
from typing import Any, ContextManager, List, Sequence, Tuple, Union

from ..core import get_logger, ExtractionError

logger = get_logger(__name__)


class ExtractionBackend:
    """
    Base class for PDF text extraction backends.

    Subclasses set `name` and implement `_open`.
    """

    name = "base"

    def _open(self, filepath: Path) -> ContextManager[Sequence[Any]]:
        """Return a context manager yielding the document's page objects."""
        raise NotImplementedError

    @staticmethod
    def _page_text(page: Any) -> str:
        return page.extract_text() or ""

    def extract(self, filepath: Union[str, Path]) -> List[Tuple[int, str]]:
        """
        Extract text from every page of a PDF.

        A page whose text cannot be extracted yields an empty string and
        a warning; it never shifts the numbering of later pages.

        Args:
            filepath: Path to the PDF file.

        Returns:
            List of (page_number, text) tuples. Page numbers are 1-indexed.

        Raises:
            ExtractionError: If the document cannot be opened.
        """
        filepath = Path(filepath)
        results = []

        try:
            with self._open(filepath) as pages:
                logger.debug(f"[{self.name}] {len(pages)} pages: {filepath.name}")

                for page_num, page in enumerate(pages, start=1):
                    try:
                        text = self._page_text(page)
                    except Exception as e:
                        logger.warning(
                            f"[{self.name}] Failed to extract page {page_num} from {filepath.name}: {e}"
                        )
                        text = ""

                    results.append((page_num, text))

        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionError(
                f"{self.name} extraction failed: {e}",
                filepath=str(filepath),
                details={"backend": self.name}
            )

        return results
