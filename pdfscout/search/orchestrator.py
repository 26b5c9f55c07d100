"""
Corpus-wide multi-query search.

Discovers PDF files, builds the Zotero metadata table once, then
evaluates every document concurrently on a bounded thread pool.
A document that fails to extract is dropped from the results and the
search continues.
"""

import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

from ..bibliography import BibMetadata, MetadataLinker
from ..core import (
    get_config,
    get_logger,
    ExtractionError,
    MetadataUnavailableError,
    PDFScoutError
)
from ..extraction import FileScanner, PDFExtractor
from .compositor import evaluate_document
from .models import SearchMatch, SearchQuery, SearchRequest, SearchStats
from .page_matcher import validate_queries

logger = get_logger(__name__)


class SearchOrchestrator:
    """
    Runs filter/parallel query composition over a directory of PDFs.

    The extractor and metadata linker can be injected;
    by default they are built from configuration.
    """

    def __init__(
        self,
        extractor: PDFExtractor = None,
        linker: MetadataLinker = None,
        max_workers: Optional[int] = None
    ):
        """
        Initialize the orchestrator.

        Args:
            extractor: Object with an extract(path) -> [(page, text)] method.
            linker: Builds the filename to metadata table.
            max_workers: Thread pool size. Defaults to config value.
        """
        self.config = get_config()

        self.extractor = extractor or PDFExtractor()
        self.linker = linker or MetadataLinker()
        self.max_workers = max_workers or self.config.search.max_workers

    def search(self, request: SearchRequest) -> Tuple[List[SearchMatch], SearchStats]:
        """
        Execute a corpus-wide search.

        Args:
            request: Queries, root directory, context size and Zotero path.

        Returns:
            Tuple of (list of SearchMatch, SearchStats). Matches of one
            document stay in composition order; document order is the
            order in which workers finish.

        Raises:
            InvalidPatternError: If any regex query is malformed.
            FileAccessError: If the root directory cannot be scanned.
        """
        start_time = time.time()
        stats = SearchStats()

        if not request.queries:
            return [], stats

        validate_queries(request.queries)

        scanner = FileScanner(request.directory)
        pdf_files = scanner.list_all()
        stats.files_scanned = len(pdf_files)

        if not pdf_files:
            logger.info(f"No PDF files found under {request.directory}")
            return [], stats

        metadata_index = self._load_metadata(request.zotero_path)
        stats.metadata_entries = len(metadata_index)

        logger.info(
            f"Searching {stats.files_scanned} files with {len(request.queries)} queries"
        )

        matches: List[SearchMatch] = []

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_map = {
                executor.submit(
                    self._search_file,
                    pdf_path,
                    request.queries,
                    request.context_words,
                    metadata_index.get(pdf_path.name)
                ): pdf_path
                for pdf_path in pdf_files
            }

            for future in as_completed(future_map):
                pdf_path = future_map[future]

                try:
                    file_matches = future.result()
                except PDFScoutError as e:
                    # Per-file failures are left out of the results
                    stats.files_failed += 1
                    stats.errors.append(f"{pdf_path.name}: {e.message}")
                    logger.warning(f"Skipping {pdf_path.name}: {e.message}")
                    continue
                except Exception as e:
                    stats.files_failed += 1
                    stats.errors.append(f"{pdf_path.name}: {e}")
                    logger.warning(f"Unexpected error in {pdf_path.name}: {e}")
                    continue

                if file_matches:
                    stats.files_matched += 1
                    matches.extend(file_matches)

        stats.total_matches = len(matches)
        stats.execution_time_ms = round((time.time() - start_time) * 1000, 2)

        logger.info(
            f"Search complete: {stats.total_matches} matches in {stats.files_matched} files, "
            f"{stats.files_failed} failed, {stats.execution_time_ms:.1f}ms"
        )

        return matches, stats

    def run(self, request: SearchRequest) -> List[SearchMatch]:
        """Execute a corpus-wide search and return only the matches."""
        matches, _ = self.search(request)
        return matches

    def search_document(
        self,
        pdf_path: Union[str, Path],
        queries: Sequence[SearchQuery],
        context_words: int,
        zotero_path: Union[str, Path, None] = None
    ) -> List[SearchMatch]:
        """
        Run the same composition against a single PDF.

        Unlike a corpus search, an extraction failure is raised.

        Raises:
            InvalidPatternError: If any regex query is malformed.
            ExtractionError: If the document cannot be read.
        """
        if not queries:
            return []

        validate_queries(queries)

        pdf_path = Path(pdf_path)
        metadata_index = self._load_metadata(zotero_path)

        return self._search_file(
            pdf_path,
            queries,
            context_words,
            metadata_index.get(pdf_path.name)
        )

    def _search_file(
        self,
        pdf_path: Path,
        queries: Sequence[SearchQuery],
        context_words: int,
        metadata: Optional[BibMetadata]
    ) -> List[SearchMatch]:
        """Extract one document and evaluate the queries against it."""
        if not pdf_path.is_file():
            raise ExtractionError("File not found", filepath=str(pdf_path))

        pages = self.extractor.extract(pdf_path)
        return evaluate_document(pages, queries, context_words, pdf_path, metadata)

    def _load_metadata(self, zotero_path: Union[str, Path, None]) -> Dict[str, BibMetadata]:
        """Build the metadata table, or an empty one if it is unavailable."""
        if not zotero_path:
            return {}

        try:
            return self.linker.build_index(zotero_path)
        except MetadataUnavailableError as e:
            logger.warning(f"Failed to load Zotero database: {e.message}")
            return {}
