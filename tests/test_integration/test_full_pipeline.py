"""
Integration tests for the full search pipeline.

Tests the complete flow from PDF files on disk through discovery,
extraction, composition, metadata linking and report export.

SAFETY NOTE: All PDFs and Zotero databases are generated under a
temporary directory created by the `temp_dir` fixture and removed
after each test.
"""

import json
import pytest
from pathlib import Path

from pdfscout.commands import export_results_to_markdown, search_pdf_files
from pdfscout.export import write_report
from pdfscout.search import QueryRole, SearchOrchestrator, SearchQuery, SearchRequest


class TestFullPipeline:
    """
    Integration tests for the search pipeline on real PDFs.

    These tests verify that:
    1. Generated PDFs are discovered and extracted page by page
    2. Filter and parallel queries compose per document
    3. Broken words and line-end hyphens still match
    4. Zotero metadata reaches matches and reports
    """

    @pytest.fixture
    def corpus(self, make_pdf, temp_dir: Path) -> Path:
        """
        Create a small corpus of multi-page PDFs.

        Layout:
            papers/doc1.pdf          "alpha beta" on page 1, hyphenated text on page 2
            papers/doc2.pdf          "beta" only
            papers/sub/dated.pdf     a year in running text
            papers/notes.txt         ignored
        """
        make_pdf("papers/doc1.pdf", [
            ["alpha beta"],
            ["The field of infor-", "mation retrieval has grown"],
        ])
        make_pdf("papers/doc2.pdf", [["beta"]])
        make_pdf("papers/sub/dated.pdf", [["The paper was published in 2023 finally"]])
        (temp_dir / "papers" / "notes.txt").write_text("alpha beta")
        return temp_dir / "papers"

    def test_filter_then_parallel(self, corpus: Path):
        """Test that only documents containing the filter report matches."""
        request = SearchRequest(
            queries=[SearchQuery("alpha", role=QueryRole.FILTER), SearchQuery("beta")],
            directory=str(corpus),
            context_words=1
        )

        matches, stats = SearchOrchestrator().search(request)

        assert [(m.document_name, m.page_number) for m in matches] == [("doc1.pdf", 1)]
        assert stats.files_scanned == 3
        assert stats.files_failed == 0

    def test_hyphenated_word_across_lines(self, corpus: Path):
        """Test that a word broken at a line end is found."""
        request = SearchRequest(
            queries=[SearchQuery("information retrieval")],
            directory=str(corpus),
            context_words=2
        )

        matches = SearchOrchestrator().run(request)

        assert len(matches) == 1
        assert matches[0].page_number == 2
        assert matches[0].matched_text == "informationretrieval"
        assert matches[0].context_before == "field of"
        assert matches[0].context_after == "has grown"

    def test_regex_year(self, corpus: Path):
        """Test a regex query with context on both sides."""
        request = SearchRequest(
            queries=[SearchQuery(r"\d{4}", is_regex=True)],
            directory=str(corpus),
            context_words=2
        )

        matches = SearchOrchestrator().run(request)

        assert len(matches) == 1
        assert matches[0].context_before.endswith("published in")
        assert matches[0].matched_text == "2023"
        assert matches[0].context_after.startswith("finally")

    def test_corrupt_pdf_does_not_stop_search(self, corpus: Path):
        """Test that an unreadable PDF is dropped and the rest searched."""
        (corpus / "broken.pdf").write_bytes(b"%PDF-1.4 truncated garbage")

        matches, stats = SearchOrchestrator().search(SearchRequest(
            queries=[SearchQuery("beta")],
            directory=str(corpus),
            context_words=0
        ))

        assert sorted(m.document_name for m in matches) == ["doc1.pdf", "doc2.pdf"]
        assert stats.files_scanned == 4
        assert stats.files_failed == 1

    def test_metadata_and_report(self, corpus: Path, zotero_library: Path, temp_dir: Path):
        """Test that Zotero metadata flows into the exported report."""
        request = SearchRequest(
            queries=[SearchQuery("beta")],
            directory=str(corpus),
            context_words=1,
            zotero_path=str(zotero_library)
        )

        matches = SearchOrchestrator().run(request)
        report_path = write_report(matches, temp_dir / "out" / "report.md")
        report = report_path.read_text(encoding="utf-8")

        assert "Total matches found: 2" in report
        assert "**Citekey:** lovelace2019alpha" in report
        assert "**Year:** 2019" in report

    def test_command_round_trip(self, corpus: Path):
        """Test that command payloads are JSON-serializable and exportable."""
        result = search_pdf_files({
            "directory": str(corpus),
            "queries": [{"query": "beta"}],
            "context_words": 1
        })

        payload = json.loads(json.dumps(result.payload))
        export = export_results_to_markdown(payload)

        assert export.ok
        assert f"Total matches found: {len(payload)}" in export.payload
