"""
Pytest fixtures and configuration for the test suite.

Provides temporary directories, generated PDFs, a generated Zotero
library and configuration fixtures so tests are isolated and safe.
"""

import json
import shutil
import sqlite3
import tempfile
from pathlib import Path
from typing import Generator, List

import pytest

import sys
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))


def _escape_pdf_string(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(pages: List[List[str]]) -> bytes:
    """
    Build a valid PDF with one text line per list item on each page.

    Args:
        pages: For each page, the lines of text to draw.

    Returns:
        PDF file content with a correct cross-reference table.
    """
    page_ids = [4 + 2 * i for i in range(len(pages))]
    objects = {
        1: b"<< /Type /Catalog /Pages 2 0 R >>",
        2: "<< /Type /Pages /Kids [{}] /Count {} >>".format(
            " ".join(f"{pid} 0 R" for pid in page_ids), len(pages)
        ).encode("latin-1"),
        3: b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    }

    for page_id, lines in zip(page_ids, pages):
        content_id = page_id + 1
        objects[page_id] = (
            "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Contents {content_id} 0 R /Resources << /Font << /F1 3 0 R >> >> >>"
        ).encode("latin-1")

        operators = ["BT", "/F1 12 Tf", "14 TL", "72 720 Td"]
        for line in lines:
            operators.append(f"({_escape_pdf_string(line)}) Tj T*")
        operators.append("ET")

        stream = "\n".join(operators).encode("latin-1")
        objects[content_id] = (
            b"<< /Length " + str(len(stream)).encode("latin-1") + b" >>\nstream\n"
            + stream + b"\nendstream"
        )

    output = bytearray(b"%PDF-1.4\n")
    offsets = {}

    for object_id in sorted(objects):
        offsets[object_id] = len(output)
        output += f"{object_id} 0 obj\n".encode("latin-1")
        output += objects[object_id]
        output += b"\nendobj\n"

    xref_offset = len(output)
    size = max(objects) + 1

    output += f"xref\n0 {size}\n".encode("latin-1")
    output += b"0000000000 65535 f \n"
    for object_id in range(1, size):
        output += f"{offsets[object_id]:010d} 00000 n \n".encode("latin-1")

    output += (
        f"trailer\n<< /Size {size} /Root 1 0 R >>\nstartxref\n{xref_offset}\n%%EOF\n"
    ).encode("latin-1")

    return bytes(output)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory, cleaned up after test.
    """
    tmp = tempfile.mkdtemp(prefix="pdfscout_test_")
    yield Path(tmp)
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def temp_config(temp_dir: Path) -> Generator[Path, None, None]:
    """
    Create a temporary config.json for testing.

    Args:
        temp_dir: Temporary directory fixture.

    Yields:
        Path to temporary config file.
    """
    config_dir = temp_dir / "config"
    config_dir.mkdir()

    data_dir = temp_dir / "data"
    data_dir.mkdir()

    logs_dir = temp_dir / "output" / "logs"
    logs_dir.mkdir(parents=True)

    config_data = {
        "paths": {
            "logs_directory": str(logs_dir),
            "default_corpus_directory": str(data_dir)
        },
        "extraction": {
            "primary_backend": "pypdf",
            "fallback_backend": "pdfplumber",
            "max_file_size_mb": 100,
            "supported_extensions": [".pdf"],
            "follow_symlinks": True
        },
        "search": {
            "context_words": 3,
            "max_workers": 2,
            "default_color": "#ffff00",
            "color_palette": ["#ffff00", "#22c55e", "#3b82f6", "#f97316"]
        },
        "bibliography": {
            "database_filename": "zotero.sqlite",
            "citekey_database_filename": "better-bibtex.sqlite",
            "library_link_template": "zotero://select/library/items/{key}"
        },
        "export": {
            "report_title": "Test Search Results"
        },
        "logging": {
            "level": "DEBUG",
            "format": "%(levelname)s - %(message)s",
            "max_file_size_mb": 1,
            "backup_count": 1
        }
    }

    config_path = config_dir / "config.json"
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config_data, f)

    yield config_path


@pytest.fixture
def reset_config_singleton():
    """
    Reset the config singleton between tests.

    This ensures each test gets a fresh config instance.
    """
    from pdfscout.core import config_loader
    config_loader._config_instance = None
    yield
    config_loader._config_instance = None


@pytest.fixture
def reset_logger_singleton():
    """
    Reset the logger initialization flag between tests.
    """
    import logging
    from pdfscout.core import logger

    root_logger = logging.getLogger()
    original_handlers = list(root_logger.handlers)
    original_level = root_logger.level
    logger._logger_initialized = False
    logger._console_handler = None
    yield
    for handler in root_logger.handlers[:]:
        if handler not in original_handlers:
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(original_level)
    logger._logger_initialized = False
    logger._console_handler = None


@pytest.fixture(autouse=True)
def configured(temp_config, reset_config_singleton):
    """Load the temporary config so components never read a real one."""
    from pdfscout.core.config_loader import get_config
    get_config(temp_config)
    yield


@pytest.fixture
def make_pdf(temp_dir: Path):
    """
    Factory writing generated PDFs under the temporary directory.

    Usage:
        make_pdf("docs/a.pdf", [["page one line"], ["page two line"]])
    """
    def _make(relative_path: str, pages: List[List[str]]) -> Path:
        path = temp_dir / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(build_pdf(pages))
        return path

    return _make


@pytest.fixture
def sample_pdf_content() -> bytes:
    """Single-page PDF containing "Hello World"."""
    return build_pdf([["Hello World"]])


@pytest.fixture
def sample_pdf(temp_dir: Path, sample_pdf_content: bytes) -> Path:
    """
    Create a sample PDF file for testing.

    Returns:
        Path to the created PDF file.
    """
    pdf_path = temp_dir / "sample.pdf"
    pdf_path.write_bytes(sample_pdf_content)
    return pdf_path


@pytest.fixture
def sample_pdf_collection(temp_dir: Path, sample_pdf_content: bytes) -> Path:
    """
    Create multiple sample PDF files in a directory structure.

    Returns:
        Path to the corpus directory containing PDFs.
    """
    corpus_dir = temp_dir / "corpus"
    corpus_dir.mkdir()

    subdir1 = corpus_dir / "folder1"
    subdir1.mkdir()

    subdir2 = corpus_dir / "folder2"
    subdir2.mkdir()

    (corpus_dir / "root_doc.pdf").write_bytes(sample_pdf_content)
    (subdir1 / "doc1.pdf").write_bytes(sample_pdf_content)
    (subdir1 / "doc2.pdf").write_bytes(sample_pdf_content)
    (subdir2 / "doc3.pdf").write_bytes(sample_pdf_content)

    # Non-PDF file, should be ignored
    (corpus_dir / "readme.txt").write_text("Not a PDF")

    return corpus_dir


ZOTERO_SCHEMA = """
    CREATE TABLE items (itemID INTEGER PRIMARY KEY, key TEXT NOT NULL);
    CREATE TABLE itemAttachments (itemID INTEGER PRIMARY KEY, parentItemID INTEGER, path TEXT);
    CREATE TABLE fields (fieldID INTEGER PRIMARY KEY, fieldName TEXT);
    CREATE TABLE itemDataValues (valueID INTEGER PRIMARY KEY, value TEXT);
    CREATE TABLE itemData (itemID INTEGER, fieldID INTEGER, valueID INTEGER);
    CREATE TABLE creators (creatorID INTEGER PRIMARY KEY, firstName TEXT, lastName TEXT);
    CREATE TABLE itemCreators (itemID INTEGER, creatorID INTEGER, orderIndex INTEGER);
"""


@pytest.fixture
def zotero_library(temp_dir: Path) -> Path:
    """
    Create a Zotero data directory with zotero.sqlite and better-bibtex.sqlite.

    Contents:
        doc1.pdf        attachment of PARENT1 ("Alpha Paper", 2019,
                        Ada Lovelace and Turing, citekey lovelace2019alpha)
        standalone.pdf  standalone attachment ATTACH2 titled "Standalone Notes"
        nodata.pdf      attachment of PARENT2, which has no fields
    """
    zotero_dir = temp_dir / "zotero"
    zotero_dir.mkdir()

    conn = sqlite3.connect(zotero_dir / "zotero.sqlite")
    conn.executescript(ZOTERO_SCHEMA)
    conn.executemany("INSERT INTO items VALUES (?, ?)", [
        (1, "PARENT1"), (2, "ATTACH1"), (3, "ATTACH2"),
        (4, "PARENT2"), (5, "ATTACH3"), (6, "LINKONLY"),
    ])
    conn.executemany("INSERT INTO itemAttachments VALUES (?, ?, ?)", [
        (2, 1, "storage:doc1.pdf"),
        (3, None, "attachments:papers/standalone.pdf"),
        (5, 4, "storage:nodata.pdf"),
        (6, 4, None),
    ])
    conn.executemany("INSERT INTO fields VALUES (?, ?)", [(1, "title"), (2, "date")])
    conn.executemany("INSERT INTO itemDataValues VALUES (?, ?)", [
        (1, "Alpha Paper"), (2, "2019-05-00 05/2019"), (3, "Standalone Notes"),
    ])
    conn.executemany("INSERT INTO itemData VALUES (?, ?, ?)", [
        (1, 1, 1), (1, 2, 2), (3, 1, 3),
    ])
    conn.executemany("INSERT INTO creators VALUES (?, ?, ?)", [
        (1, "Ada", "Lovelace"), (2, None, "Turing"),
    ])
    conn.executemany("INSERT INTO itemCreators VALUES (?, ?, ?)", [
        (1, 2, 1), (1, 1, 0),
    ])
    conn.commit()
    conn.close()

    bbt = sqlite3.connect(zotero_dir / "better-bibtex.sqlite")
    bbt.execute("CREATE TABLE citationkey (itemKey TEXT, citationKey TEXT)")
    bbt.execute("INSERT INTO citationkey VALUES (?, ?)", ("PARENT1", "lovelace2019alpha"))
    bbt.commit()
    bbt.close()

    return zotero_dir
