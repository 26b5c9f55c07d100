"""
pdfplumber-based text extraction backend.

Better handling of complex layouts and multi-column documents.
Slower than pypdf but recovers text from some files pypdf reads as blank.
"""

from contextlib import contextmanager
from pathlib import Path

import pdfplumber

from .base import ExtractionBackend


class PDFPlumberBackend(ExtractionBackend):
    """PDF text extraction using the pdfplumber library."""

    name = "pdfplumber"

    @contextmanager
    def _open(self, filepath: Path):
        with pdfplumber.open(filepath) as pdf:
            yield pdf.pages
