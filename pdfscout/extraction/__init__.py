"""
PDF extraction module for PDF Scout.

Provides corpus discovery and per-page text extraction with multiple
backends (pypdf and pdfplumber) with automatic fallback support.
"""

from .base import ExtractionBackend
from .file_scanner import FileScanner
from .pypdf_backend import PyPDFBackend
from .pdfplumber_backend import PDFPlumberBackend
from .extractor import PDFExtractor

__all__ = [
    "ExtractionBackend",
    "FileScanner",
    "PyPDFBackend",
    "PDFPlumberBackend",
    "PDFExtractor"
]
