"""
pypdf-based text extraction backend.

Fast extraction suitable for most standard PDF files.
Encrypted files are opened with the empty password when possible.
"""

from contextlib import contextmanager
from pathlib import Path

from pypdf import PasswordType, PdfReader

from ..core import ExtractionError
from .base import ExtractionBackend


class PyPDFBackend(ExtractionBackend):
    """PDF text extraction using the pypdf library."""

    name = "pypdf"

    @contextmanager
    def _open(self, filepath: Path):
        reader = PdfReader(filepath)

        if reader.is_encrypted:
            try:
                decrypted = reader.decrypt("")
            except Exception:
                decrypted = PasswordType.NOT_DECRYPTED

            if decrypted == PasswordType.NOT_DECRYPTED:
                raise ExtractionError(
                    "PDF is encrypted and cannot be decrypted",
                    filepath=str(filepath)
                )

        yield reader.pages
