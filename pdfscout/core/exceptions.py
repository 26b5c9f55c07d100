"""
Custom exception hierarchy for PDF Scout.

Provides specific exception types for different failure modes:
configuration errors, invalid query patterns, extraction failures,
bibliographic database problems, and file access errors.
"""


class PDFScoutError(Exception):
    """Base exception for all PDF Scout errors."""

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(PDFScoutError):
    """Raised when configuration is invalid or missing."""
    pass


class InvalidPatternError(PDFScoutError):
    """Raised when a regex query cannot be compiled."""

    def __init__(self, message: str, query: str = None, details: dict = None):
        """
        Initialize pattern error.

        Args:
            message: Error description.
            query: The query text as submitted by the user.
            details: Additional context.
        """
        super().__init__(message, details)
        self.query = query


class ExtractionError(PDFScoutError):
    """Raised when PDF text extraction fails."""

    def __init__(self, message: str, filepath: str = None, details: dict = None):
        """
        Initialize extraction error.

        Args:
            message: Error description.
            filepath: Path to the problematic PDF file.
            details: Additional context.
        """
        super().__init__(message, details)
        self.filepath = filepath


class MetadataUnavailableError(PDFScoutError):
    """Raised when bibliographic metadata cannot be loaded."""

    def __init__(self, message: str, path: str = None, details: dict = None):
        super().__init__(message, details)
        self.path = path


class DatabaseNotFoundError(MetadataUnavailableError):
    """Raised when the Zotero database file is absent."""
    pass


class DatabaseUnreadableError(MetadataUnavailableError):
    """Raised when the Zotero database cannot be copied, opened or queried."""
    pass


class FileAccessError(PDFScoutError):
    """Raised when corpus enumeration, report writing or file reading fails."""

    def __init__(self, message: str, path: str = None, details: dict = None):
        super().__init__(message, details)
        self.path = path
