"""
PDF Scout Package.

Multi-query full-text search across a directory tree of PDF documents,
with optional cross-referencing against a Zotero library.
"""

__version__ = "1.0.0"
