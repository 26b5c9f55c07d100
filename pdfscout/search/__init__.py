"""
Search module for multi-query PDF search.

Provides text normalization, page-level matching, filter/parallel
query composition and the concurrent corpus orchestrator.
"""

from .models import (
    QueryRole,
    SearchQuery,
    Page,
    SearchMatch,
    SearchRequest,
    SearchStats,
    assign_colors
)
from .normalizer import normalize
from .page_matcher import find_matches, validate_queries
from .compositor import evaluate_document, split_queries
from .orchestrator import SearchOrchestrator

__all__ = [
    "QueryRole",
    "SearchQuery",
    "Page",
    "SearchMatch",
    "SearchRequest",
    "SearchStats",
    "assign_colors",
    "normalize",
    "find_matches",
    "validate_queries",
    "evaluate_document",
    "split_queries",
    "SearchOrchestrator"
]
