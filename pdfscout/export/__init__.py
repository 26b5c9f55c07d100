"""
Export module rendering search results as Markdown reports.
"""

from .markdown_exporter import render_markdown, save_report, write_report

__all__ = [
    "render_markdown",
    "save_report",
    "write_report"
]
