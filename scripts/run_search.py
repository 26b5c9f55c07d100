"""
CLI script to search a directory of PDFs.

Usage:
    python scripts/run_search.py papers/ -q "information retrieval"
    python scripts/run_search.py papers/ -f "neural" -q "recall" -q "precision"
    python scripts/run_search.py papers/ -q "\\d{4}" --regex --context-words 5
    python scripts/run_search.py papers/ -q "BM25" --zotero ~/Zotero --export results.md
    python scripts/run_search.py --document paper.pdf -q "transformer" --json
"""

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from pdfscout.core import get_config, get_logger, set_console_level, ConfigurationError, PDFScoutError  # noqa: E402
from pdfscout.core.config_loader import reload_config  # noqa: E402
from pdfscout.export import write_report  # noqa: E402
from pdfscout.search import (  # noqa: E402
    QueryRole,
    SearchOrchestrator,
    SearchQuery,
    SearchRequest,
    assign_colors
)
from pdfscout.utils import get_relative_path, truncate_text  # noqa: E402


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Search PDF files with parallel and filter queries"
    )

    parser.add_argument(
        "directory",
        nargs="?",
        help="Root directory of the PDF collection (defaults to config value)"
    )

    parser.add_argument(
        "-q", "--query",
        action="append",
        default=[],
        help="Parallel query: every occurrence is reported (repeatable)"
    )

    parser.add_argument(
        "-f", "--filter",
        action="append",
        default=[],
        help="Filter query: documents must contain it (repeatable)"
    )

    parser.add_argument(
        "--regex",
        action="store_true",
        help="Treat all queries as regular expressions"
    )

    parser.add_argument(
        "--case-sensitive",
        action="store_true",
        help="Match case exactly"
    )

    parser.add_argument(
        "--context-words",
        type=int,
        help="Words of context on each side of a match"
    )

    parser.add_argument(
        "--zotero",
        type=str,
        help="Zotero data directory holding zotero.sqlite"
    )

    parser.add_argument(
        "--document",
        type=str,
        help="Search a single PDF instead of a directory"
    )

    parser.add_argument(
        "--export",
        type=str,
        help="Write a Markdown report to this path"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print matches as JSON"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to custom config.json file"
    )

    return parser.parse_args()


def build_queries(args, palette):
    """Build queries in command-line order: filters first, then parallels."""
    queries = [
        SearchQuery(text, is_regex=args.regex, role=QueryRole.FILTER, case_sensitive=args.case_sensitive)
        for text in args.filter
    ]
    queries += [
        SearchQuery(text, is_regex=args.regex, role=QueryRole.PARALLEL, case_sensitive=args.case_sensitive)
        for text in args.query
    ]
    return assign_colors(queries, palette)


def print_matches(matches, base_directory):
    """Print matches grouped by file."""
    current_file = None

    for match in matches:
        if match.document_path != current_file:
            current_file = match.document_path
            print(f"\n{get_relative_path(match.document_path, base_directory)}")

            if match.metadata:
                year = f" ({match.metadata.year})" if match.metadata.year else ""
                print(f"  [{match.metadata.citekey}]{year} {match.metadata.title or ''}")

        print(f"  p.{match.page_number}: {truncate_text(match.context_line, 160)}")


def main():
    """Main entry point for the search CLI."""
    args = parse_args()

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}")
            sys.exit(1)
        reload_config(config_path)

    try:
        config = get_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}")
        sys.exit(1)

    logger = get_logger(__name__)

    if args.json:
        set_console_level("WARNING")

    queries = build_queries(args, config.search.color_palette)
    if not queries:
        print("Error: at least one --query or --filter is required")
        sys.exit(1)

    context_words = args.context_words
    if context_words is None:
        context_words = config.search.context_words

    orchestrator = SearchOrchestrator()

    try:
        if args.document:
            base_directory = Path(args.document).parent
            matches = orchestrator.search_document(args.document, queries, context_words, args.zotero)
            stats = None
        else:
            base_directory = Path(args.directory or config.paths.default_corpus_directory)
            request = SearchRequest(
                queries=queries,
                directory=str(base_directory),
                context_words=context_words,
                zotero_path=args.zotero
            )
            matches, stats = orchestrator.search(request)

        if args.export:
            write_report(matches, args.export)

    except PDFScoutError as e:
        logger.error(e.message)
        print(f"Error: {e.message}")
        sys.exit(1)

    if args.json:
        print(json.dumps([match.to_dict() for match in matches], indent=2, ensure_ascii=False))
        sys.exit(0)

    print_matches(matches, base_directory)

    print("\n" + "=" * 60)
    print(f"Total matches:     {len(matches):,}")

    if stats is not None:
        print(f"Files scanned:     {stats.files_scanned:,}")
        print(f"Files matched:     {stats.files_matched:,}")
        print(f"Files failed:      {stats.files_failed:,}")
        print(f"Time:              {stats.execution_time_ms:.0f} ms")

    if args.export:
        print(f"Report written:    {args.export}")

    print("=" * 60)

    sys.exit(0)


if __name__ == "__main__":
    main()
