#!/usr/bin/env python
# Glossa - Command Line
# ======================
"""
Load and search glossaries from the command line.

Usage:
    glossa load glossary.csv --db data/glossary.duckdb
    glossa search 'dam [engineering] (en-AU)'
    glossa search 'damm' --max-distance 2
    glossa search 'dam' --substring --verbose
"""

import argparse
import logging
import sys
from typing import List, Optional

from glossa.config import GlossaSettings
from glossa.models import TermMatchMode
from glossa.query import create_query_service
from glossa.storage import GlossaryLoader

logger = logging.getLogger(__name__)


def run_load(args: argparse.Namespace, settings: GlossaSettings) -> int:
    """Load a CSV glossary into DuckDB."""
    loader = GlossaryLoader(settings.db_path)
    try:
        stats = loader.load_from_csv(args.csv_path)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Load failed: {e}")
        return 1

    print(f"Loaded {stats.entries} entries ({stats.tags} tag links, "
          f"{stats.locales} locale links) into {settings.db_path}")
    return 0


def run_search(args: argparse.Namespace, settings: GlossaSettings) -> int:
    """Run a search and print the results."""
    if args.substring:
        settings.term_match = TermMatchMode.SUBSTRING
    if args.max_distance is not None:
        settings.max_edit_distance = args.max_distance

    service = create_query_service(settings)
    outcome = service.search(args.query)

    if not outcome.filters:
        print("No filters found in query.")
        return 1

    print("Filters: " + ", ".join(sorted(str(f) for f in outcome.filters)))
    for entry in outcome.sorted_entries():
        print(f"  {entry.term}: {entry.definition}")
    print(f"{len(outcome.entries)} result(s)")

    if outcome.partial:
        for failure in outcome.failures:
            print(f"  warning: {failure.stage} failed: {failure.message}", file=sys.stderr)
        return 2

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Glossary search",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        "--db",
        default=None,
        help="Path to glossary DuckDB file (default: $GLOSSA_DB_PATH)"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    load_parser = subparsers.add_parser("load", help="Load a CSV glossary")
    load_parser.add_argument("csv_path", help="CSV file with entry_id, term, definition columns")

    search_parser = subparsers.add_parser("search", help="Search the glossary")
    search_parser.add_argument("query", help="Search query")
    search_parser.add_argument(
        "--substring",
        action="store_true",
        help="Match terms by substring instead of edit distance"
    )
    search_parser.add_argument(
        "--max-distance",
        type=int,
        default=None,
        help="Maximum edit distance for fuzzy term matching"
    )

    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    settings = GlossaSettings.from_env()
    if args.db:
        settings.db_path = args.db

    if args.command == "load":
        return run_load(args, settings)
    return run_search(args, settings)


if __name__ == "__main__":
    sys.exit(main())
