#!/usr/bin/env python3
"""
Command line entry point for a one-shot feed sync.

    python -m src.ingestion                   # Ingest new feed entries
    python -m src.ingestion --dry-run         # List new entries, change nothing
    python -m src.ingestion --init-db         # Create tables before syncing
"""

import argparse
import sys
from dataclasses import replace

from src.db import get_engine, init_database
from src.logger import setup_logging
from src.ingestion.config import SyncConfig
from src.ingestion.errors import SyncError
from src.ingestion.sync_entries import build_orchestrator


def main(argv=None) -> int:
    """
    Parse arguments, run one sync and print a summary.

    Returns the process exit code: 0 on success, 1 on error, 130 when
    interrupted by the user.
    """
    parser = argparse.ArgumentParser(
        description="Sync new RSS feed entries into Mendable and the database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m src.ingestion                                        # Sync
  python -m src.ingestion --dry-run                              # Preview
  python -m src.ingestion --feed-url https://example.com/feed.rss  # Custom feed
        """,
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show which entries would be ingested without calling Mendable or saving",
    )
    parser.add_argument(
        "--feed-url",
        type=str,
        default=None,
        help="RSS feed URL (overrides FEED_URL from .env)",
    )
    parser.add_argument(
        "--init-db", action="store_true", help="Create missing tables before syncing"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Detailed console output"
    )
    args = parser.parse_args(argv)

    logger = setup_logging(
        logger_name="sync_entries",
        log_file="logs/sync_entries.log",
        verbose=args.verbose,
    )
    logger.info("Starting entry sync")

    try:
        config = SyncConfig.from_env()
        if args.feed_url:
            config = replace(config, feed_url=args.feed_url)

        if args.init_db:
            init_database(get_engine(config.database_url))

        orchestrator = build_orchestrator(config, dry_run=args.dry_run)
        result = orchestrator.sync(dry_run=args.dry_run)

        if result.dry_run:
            print("DRY RUN - entries that would be ingested (feed order):")
            for guid in result.pending:
                print(f"  - {guid}")
        print(result.message)
        logger.info(f"Operation completed: {result}")
        return 0

    except KeyboardInterrupt:
        print("\nSync interrupted by user")
        return 130
    except SyncError as e:
        print(f"Sync failed: {e}", file=sys.stderr)
        logger.error(f"Sync failed: {e}")
        print("Check logs/sync_entries.log for detailed error information")
        return 1
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        logger.exception("Unexpected error during sync")
        return 1


if __name__ == "__main__":
    sys.exit(main())
