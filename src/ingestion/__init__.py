"""
Ingestion package: keeps the entries table and Mendable in step with the RSS feed.

Modules:
    feed_reader: Fetch the RSS feed and extract guid/link/title per item
    mendable: Register one entry's link with the Mendable ingestion API
    sync_entries: Diff feed against the database and ingest new entries in order
    config: SyncConfig, settings read from the environment / .env
    errors: SyncError hierarchy raised by all of the above

Usage:
    # Sync once
    python -m src.ingestion

    # Show what would be ingested
    python -m src.ingestion --dry-run
"""
