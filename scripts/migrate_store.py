#!/usr/bin/env python3
"""
Migrate Store: Upgrade legacy product records in the local store.

Reads the persisted store document, converts products written with the old
keys (name, stock, barcode, description) to the current schema and writes
the document back. Records already in the current schema are left alone.

Usage:
    # Migrate the store configured in config/settings.yaml
    python3 scripts/migrate_store.py

    # Migrate a specific file
    python3 scripts/migrate_store.py --store data/spa-pos-store.json

    # Show what would change without writing
    python3 scripts/migrate_store.py --dry-run
"""

import argparse
import logging
import os
import sys
from pathlib import Path

# Add project root to path for proper package imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from pos_catalog.common import PersistenceError, load_settings, setup_logging
from pos_catalog.migration import migrate_records, migrate_store
from pos_catalog.storage import LocalStore
from pos_catalog.storage.adapter import utc_now_iso

logger = logging.getLogger("pos_catalog.scripts.migrate_store")


def main():
    parser = argparse.ArgumentParser(description="Upgrade legacy product records in the local store")
    parser.add_argument("--store", help="Path to the store JSON file (default: from settings.yaml)")
    parser.add_argument("--dry-run", action="store_true", help="Report counts without writing")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only warnings and errors")
    args = parser.parse_args()

    setup_logging(verbose=args.verbose, quiet=args.quiet)

    store = LocalStore.from_settings(load_settings())
    if args.store:
        store.path = Path(args.store)

    now = utc_now_iso()
    try:
        if args.dry_run:
            _, report = migrate_records(store.get_products(), now)
        else:
            report = migrate_store(store, now)
    except PersistenceError as e:
        logger.error("Migration failed: %s", e)
        sys.exit(1)

    print(f"Store:    {store.path}")
    print(f"Migrated: {report.migrated_count}")
    print(f"Skipped:  {report.skipped_count}")
    if args.dry_run:
        print("(dry run, nothing written)")


if __name__ == "__main__":
    main()
