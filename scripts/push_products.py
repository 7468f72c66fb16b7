#!/usr/bin/env python3
"""
Push Products: Upload products from the local store to the product API.

Every current-schema product in the local store is saved through the
remote persistence adapter (create or update). Legacy records are skipped;
run scripts/migrate_store.py first.

Usage:
    # Token from .env (POS_API_TOKEN)
    python3 scripts/push_products.py

    # Only some products
    python3 scripts/push_products.py --ids "PROD-1,PROD-2"

    # Check the connection only
    python3 scripts/push_products.py --test
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add project root to path for proper package imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from pos_catalog.common import PersistenceError, Session, load_settings, setup_logging
from pos_catalog.migration import is_current_record
from pos_catalog.storage import LocalStore, ProductAPIClient, RemotePersistenceAdapter, product_from_record

load_dotenv(Path(__file__).parent.parent / ".env")

logger = logging.getLogger("pos_catalog.scripts.push_products")


def main():
    parser = argparse.ArgumentParser(description="Upload local products to the product API")
    parser.add_argument("--token", help="API token (default: POS_API_TOKEN from .env)")
    parser.add_argument("--ids", help="Comma-separated product ids to push")
    parser.add_argument("--test", action="store_true", help="Only test the API connection")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args()

    setup_logging(verbose=args.verbose)

    token = args.token or os.environ.get("POS_API_TOKEN")
    if not token:
        print("Error: no API token (use --token or set POS_API_TOKEN in .env)")
        sys.exit(1)

    settings = load_settings()
    session = Session.from_settings(settings)
    store = LocalStore.from_settings(settings)
    wanted = {i.strip() for i in args.ids.split(",")} if args.ids else None

    with ProductAPIClient.from_settings(token, settings) as client:
        if not client.test_connection():
            print("Error: cannot reach the product API")
            sys.exit(1)
        if args.test:
            return

        adapter = RemotePersistenceAdapter(client, session)
        pushed = skipped = failed = 0

        for record in store.get_products():
            if not is_current_record(record):
                skipped += 1
                continue
            if wanted is not None and record.get("_id") not in wanted:
                continue

            product = product_from_record(record)
            try:
                adapter.save(product)
                pushed += 1
            except PersistenceError as e:
                failed += 1
                logger.error("%s (%s): %s %s", product.id, product.title, e, "; ".join(e.errors))

    print(f"Pushed:  {pushed}")
    print(f"Skipped: {skipped} (legacy records)")
    print(f"Failed:  {failed}")
    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
