"""
Legacy product schema migration.

Modules:
    schema - parse_product_record, upgrade, migrate_records, migrate_store
"""

from .schema import (
    MigrationReport,
    is_current_record,
    migrate_records,
    migrate_store,
    parse_product_record,
    upgrade,
)

__all__ = [
    'MigrationReport',
    'is_current_record',
    'migrate_records',
    'migrate_store',
    'parse_product_record',
    'upgrade',
]
