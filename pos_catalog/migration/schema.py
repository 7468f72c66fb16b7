"""
Product Schema Migration

Older screens stored products with loose keys (name, stock, barcode,
description, id). Current records use the snake_case schema with `_id`.

A stored record is read as either a Product (current schema) or a
LegacyProduct, and `upgrade()` turns any LegacyProduct into a Product
without failing, filling gaps with the same fallbacks the web app uses.
"""

import json
import logging
import math
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from ..models import LegacyProduct, Product
from ..storage.codec import (
    LEGACY_ALIAS_FIELDS,
    PRODUCT_FIELDS,
    product_from_record,
    product_to_record,
    variant_properties_from_dict,
)
from ..storage.local_store import LocalStore

logger = logging.getLogger(__name__)

_ID_NAMESPACE = uuid.UUID("6f1c1d8e-3b0a-4c53-9a59-0f6f2b1e7a41")

# Keys of other verticals that keep their meaning under a new name
_RENAMED_EXTRA_FIELDS = {'type': 'productType'}


@dataclass
class MigrationReport:
    migrated_count: int = 0
    skipped_count: int = 0

    @property
    def message(self) -> str:
        return (
            f"Migration complete! Migrated {self.migrated_count} products, "
            f"skipped {self.skipped_count} already migrated."
        )


def is_current_record(record: Dict[str, Any]) -> bool:
    """A record is current when it has _id, title, quantity, code and created_at."""
    return bool(
        record.get('_id')
        and record.get('title')
        and record.get('quantity') is not None
        and record.get('code')
        and record.get('created_at')
    )


def parse_product_record(record: Dict[str, Any]) -> Union[Product, LegacyProduct]:
    if is_current_record(record):
        return product_from_record(record)
    return LegacyProduct(record=dict(record))


def _first(*values):
    """First truthy value, else the last one given."""
    for value in values:
        if value:
            return value
    return values[-1]


def _coalesce(*values):
    """First value that is not None."""
    for value in values:
        if value is not None:
            return value
    return None


def _safe_float(value, default: Optional[float]) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return number if math.isfinite(number) else default


def _safe_int(value, default: int) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default


def legacy_id(record: Dict[str, Any]) -> str:
    """Deterministic id for a record that has none, derived from its content."""
    digest = uuid.uuid5(_ID_NAMESPACE, json.dumps(record, sort_keys=True, default=str))
    return f"PROD-{digest.hex}"


def upgrade(legacy: LegacyProduct, now: str) -> Product:
    """
    Convert a legacy record to the current schema.

    Never raises for any record content: unreadable numbers fall back to
    their defaults and unknown keys are kept in `extra`.

    Args:
        legacy: Record to convert
        now: ISO timestamp used when created_at/updated_at are missing
    """
    r = legacy.record
    product_id = str(_first(r.get('_id'), r.get('id'), None) or legacy_id(r))

    known = set(PRODUCT_FIELDS) | set(LEGACY_ALIAS_FIELDS) | {'_id', 'variant_properties'}
    extra = {
        _RENAMED_EXTRA_FIELDS.get(k, k): v
        for k, v in r.items()
        if k not in known
    }
    if 'productType' in r:
        extra['productType'] = r['productType'] or r.get('type')

    variant_properties = None
    if isinstance(r.get('variant_properties'), dict):
        try:
            variant_properties = variant_properties_from_dict(r['variant_properties'])
        except (TypeError, ValueError, AttributeError, OverflowError):
            logger.warning("Dropping unreadable variant_properties of product %s", product_id)
            extra['variant_properties_raw'] = r['variant_properties']

    quantity = _coalesce(r.get('quantity'), r.get('stock'), 0)

    return Product(
        id=product_id,
        title=str(_first(r.get('title'), r.get('name'), '')),
        code=str(_first(r.get('code'), r.get('barcode'), product_id)),
        tenant_id=r.get('tenant_id') or '',
        industry_id=r.get('industry_id') or '',
        product_type_id=r.get('product_type_id'),
        product_category_id=r.get('product_category_id'),
        brand_id=r.get('brand_id'),
        brand=r.get('brand') or '',
        brief=_first(r.get('brief'), r.get('description'), None),
        content=_first(r.get('content'), r.get('description'), None),
        price=_safe_float(r.get('price') or 0, 0),
        prices=r.get('prices'),
        cost_price=_safe_float(r.get('cost_price'), None),
        quantity=_safe_int(quantity, 0),
        waiting_quantity=_safe_int(_coalesce(r.get('waiting_quantity'), 0), 0),
        is_sold_out=bool(_coalesce(r.get('is_sold_out'), False)),
        status=_safe_int(_coalesce(r.get('status'), 1), 1),
        image=r.get('image'),
        other_images=r.get('other_images'),
        created_at=r.get('created_at') or now,
        updated_at=r.get('updated_at') or now,
        deleted_at=r.get('deleted_at'),
        variant_properties=variant_properties,
        extra=extra,
    )


def migrate_records(records: List[Dict[str, Any]], now: str) -> Tuple[List[Dict[str, Any]], MigrationReport]:
    """
    Upgrade every legacy record; current records are returned untouched.

    Returns:
        (records in the same order, report)
    """
    report = MigrationReport()
    migrated = []

    for record in records:
        if is_current_record(record):
            report.skipped_count += 1
            migrated.append(record)
        else:
            report.migrated_count += 1
            migrated.append(product_to_record(upgrade(LegacyProduct(record=dict(record)), now)))

    return migrated, report


def migrate_store(store: LocalStore, now: str) -> MigrationReport:
    """
    Upgrade the products held in a local store, writing back only when needed.

    Raises:
        PersistenceError: If the store cannot be read or written
    """
    products = store.get_products()
    if not products:
        logger.info("No products found in %s", store.path)
        return MigrationReport()

    migrated, report = migrate_records(products, now)
    if report.migrated_count:
        store.save_products(migrated)

    logger.info(report.message)
    return report
