"""
Persistence Adapters

Commit a finished product (with its units, attributes and variants) to the
local store or to the remote product API.

save() returns a SavedProduct or raises PersistenceError:
- kind "validation": required fields missing or invalid data, not retryable
- kind "storage": quota exceeded, file or remote failure, retryable
No retries happen here; the caller decides whether to offer one.
"""

import copy
import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional

from ..common.errors import PersistenceError
from ..common.session import Session
from ..models import Product, SavedProduct
from ..validation import ProductValidator
from ..variants.stock import summarize_product_stock
from .api_client import ProductAPIClient
from .codec import product_from_record, product_to_record
from .local_store import LocalStore

logger = logging.getLogger(__name__)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class PersistenceAdapter:
    """Shared save flow: validate, stamp session and timestamps, write."""

    backend = ""

    def __init__(self, session: Session, clock: Optional[Callable[[], str]] = None):
        self.session = session
        self.clock = clock or utc_now_iso

    def save(self, product: Product) -> SavedProduct:
        """
        Save a product.

        Args:
            product: Product to save (not modified)

        Returns:
            SavedProduct with the product as stored

        Raises:
            PersistenceError: On validation or storage failure
        """
        is_new = not (product.id and product.created_at)
        prepared = self.prepare(product)
        stored = self._write(prepared, is_new)
        logger.info("Saved product %s (%s) to %s", stored.id, stored.title, self.backend)
        return SavedProduct(product=stored, backend=self.backend, saved_at=stored.updated_at)

    def prepare(self, product: Product) -> Product:
        """Validate and return a stamped copy ready to be written."""
        result = ProductValidator(product).validate()
        if not result["valid"]:
            logger.warning("Product %r rejected: %s", product.title, "; ".join(result["errors"]))
            raise PersistenceError(
                "Product data is invalid",
                kind=PersistenceError.VALIDATION,
                errors=result["errors"],
            )

        prepared = copy.deepcopy(product)
        now = self.clock()

        if not prepared.id:
            prepared.id = f"PROD-{uuid.uuid4().hex}"
        prepared.tenant_id = self.session.tenant_id
        prepared.industry_id = self.session.industry_id
        prepared.created_at = prepared.created_at or now
        prepared.updated_at = now

        if prepared.variant_properties and prepared.variant_properties.variants:
            summary = summarize_product_stock(prepared.variant_properties.variants)
            prepared.quantity = summary["quantity"]
            prepared.is_sold_out = summary["is_sold_out"]

        return prepared

    def _write(self, product: Product, is_new: bool) -> Product:
        raise NotImplementedError


class LocalPersistenceAdapter(PersistenceAdapter):
    """Upserts products into the `products` array of a LocalStore."""

    backend = "local"

    def __init__(self, store: LocalStore, session: Session, clock: Optional[Callable[[], str]] = None):
        super().__init__(session, clock)
        self.store = store

    def _write(self, product: Product, is_new: bool) -> Product:
        record = product_to_record(product)
        records = self.store.get_products()

        for index, existing in enumerate(records):
            if existing.get("_id", existing.get("id")) == product.id:
                records[index] = record
                break
        else:
            records.append(record)

        self.store.save_products(records)
        return product


class RemotePersistenceAdapter(PersistenceAdapter):
    """Creates (POST) or updates (PUT) products through the product API."""

    backend = "remote"

    def __init__(self, client: ProductAPIClient, session: Session, clock: Optional[Callable[[], str]] = None):
        super().__init__(session, clock)
        self.client = client

    def _write(self, product: Product, is_new: bool) -> Product:
        record = product_to_record(product)

        if is_new:
            result = self.client.create_product(record)
        else:
            result = self.client.update_product(product.id, record)

        if result is None:
            raise PersistenceError(f"Remote save failed for product {product.id}")

        if isinstance(result, dict) and result.get("_id"):
            return product_from_record(result)
        return product
