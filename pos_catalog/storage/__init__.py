"""
Product persistence.

Modules:
    codec - Product/variant records <-> dataclasses
    local_store - LocalStore: JSON file mirroring the web app's persisted state
    api_client - ProductAPIClient: REST client for the product API
    adapter - PersistenceAdapter implementations (local and remote)
"""

from .adapter import LocalPersistenceAdapter, PersistenceAdapter, RemotePersistenceAdapter
from .api_client import ProductAPIClient
from .codec import (
    product_from_record,
    product_to_record,
    variant_properties_from_dict,
    variant_properties_to_dict,
)
from .local_store import LocalStore

__all__ = [
    'PersistenceAdapter',
    'LocalPersistenceAdapter',
    'RemotePersistenceAdapter',
    'ProductAPIClient',
    'LocalStore',
    'product_from_record',
    'product_to_record',
    'variant_properties_from_dict',
    'variant_properties_to_dict',
]
