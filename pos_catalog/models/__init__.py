"""
Data models for the product catalog.

This module contains pure data classes with no business logic.
"""

from .product import (
    Attribute,
    LegacyProduct,
    Product,
    SavedProduct,
    Unit,
    Variant,
    VariantDefaults,
    VariantKey,
    VariantProperties,
    combination_key,
    format_variant_id,
    new_row_id,
    variant_key,
)

__all__ = [
    'Attribute',
    'Unit',
    'Variant',
    'VariantDefaults',
    'VariantKey',
    'VariantProperties',
    'Product',
    'LegacyProduct',
    'SavedProduct',
    'combination_key',
    'format_variant_id',
    'new_row_id',
    'variant_key',
]
