"""
Variant (SKU) generation.

Modules:
    registry - OptionRegistry: attributes and units of a product
    expansion - Pure cartesian expansion and unit regeneration
    engine - VariantExpansionEngine: edit-preserving variant table
    codes - SKU codes and variant titles
    stock - Base-unit stock, unit conversion and sale checks
"""

from .codes import (
    generate_full_product_name,
    generate_sku,
    generate_variant_title,
    normalize_for_code,
)
from .engine import VariantExpansionEngine
from .expansion import attribute_combinations, regenerate_for_units
from .registry import OptionRegistry
from .stock import (
    calculate_available_quantity,
    calculate_total_stock,
    check_sellable,
    count_unique_variants,
    find_variant_for_sale,
    format_stock_with_conversion,
    summarize_product_stock,
)

__all__ = [
    'VariantExpansionEngine',
    'OptionRegistry',
    'attribute_combinations',
    'regenerate_for_units',
    'generate_sku',
    'generate_variant_title',
    'generate_full_product_name',
    'normalize_for_code',
    'calculate_available_quantity',
    'calculate_total_stock',
    'check_sellable',
    'count_unique_variants',
    'find_variant_for_sale',
    'format_stock_with_conversion',
    'summarize_product_stock',
]
