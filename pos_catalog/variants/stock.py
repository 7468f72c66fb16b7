"""
Stock Helpers

Only base-unit variants carry stock. Other units derive what can be sold
from the base-unit row of the same attribute combination through their
conversion factor.
"""

import math
from typing import Dict, List, Optional, Sequence

from ..models import Variant, combination_key


def is_base_unit(conversion: float) -> bool:
    return conversion == 1


def calculate_available_quantity(base_quantity: int, conversion: float) -> int:
    """
    Quantity sellable in a larger unit.

    Example:
        base_quantity=25, conversion=12 -> 2
    """
    if conversion <= 1:
        return base_quantity
    return math.floor(base_quantity / conversion)


def calculate_total_stock(variants: Sequence[Variant]) -> int:
    """Total stock in base units (non-base rows are ignored)."""
    return sum(v.stock for v in variants if is_base_unit(v.conversion))


def count_unique_variants(variants: Sequence[Variant]) -> int:
    """Number of distinct attribute combinations, not counting units."""
    return len({combination_key(v.attributes) for v in variants if is_base_unit(v.conversion)})


def format_stock(quantity: int, unit: str) -> str:
    return f"{quantity} {unit}".lower()


def format_stock_with_conversion(
    quantity: int,
    unit: str,
    conversion: float,
    base_unit: Optional[str] = None,
) -> str:
    """
    Stock text with the base-unit equivalent.

    Example:
        (2, "Box", 12, "Piece") -> "2 box (= 24 piece)"
    """
    if conversion <= 1 or not base_unit:
        return format_stock(quantity, unit)

    total_in_base = quantity * conversion
    if float(total_in_base).is_integer():
        total_in_base = int(total_in_base)
    return f"{quantity} {unit} (= {total_in_base} {base_unit})".lower()


def summarize_product_stock(variants: Sequence[Variant]) -> Dict[str, object]:
    """
    Cached product-level stock figures.

    Returns:
        {'quantity': total base stock, 'is_sold_out': True when variants exist and all base rows are empty}
    """
    quantity = calculate_total_stock(variants)
    base_rows = [v for v in variants if is_base_unit(v.conversion)]
    is_sold_out = bool(base_rows) and all(v.stock == 0 for v in base_rows)
    return {'quantity': quantity, 'is_sold_out': is_sold_out}


def find_base_variant(variant: Variant, variants: Sequence[Variant]) -> Optional[Variant]:
    """The base-unit row with the same attribute values as `variant`."""
    combination = combination_key(variant.attributes)
    for candidate in variants:
        if is_base_unit(candidate.conversion) and combination_key(candidate.attributes) == combination:
            return candidate
    return None


def find_variant_for_sale(search_term: str, variants: Sequence[Variant]) -> Optional[Variant]:
    """
    Find a variant by scanned barcode, then by SKU code (case-insensitive).

    Returns:
        Matching variant or None
    """
    term = search_term.strip().upper()
    if not term:
        return None

    for v in variants:
        if v.barcode and v.barcode.upper() == term:
            return v
    for v in variants:
        if v.code and v.code.upper() == term:
            return v
    return None


def check_sellable(variant: Variant, requested_quantity: int, variants: List[Variant]) -> Dict[str, object]:
    """
    Check whether `requested_quantity` of a variant can be sold.

    Args:
        variant: Variant being sold
        requested_quantity: Quantity in the variant's own unit
        variants: All variants of the product (to find the base-unit row)

    Returns:
        {'can_sell': bool, 'available': int, 'error': str (only when can_sell is False)}
    """
    if is_base_unit(variant.conversion):
        available = variant.stock
    else:
        base = find_base_variant(variant, variants)
        available = calculate_available_quantity(base.stock, variant.conversion) if base else 0

    if available <= 0:
        return {'can_sell': False, 'available': 0, 'error': "Out of stock"}

    if requested_quantity > available:
        return {
            'can_sell': False,
            'available': available,
            'error': f"Only {available} {variant.unit or 'item(s)'} left in stock".strip(),
        }

    return {'can_sell': True, 'available': available}
