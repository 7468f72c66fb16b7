"""
SKU Codes and Variant Titles

Builds SKU codes like "NIKE-BASIC-001-RED-M-LO" and display titles like
"COLOR: Red, SIZE: M (piece)" from a variant's attribute values and unit.
"""

import re
import unicodedata
from typing import Dict, Optional

from ..common.config_loader import load_code_map

DEFAULT_VARIANT_TITLE = "Default"


def strip_diacritics(text: str) -> str:
    """Remove combining accents (NFD decomposition)."""
    decomposed = unicodedata.normalize('NFD', text)
    return ''.join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_for_code(text: str, code_map: Optional[Dict[str, str]] = None) -> str:
    """
    Turn an attribute value or unit name into a short code.

    Args:
        text: Value to encode (e.g., "Đỏ", "Xanh dương", "Hộp")
        code_map: Lowercase value -> code lookup (if None, loads from config)

    Returns:
        Mapped code, or the first 3 alphanumerics of the uppercased,
        accent-free text

    Example:
        "Đỏ" -> "RED", "Hộp" -> "HOP", "Cotton" -> "COT"
    """
    if code_map is None:
        code_map = load_code_map()

    lower_text = text.lower().strip()
    if lower_text in code_map:
        return code_map[lower_text]

    return re.sub(r'[^A-Z0-9]', '', strip_diacritics(text).upper())[:3]


def generate_sku(
    product_code: str,
    attributes: Optional[Dict[str, str]] = None,
    unit: Optional[str] = None,
    has_multiple_units: bool = False,
    code_map: Optional[Dict[str, str]] = None,
) -> str:
    """
    Generate a SKU code from the product code and variant values.

    Attributes are added in sorted name order so the code does not depend on
    the order they were defined in. The unit is only added when the product
    is sold in more than one unit.

    Example:
        generate_sku("NIKE-BASIC-001", {"Color": "Đỏ", "Size": "M"}, "Lô", True)
        -> "NIKE-BASIC-001-RED-M-LO"
    """
    if code_map is None:
        code_map = load_code_map()

    parts = [product_code]
    for name in sorted(attributes or {}):
        value = attributes[name]
        if value:
            parts.append(normalize_for_code(value, code_map))

    if has_multiple_units and unit:
        parts.append(normalize_for_code(unit, code_map))

    return '-'.join(parts)


def generate_variant_title(
    attributes: Optional[Dict[str, str]] = None,
    unit: Optional[str] = None,
    has_multiple_units: bool = False,
    include_unit_for_base: bool = False,
) -> str:
    """
    Generate the display title of a variant.

    With several units the unit has its own column, so it is left out.
    With a single unit it is appended in parentheses.

    Example:
        ({"Color": "Red", "Size": "M"}, "Piece") -> "COLOR: Red, SIZE: M (piece)"
        ({}, None) -> "Default"
    """
    attributes = attributes or {}
    attributes_text = ', '.join(
        f"{name.upper()}: {attributes[name]}"
        for name in sorted(attributes)
        if attributes[name]
    )

    if unit and not has_multiple_units and attributes_text:
        return f"{attributes_text} ({unit.lower()})"

    if unit and include_unit_for_base and not attributes_text:
        return f"({unit.lower()})"

    return attributes_text or DEFAULT_VARIANT_TITLE


def generate_full_product_name(product_title: str, variant_title: str) -> str:
    """Product title plus variant title, or just the product title for the default variant."""
    if not variant_title or variant_title == DEFAULT_VARIANT_TITLE:
        return product_title
    return f"{product_title} - {variant_title}"
