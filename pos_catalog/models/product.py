"""
Product data models.

Pure data classes for products, their attributes, units and variants.
No business logic - only data structure definitions and identity keys.
"""

import itertools
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

# (sorted (attribute name, value) pairs, unit name)
VariantKey = Tuple[Tuple[Tuple[str, str], ...], str]

_row_ids = itertools.count(1)


def new_row_id() -> str:
    """Return a surrogate id that is never handed out twice in this process."""
    return f"row-{next(_row_ids)}"


def combination_key(attributes: Dict[str, str]) -> Tuple[Tuple[str, str], ...]:
    """Attribute values as sorted (name, value) pairs, ignoring definition order."""
    return tuple(sorted(attributes.items()))


def variant_key(attributes: Dict[str, str], unit: str) -> VariantKey:
    """Content key of a variant: its attribute values and unit."""
    return combination_key(attributes), unit


def format_variant_id(key: VariantKey) -> str:
    """
    Render a content key as a string id.

    Example:
        ((('Color', 'Red'), ('Size', 'M')), 'Piece') -> 'Color=Red|Size=M@Piece'
    """
    pairs, unit = key
    return "|".join(f"{name}={value}" for name, value in pairs) + f"@{unit}"


@dataclass
class Attribute:
    """A product dimension (Color, Size...) and its selectable values."""
    id: str
    name: str = ""
    is_custom: bool = False
    values: List[str] = field(default_factory=list)


@dataclass
class Unit:
    """Packaging level with its conversion factor to the base unit."""
    id: str
    name: str
    conversion: float = 1
    is_base: bool = False
    price: Optional[float] = None   # Own selling price, else the variant price is used
    is_direct_sale: bool = True


@dataclass
class VariantDefaults:
    """Default values from the product form used to seed new variants."""
    price: float = 0
    cost_price: float = 0
    stock: int = 0


@dataclass
class Variant:
    """
    One sellable combination of attribute values and a unit.

    `id` is derived from the content (attribute values + unit) and stays the
    same across regeneration. `row_id` is a display-only surrogate that is
    fresh for every generated row.
    """
    attributes: Dict[str, str]
    unit: str = ""
    conversion: float = 1
    code: str = ""
    barcode: str = ""
    cost_price: float = 0
    price: float = 0
    stock: int = 0          # Only meaningful on the base unit
    row_id: str = field(default_factory=new_row_id)

    @property
    def key(self) -> VariantKey:
        return variant_key(self.attributes, self.unit)

    @property
    def id(self) -> str:
        return format_variant_id(self.key)

    @property
    def is_base_unit(self) -> bool:
        return self.conversion == 1


@dataclass
class VariantProperties:
    """The units/attributes/variants block stored on a product."""
    units: List[Unit] = field(default_factory=list)
    attributes: List[Attribute] = field(default_factory=list)
    variants: List[Variant] = field(default_factory=list)


@dataclass
class Product:
    """
    Product (current schema).

    Field Groups:
    - Identity: id, tenant/industry, type/category/brand references
    - Content: code, title, brief, content, images
    - Pricing and stock: price, cost_price, quantity (cached from variants)
    - Lifecycle: status, timestamps
    - Variants: variant_properties (units, attributes, variants)
    - extra: fields of other verticals kept as-is (spa options, sessions...)
    """

    id: str
    title: str
    code: str = ""
    tenant_id: str = ""
    industry_id: str = ""
    product_type_id: Optional[str] = None
    product_category_id: Optional[str] = None
    brand_id: Optional[str] = None
    brand: str = ""
    brief: Optional[str] = None
    content: Optional[str] = None
    price: Optional[float] = None
    prices: Optional[Dict[str, float]] = None
    cost_price: Optional[float] = None
    quantity: int = 0
    waiting_quantity: int = 0
    is_sold_out: bool = False
    status: int = 1                 # 0: inactive, 1: active
    image: Optional[str] = None
    other_images: Optional[List[str]] = None
    created_at: str = ""
    updated_at: str = ""
    deleted_at: Optional[str] = None
    variant_properties: Optional[VariantProperties] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class LegacyProduct:
    """A stored product record written before the current schema (loose keys)."""
    record: Dict[str, Any]


@dataclass
class SavedProduct:
    """Result of a successful save."""
    product: Product
    backend: str        # "local" or "remote"
    saved_at: str
