"""
Variant Expansion Engine

Keeps a product's variant list in step with its attributes and units while
the product is being edited.

- Adding an attribute value adds the new combinations (cartesian product
  with the other attributes, times every unit).
- Removing a value or an attribute removes the rows that carry it.
- Any change to the units regenerates the whole list, carrying price, cost
  and stock forward per attribute combination.
- Rows can be edited one at a time (barcode, cost, price, stock).

Variant count after expansion is prod(values per attribute) * max(1, units).
All operations are synchronous and do no I/O. Rejected input raises
ValidationError and leaves the engine unchanged.
"""

import copy
import logging
import math
from typing import Dict, List, Optional

from ..common.config_loader import load_code_map
from ..common.errors import ValidationError
from ..models import Attribute, Unit, Variant, VariantDefaults, VariantProperties
from .codes import generate_sku
from .expansion import (
    attribute_combinations,
    distinct_combinations,
    expand_across_units,
    regenerate_for_units,
)
from .registry import OptionRegistry

logger = logging.getLogger(__name__)


class VariantExpansionEngine:
    """
    Variant table of one product being edited.

    Usage:
        engine = VariantExpansionEngine(VariantDefaults(price=100, stock=50))
        color = engine.add_attribute("Color")
        engine.add_attribute_value(color.id, "Red")
        engine.add_attribute_value(color.id, "Blue")
        engine.add_unit("Piece")
        engine.add_unit("Box", conversion=12)
        len(engine.variants)  # 4
    """

    EDITABLE_FIELDS = frozenset({'barcode', 'cost_price', 'price', 'stock'})

    def __init__(
        self,
        defaults: Optional[VariantDefaults] = None,
        product_code: str = "",
        registry: Optional[OptionRegistry] = None,
        variants: Optional[List[Variant]] = None,
        code_map: Optional[Dict[str, str]] = None,
    ):
        self.defaults = defaults or VariantDefaults()
        self.product_code = product_code
        self.registry = registry or OptionRegistry()
        self.variants: List[Variant] = list(variants or [])
        self._code_map = code_map
        self._refresh_codes()

    @classmethod
    def from_variant_properties(
        cls,
        properties: VariantProperties,
        defaults: Optional[VariantDefaults] = None,
        product_code: str = "",
        code_map: Optional[Dict[str, str]] = None,
    ) -> "VariantExpansionEngine":
        """Resume editing a saved {units, attributes, variants} block."""
        properties = copy.deepcopy(properties)
        return cls(
            defaults=defaults,
            product_code=product_code,
            registry=OptionRegistry(properties.attributes, properties.units),
            variants=properties.variants,
            code_map=code_map,
        )

    def to_variant_properties(self) -> VariantProperties:
        """Snapshot of the current state, safe to hand to a persistence adapter."""
        return copy.deepcopy(VariantProperties(
            units=self.registry.units,
            attributes=self.registry.attributes,
            variants=self.variants,
        ))

    @property
    def attributes(self) -> List[Attribute]:
        return self.registry.attributes

    @property
    def units(self) -> List[Unit]:
        return self.registry.units

    @property
    def has_multiple_units(self) -> bool:
        return len(self.registry.units) > 1

    # ── Attributes ───────────────────────────────────────────────────────

    def add_attribute(self, name: str = "", is_custom: bool = False) -> Attribute:
        return self.registry.add_attribute(name, is_custom)

    def rename_attribute(self, attribute_id: str, name: str, is_custom: Optional[bool] = None) -> Attribute:
        """Set an attribute's name; variants carrying the old name are re-keyed."""
        old_name = self.registry.rename_attribute(attribute_id, name, is_custom)
        attr = self.registry.get_attribute(attribute_id)

        if old_name and old_name != attr.name:
            for v in self.variants:
                if old_name in v.attributes:
                    v.attributes = {
                        (attr.name if key == old_name else key): value
                        for key, value in v.attributes.items()
                    }
            self._refresh_codes()
        return attr

    def add_attribute_value(self, attribute_id: str, value: str) -> None:
        """
        Add a value to an attribute and expand the variant list.

        Raises:
            ValidationError: Empty value, attribute without a name, or duplicate value
            KeyError: Unknown attribute
        """
        value = (value or "").strip()
        if not value:
            raise ValidationError("attribute value required")

        attr = self.registry.add_value(attribute_id, value)

        if not self.variants:
            # First expansion: every combination of the attributes that have values
            for combination in attribute_combinations(self.registry.attributes):
                self._append_new(self._seed(combination))
        elif any(attr.name in v.attributes for v in self.variants):
            # Known dimension: new value crossed with the other dimensions
            for combination in distinct_combinations(self.variants, exclude=attr.name):
                combination[attr.name] = value
                self._append_new(self._seed(combination))
        else:
            # New dimension with a single value: every existing row gains it
            for v in self.variants:
                v.attributes = {**v.attributes, attr.name: value}

        self._refresh_codes()
        logger.debug("Added %s=%s, %d variant(s)", attr.name, value, len(self.variants))

    def remove_attribute_value(self, attribute_id: str, value: str) -> None:
        """Remove a value and every variant carrying it."""
        attr = self.registry.remove_value(attribute_id, value)
        if attr.name:
            self.variants = [v for v in self.variants if v.attributes.get(attr.name) != value]
        logger.debug("Removed %s=%s, %d variant(s)", attr.name, value, len(self.variants))

    def delete_attribute(self, attribute_id: str) -> None:
        """Delete an attribute and every variant that has a value for it."""
        attr = self.registry.remove_attribute(attribute_id)
        if attr.name:
            self.variants = [v for v in self.variants if attr.name not in v.attributes]
        self._refresh_codes()

    # ── Units ────────────────────────────────────────────────────────────

    def add_unit(
        self,
        name: str,
        conversion: float = 1,
        price: Optional[float] = None,
        is_direct_sale: bool = True,
    ) -> Unit:
        unit = self.registry.add_unit(name, conversion, price, is_direct_sale)
        self._regenerate()
        return unit

    def add_or_update_unit(self, unit: Unit) -> Unit:
        unit = self.registry.add_or_update_unit(unit)
        self._regenerate()
        return unit

    def delete_unit(self, unit_id: str) -> None:
        """
        Delete a unit and regenerate.

        Raises:
            ValidationError: If it is the only unit (the base unit)
        """
        self.registry.delete_unit(unit_id)
        self._regenerate()

    def _regenerate(self) -> None:
        self.variants = regenerate_for_units(self.variants, self.registry.units)
        self._refresh_codes()
        logger.debug("Regenerated %d variant(s) for %d unit(s)", len(self.variants), len(self.registry.units))

    # ── Variant table ────────────────────────────────────────────────────

    def get_variant(self, variant_id: str) -> Variant:
        for v in self.variants:
            if v.id == variant_id:
                return v
        raise KeyError(f"Unknown variant: {variant_id}")

    def update_variant_field(self, variant_id: str, field: str, value) -> Variant:
        """
        Edit one field of one variant.

        Raises:
            ValidationError: Read-only or unknown field, a number that is not
                finite or is negative, fractional stock, or stock on a non-base unit
            KeyError: Unknown variant
        """
        variant = self.get_variant(variant_id)

        if field == 'code':
            raise ValidationError("code is generated automatically and cannot be edited")
        if field not in self.EDITABLE_FIELDS:
            raise ValidationError(f"unknown variant field: {field}")

        if field == 'barcode':
            variant.barcode = str(value or "").strip()
            return variant

        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ValidationError(f"{field}: not a valid number ({value!r})")
        if not math.isfinite(number):
            raise ValidationError(f"{field}: not a valid number ({value!r})")
        if number < 0:
            raise ValidationError(f"{field}: must not be negative (got {number})")

        if field == 'stock':
            if not number.is_integer():
                raise ValidationError(f"stock: must be a whole number (got {number})")
            if not variant.is_base_unit and number != 0:
                raise ValidationError(f"stock is tracked on the base unit, not on {variant.unit}")
            variant.stock = int(number)
        else:
            setattr(variant, field, number)
        return variant

    def apply_price_to_all(self) -> None:
        """Copy the first variant's price to every variant."""
        if not self.variants:
            return
        price = self.variants[0].price or 0
        for v in self.variants:
            v.price = price

    def delete_variant(self, variant_id: str) -> None:
        variant = self.get_variant(variant_id)
        self.variants = [v for v in self.variants if v is not variant]

    # ── Internals ────────────────────────────────────────────────────────

    def _seed(self, combination: Dict[str, str]) -> List[Variant]:
        d = self.defaults
        return expand_across_units(combination, self.registry.units, d.price or 0, d.cost_price or 0, d.stock or 0)

    def _append_new(self, rows: List[Variant]) -> None:
        existing = {v.key for v in self.variants}
        self.variants.extend(row for row in rows if row.key not in existing)

    def set_product_code(self, product_code: str) -> None:
        self.product_code = product_code
        self._refresh_codes()

    def _refresh_codes(self) -> None:
        if not self.product_code:
            return
        if self._code_map is None:
            self._code_map = load_code_map()
        for v in self.variants:
            v.code = generate_sku(
                self.product_code,
                v.attributes,
                v.unit,
                self.has_multiple_units,
                code_map=self._code_map,
            )
