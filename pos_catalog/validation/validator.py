"""
Product Validator

Checks product and variant data before it is saved.
Errors block the save; warnings are shown to the operator.
"""

from __future__ import annotations

from collections import Counter

from ..models import Product, Variant, VariantProperties

REQUIRED_FIELDS = ("title", "code")


def _is_negative(value) -> bool:
    return value is not None and value < 0


class ProductValidator:
    """Validates a product and its variant table."""

    def __init__(self, product: Product):
        self.product = product

    def validate(self) -> dict:
        """
        Run all validations.

        Returns a dict with keys:
          valid          - False if any error fires
          missing_fields - required top-level fields that are empty
          errors         - blocking problems
          warnings       - non-blocking problems
        """
        errors: list[str] = []
        warnings: list[str] = []
        p = self.product

        # ── Product ──────────────────────────────────────────────────────────

        missing_fields = [
            name for name in REQUIRED_FIELDS
            if not getattr(p, name) or not str(getattr(p, name)).strip()
        ]
        for name in missing_fields:
            errors.append(f"{name}: missing or empty")

        if _is_negative(p.price):
            errors.append(f"price: must not be negative (got {p.price})")
        if _is_negative(p.cost_price):
            errors.append(f"cost_price: must not be negative (got {p.cost_price})")
        if p.quantity < 0:
            errors.append(f"quantity: must not be negative (got {p.quantity})")

        if not p.image:
            warnings.append("image: none set")
        if not p.brand_id and not p.brand:
            warnings.append("brand: none set")
        if not p.product_category_id:
            warnings.append("category: none set")

        # ── Variants ─────────────────────────────────────────────────────────

        if p.variant_properties is not None:
            variant_errors, variant_warnings = validate_variant_properties(p.variant_properties)
            errors.extend(variant_errors)
            warnings.extend(variant_warnings)

        return {
            "valid": not errors,
            "missing_fields": missing_fields,
            "errors": errors,
            "warnings": warnings,
        }


def validate_variant(variant: Variant) -> tuple[list[str], list[str]]:
    """Checks on a single variant row. Returns (errors, warnings)."""
    errors: list[str] = []
    warnings: list[str] = []
    label = variant.id

    if _is_negative(variant.price):
        errors.append(f"{label}: price must not be negative")
    if _is_negative(variant.cost_price):
        errors.append(f"{label}: cost_price must not be negative")
    if variant.stock < 0:
        errors.append(f"{label}: stock must not be negative")
    if not variant.is_base_unit and variant.stock != 0:
        errors.append(f"{label}: stock on non-base unit {variant.unit!r} (only the base unit holds stock)")

    if variant.price is not None and variant.cost_price is not None and variant.price < variant.cost_price:
        warnings.append(f"{label}: price below cost")
    if not variant.barcode:
        warnings.append(f"{label}: no barcode")

    return errors, warnings


def validate_variant_properties(properties: VariantProperties) -> tuple[list[str], list[str]]:
    """Checks on the whole variant table. Returns (errors, warnings)."""
    errors: list[str] = []
    warnings: list[str] = []

    base_units = [u for u in properties.units if u.is_base]
    if properties.units and len(base_units) != 1:
        errors.append(f"units: expected exactly one base unit (got {len(base_units)})")

    for v in properties.variants:
        v_errors, v_warnings = validate_variant(v)
        errors.extend(v_errors)
        warnings.extend(v_warnings)

    keys = Counter(v.key for v in properties.variants)
    for key, count in keys.items():
        if count > 1:
            errors.append(f"variants: {count} rows share the same attributes and unit ({key})")

    barcodes = Counter(v.barcode for v in properties.variants if v.barcode)
    for barcode, count in barcodes.items():
        if count > 1:
            errors.append(f"barcode: {barcode!r} used by {count} variants")

    codes = Counter(v.code for v in properties.variants if v.code)
    for code, count in codes.items():
        if count > 1:
            warnings.append(f"code: {code!r} generated for {count} variants")

    return errors, warnings
