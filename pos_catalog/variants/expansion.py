"""
Variant Expansion

Pure functions that derive variant rows from attribute combinations and
units. They never mutate their inputs.
"""

import itertools
from typing import Dict, List, Optional, Sequence

from ..models import Attribute, Unit, Variant, combination_key, variant_key


def attribute_combinations(attributes: Sequence[Attribute]) -> List[Dict[str, str]]:
    """
    Cartesian product of attribute values, in definition order.

    Attributes without a name or without values are not dimensions yet and
    are skipped. With no dimensions the result is a single empty combination.

    Example:
        Color: [Red, Blue], Size: [S, M]
        -> [{Color: Red, Size: S}, {Color: Red, Size: M}, {Color: Blue, Size: S}, {Color: Blue, Size: M}]
    """
    dimensions = [(a.name, a.values) for a in attributes if a.name and a.values]
    if not dimensions:
        return [{}]

    names = [name for name, _ in dimensions]
    return [
        dict(zip(names, values))
        for values in itertools.product(*(values for _, values in dimensions))
    ]


def expand_across_units(
    combination: Dict[str, str],
    units: Sequence[Unit],
    price: float,
    cost_price: float,
    stock: int,
) -> List[Variant]:
    """
    One variant per unit for a single attribute combination.

    The base unit gets the stock and price. Other units get stock 0 and
    their own configured price, falling back to `price`. Without units a
    single unit-less row is produced.
    """
    if not units:
        return [Variant(
            attributes=dict(combination),
            unit="",
            conversion=1,
            cost_price=cost_price,
            price=price,
            stock=stock,
        )]

    rows = []
    for unit in units:
        rows.append(Variant(
            attributes=dict(combination),
            unit=unit.name,
            conversion=1 if unit.is_base else unit.conversion,
            cost_price=cost_price,
            price=price if unit.is_base else (unit.price or price),
            stock=stock if unit.is_base else 0,
        ))
    return rows


def distinct_combinations(variants: Sequence[Variant], exclude: Optional[str] = None) -> List[Dict[str, str]]:
    """
    Distinct attribute combinations present in `variants`, first-seen order.

    Args:
        variants: Current variant rows
        exclude: Attribute name to drop before comparing
    """
    seen = set()
    combinations = []
    for v in variants:
        combination = {name: value for name, value in v.attributes.items() if name != exclude}
        key = combination_key(combination)
        if key not in seen:
            seen.add(key)
            combinations.append(combination)
    return combinations


def first_variant_per_combination(variants: Sequence[Variant]) -> List[Variant]:
    """
    The first row of every attribute combination, in list order.

    When several rows share a combination the earliest one wins; no other
    tie-break is applied.
    """
    seen = set()
    representatives = []
    for v in variants:
        key = combination_key(v.attributes)
        if key not in seen:
            seen.add(key)
            representatives.append(v)
    return representatives


def regenerate_for_units(variants: Sequence[Variant], units: Sequence[Unit]) -> List[Variant]:
    """
    Rebuild the variant list after the unit set changed.

    Every combination is crossed with the new units. Price, cost and stock
    come from the combination's first prior row. Barcodes are kept for rows
    whose content key (combination + unit) existed before; a barcode on a
    row without a unit moves to the base unit row.
    """
    barcodes = {v.key: v.barcode for v in variants if v.barcode}

    regenerated = []
    for rep in first_variant_per_combination(variants):
        for row in expand_across_units(rep.attributes, units, rep.price, rep.cost_price, rep.stock):
            row.barcode = barcodes.get(row.key, "")
            if not row.barcode and row.is_base_unit:
                row.barcode = barcodes.get(variant_key(rep.attributes, ""), "")
            regenerated.append(row)
    return regenerated
