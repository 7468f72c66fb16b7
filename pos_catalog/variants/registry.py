"""
Attribute and Unit Registry

Holds the attributes (Color, Size...) and units (Piece, Box...) defined on
the product being edited. Enforces the unit rules:
- the first unit added becomes the base unit
- the base unit always has conversion 1
- deleting the base unit promotes the first remaining unit
- the only remaining base unit cannot be deleted
"""

import logging
import uuid
from typing import List, Optional

from ..common.errors import ValidationError
from ..models import Attribute, Unit

logger = logging.getLogger(__name__)


def new_id() -> str:
    return uuid.uuid4().hex


class OptionRegistry:
    """
    Attribute and unit definitions of one product.

    Usage:
        registry = OptionRegistry()
        color = registry.add_attribute("Color")
        registry.add_value(color.id, "Red")
        piece = registry.add_unit("Piece")              # base unit
        box = registry.add_unit("Box", conversion=12)
    """

    def __init__(self, attributes: Optional[List[Attribute]] = None, units: Optional[List[Unit]] = None):
        self.attributes: List[Attribute] = list(attributes or [])
        self.units: List[Unit] = list(units or [])

    # ── Attributes ───────────────────────────────────────────────────────

    def get_attribute(self, attribute_id: str) -> Attribute:
        for attr in self.attributes:
            if attr.id == attribute_id:
                return attr
        raise KeyError(f"Unknown attribute: {attribute_id}")

    def find_attribute_by_name(self, name: str) -> Optional[Attribute]:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None

    def _check_name_free(self, name: str, attribute_id: Optional[str] = None) -> None:
        existing = self.find_attribute_by_name(name)
        if existing is not None and existing.id != attribute_id:
            raise ValidationError(f"attribute '{name}' already exists")

    def add_attribute(self, name: str = "", is_custom: bool = False) -> Attribute:
        """Add an attribute. The name may be chosen later, but must be unique once set."""
        name = name.strip()
        if name:
            self._check_name_free(name)
        attr = Attribute(id=new_id(), name=name, is_custom=is_custom)
        self.attributes.append(attr)
        return attr

    def rename_attribute(self, attribute_id: str, name: str, is_custom: Optional[bool] = None) -> str:
        """
        Set an attribute's name.

        Returns:
            The previous name ("" if none was set)
        """
        attr = self.get_attribute(attribute_id)
        name = name.strip()
        if not name:
            raise ValidationError("attribute name required")
        self._check_name_free(name, attribute_id)

        old_name = attr.name
        attr.name = name
        if is_custom is not None:
            attr.is_custom = is_custom
        return old_name

    def add_value(self, attribute_id: str, value: str) -> Attribute:
        """Append a value to an attribute's value list."""
        attr = self.get_attribute(attribute_id)
        if not attr.name:
            raise ValidationError("attribute name required")
        if value in attr.values:
            raise ValidationError(f"value '{value}' already exists for {attr.name}")
        attr.values.append(value)
        return attr

    def remove_value(self, attribute_id: str, value: str) -> Attribute:
        attr = self.get_attribute(attribute_id)
        attr.values = [v for v in attr.values if v != value]
        return attr

    def remove_attribute(self, attribute_id: str) -> Attribute:
        attr = self.get_attribute(attribute_id)
        self.attributes = [a for a in self.attributes if a.id != attribute_id]
        return attr

    # ── Units ────────────────────────────────────────────────────────────

    @property
    def base_unit(self) -> Optional[Unit]:
        return next((u for u in self.units if u.is_base), None)

    def get_unit(self, unit_id: str) -> Unit:
        for unit in self.units:
            if unit.id == unit_id:
                return unit
        raise KeyError(f"Unknown unit: {unit_id}")

    def _check_unit(self, unit: Unit) -> None:
        if not unit.name or not unit.name.strip():
            raise ValidationError("unit name required")
        for other in self.units:
            if other.id != unit.id and other.name == unit.name:
                raise ValidationError(f"unit '{unit.name}' already exists")
        if not unit.is_base and (unit.conversion is None or unit.conversion <= 0):
            raise ValidationError(f"conversion must be greater than 0 (got {unit.conversion})")
        if not unit.is_base and unit.conversion == 1:
            raise ValidationError(f"unit '{unit.name}': conversion 1 is reserved for the base unit")

    def add_or_update_unit(self, unit: Unit) -> Unit:
        """
        Insert a new unit or replace the unit with the same id.

        The first unit becomes the base unit. A base unit's conversion is
        forced to 1, and only one unit is ever base.
        """
        unit.name = (unit.name or "").strip()

        existing = next((u for u in self.units if u.id == unit.id), None)
        if existing is None:
            if not self.units:
                unit.is_base = True
            elif unit.is_base:
                # New units join as secondary; the base is moved explicitly
                unit.is_base = False
        else:
            unit.is_base = existing.is_base

        if unit.is_base:
            unit.conversion = 1

        self._check_unit(unit)

        if existing is None:
            self.units.append(unit)
        else:
            self.units = [unit if u.id == unit.id else u for u in self.units]
        return unit

    def add_unit(
        self,
        name: str,
        conversion: float = 1,
        price: Optional[float] = None,
        is_direct_sale: bool = True,
    ) -> Unit:
        return self.add_or_update_unit(
            Unit(id=new_id(), name=name, conversion=conversion, price=price, is_direct_sale=is_direct_sale)
        )

    def delete_unit(self, unit_id: str) -> Unit:
        """
        Delete a unit, promoting the first remaining unit when the base unit goes.

        Raises:
            ValidationError: If the unit is the only (base) unit
        """
        unit = self.get_unit(unit_id)
        remaining = [u for u in self.units if u.id != unit_id]

        if unit.is_base and not remaining:
            raise ValidationError("cannot delete the base unit without another unit to replace it")

        if unit.is_base:
            promoted = remaining[0]
            promoted.is_base = True
            promoted.conversion = 1
            logger.info("Base unit %s deleted, %s promoted to base", unit.name, promoted.name)

        self.units = remaining
        return unit
