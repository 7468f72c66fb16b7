"""Tests for pos_catalog/models/product.py"""

from pos_catalog.models import (
    Product,
    Unit,
    Variant,
    VariantProperties,
    combination_key,
    format_variant_id,
    new_row_id,
    variant_key,
)


class TestIdentity:
    def test_combination_key_ignores_order(self):
        assert combination_key({"Size": "M", "Color": "Red"}) == combination_key({"Color": "Red", "Size": "M"})

    def test_variant_key(self):
        assert variant_key({"Size": "M", "Color": "Red"}, "Piece") == (
            (("Color", "Red"), ("Size", "M")),
            "Piece",
        )

    def test_format_variant_id(self):
        key = ((("Color", "Red"), ("Size", "M")), "Piece")
        assert format_variant_id(key) == "Color=Red|Size=M@Piece"

    def test_format_without_attributes_or_unit(self):
        assert format_variant_id(((), "")) == "@"

    def test_row_ids_never_repeat(self):
        ids = {new_row_id() for _ in range(100)}
        assert len(ids) == 100


class TestVariant:
    def test_id_from_content(self):
        v = Variant(attributes={"Size": "M", "Color": "Red"}, unit="Box", conversion=12)
        assert v.id == "Color=Red|Size=M@Box"

    def test_same_content_same_id_different_row(self):
        a = Variant(attributes={"Color": "Red"}, unit="Piece")
        b = Variant(attributes={"Color": "Red"}, unit="Piece")
        assert a.id == b.id
        assert a.row_id != b.row_id

    def test_is_base_unit(self):
        assert Variant(attributes={}, conversion=1).is_base_unit
        assert not Variant(attributes={}, conversion=12).is_base_unit

    def test_defaults(self):
        v = Variant(attributes={})
        assert (v.unit, v.code, v.barcode, v.price, v.cost_price, v.stock) == ("", "", "", 0, 0, 0)


class TestProduct:
    def test_defaults(self):
        p = Product(id="PROD-1", title="Tee")
        assert p.status == 1
        assert p.quantity == 0
        assert p.is_sold_out is False
        assert p.variant_properties is None
        assert p.extra == {}

    def test_mutable_defaults_not_shared(self):
        a = Product(id="1", title="A")
        b = Product(id="2", title="B")
        a.extra["x"] = 1
        assert b.extra == {}

        p1 = VariantProperties()
        p2 = VariantProperties()
        p1.units.append(Unit(id="u", name="Piece"))
        assert p2.units == []
