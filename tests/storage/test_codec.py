"""Tests for pos_catalog/storage/codec.py"""

from pos_catalog.models import Unit, Variant
from pos_catalog.storage.codec import (
    product_from_record,
    product_to_record,
    unit_from_dict,
    unit_to_dict,
    variant_from_dict,
    variant_properties_to_dict,
    variant_to_dict,
)


class TestVariantBlock:
    def test_unit_uses_camel_case(self):
        data = unit_to_dict(Unit(id="u2", name="Box", conversion=12, price=1100, is_direct_sale=False))
        assert data == {
            "id": "u2",
            "name": "Box",
            "conversion": 12,
            "isBase": False,
            "isDirectSale": False,
            "price": 1100,
        }

    def test_unit_without_price_omits_key(self):
        assert "price" not in unit_to_dict(Unit(id="u1", name="Piece", is_base=True))

    def test_unit_from_dict_defaults(self):
        unit = unit_from_dict({"id": "u1", "name": "Piece"})
        assert (unit.conversion, unit.is_base, unit.price, unit.is_direct_sale) == (1, False, None, True)

    def test_variant_dict(self):
        v = Variant(attributes={"Color": "Red"}, unit="Piece", code="C", barcode="B", cost_price=6, price=10, stock=3)
        assert variant_to_dict(v) == {
            "id": "Color=Red@Piece",
            "attributes": {"Color": "Red"},
            "unit": "Piece",
            "conversion": 1,
            "code": "C",
            "barcode": "B",
            "costPrice": 6,
            "price": 10,
            "stock": 3,
        }

    def test_variant_from_web_app_record(self):
        v = variant_from_dict({
            "id": "1712345678901-0.123",
            "attributes": {"Size": "M"},
            "unit": "Hộp",
            "conversion": "12",
            "costPrice": "",
            "price": "150000",
            "stock": None,
        })
        assert v.id == "Size=M@Hộp"
        assert (v.conversion, v.cost_price, v.price, v.stock) == (12.0, 0, 150000.0, 0)

    def test_variant_properties_dict(self, variant_properties):
        data = variant_properties_to_dict(variant_properties)
        assert [u["isBase"] for u in data["units"]] == [True, False]
        assert data["attributes"][0] == {"id": "a1", "name": "Color", "isCustom": False, "values": ["Red"]}
        assert [v["id"] for v in data["variants"]] == ["Color=Red@Piece", "Color=Red@Box"]


class TestProductRecord:
    def test_legacy_aliases(self, full_product):
        record = product_to_record(full_product)
        assert record["_id"] == record["id"] == "PROD-1"
        assert record["name"] == "Áo thun Basic"
        assert record["stock"] == full_product.quantity
        assert record["barcode"] == "SHIRT"
        assert record["description"] == "Cotton tee"

    def test_extra_fields_kept(self, full_product):
        full_product.extra = {"productType": "service", "sessionCount": 5}
        record = product_to_record(full_product)
        assert record["productType"] == "service"

        restored = product_from_record(record)
        assert restored.extra == {"productType": "service", "sessionCount": 5}

    def test_product_round_trip(self, full_product):
        restored = product_from_record(product_to_record(full_product))

        assert restored.id == full_product.id
        assert restored.title == full_product.title
        assert restored.other_images == full_product.other_images
        assert [v.id for v in restored.variant_properties.variants] == [
            v.id for v in full_product.variant_properties.variants
        ]
        assert restored.variant_properties.units[1].price == 1100

    def test_without_variants(self, minimal_product):
        minimal_product.id = "PROD-2"
        record = product_to_record(minimal_product)
        assert record["variant_properties"] is None
        assert product_from_record(record).variant_properties is None
