"""Shared test fixtures."""

import pytest

from pos_catalog.common import Session
from pos_catalog.models import Attribute, Product, Unit, Variant, VariantDefaults, VariantProperties
from pos_catalog.storage import LocalStore
from pos_catalog.variants import VariantExpansionEngine

FIXED_NOW = "2024-05-01T10:00:00Z"


@pytest.fixture
def code_map():
    """Small value-to-code map so tests do not depend on config/code_maps.yaml."""
    return {
        "đỏ": "RED",
        "red": "RED",
        "xanh": "BLUE",
        "blue": "BLUE",
        "lô": "LO",
        "piece": "PCS",
        "box": "BOX",
        "carton": "CTN",
    }


@pytest.fixture
def engine(code_map):
    """Engine with Color [Red, Blue] and units Piece (base) / Box (x12)."""
    e = VariantExpansionEngine(VariantDefaults(price=100, cost_price=60, stock=50), code_map=code_map)
    color = e.add_attribute("Color")
    e.add_attribute_value(color.id, "Red")
    e.add_attribute_value(color.id, "Blue")
    e.add_unit("Piece")
    e.add_unit("Box", conversion=12)
    return e


@pytest.fixture
def session():
    return Session(tenant_id="tenant-1", industry_id="fashion", user_id="u1", role="admin")


@pytest.fixture
def clock():
    """Clock returning a fixed ISO timestamp."""
    return lambda: FIXED_NOW


@pytest.fixture
def store(tmp_path):
    return LocalStore(tmp_path / "pos-store.json", store_key="test-store")


@pytest.fixture
def variant_properties():
    """Red shirt in Piece (base) and Box of 12."""
    return VariantProperties(
        units=[
            Unit(id="u1", name="Piece", conversion=1, is_base=True),
            Unit(id="u2", name="Box", conversion=12, price=1100),
        ],
        attributes=[Attribute(id="a1", name="Color", values=["Red"])],
        variants=[
            Variant(attributes={"Color": "Red"}, unit="Piece", conversion=1,
                    code="SHIRT-RED-PCS", barcode="8931234567890", cost_price=60, price=100, stock=25),
            Variant(attributes={"Color": "Red"}, unit="Box", conversion=12,
                    code="SHIRT-RED-BOX", barcode="", cost_price=60, price=1100, stock=0),
        ],
    )


@pytest.fixture
def minimal_product():
    """Product with only required fields."""
    return Product(id="", title="Basic Tee", code="TEE-001")


@pytest.fixture
def full_product(variant_properties):
    """Fully populated product with variants."""
    return Product(
        id="PROD-1",
        title="Áo thun Basic",
        code="SHIRT",
        brand="Nike",
        brand_id="brand-1",
        product_category_id="cat-1",
        product_type_id="type-1",
        brief="Cotton tee",
        content="<p>Cotton tee</p>",
        price=100,
        cost_price=60,
        image="https://cdn.example.com/shirt.jpg",
        other_images=["https://cdn.example.com/shirt-2.jpg"],
        variant_properties=variant_properties,
    )
