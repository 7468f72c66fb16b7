"""Tests for pos_catalog/migration/schema.py"""

import json
from unittest.mock import patch

import pytest

from pos_catalog.migration import (
    MigrationReport,
    is_current_record,
    migrate_records,
    migrate_store,
    parse_product_record,
    upgrade,
)
from pos_catalog.migration.schema import legacy_id
from pos_catalog.models import LegacyProduct, Product
from pos_catalog.storage import product_to_record

NOW = "2024-05-01T10:00:00Z"


@pytest.fixture
def legacy_record():
    return {
        "id": "P1",
        "name": "Áo thun",
        "stock": 12,
        "barcode": "8931234567890",
        "description": "Cotton tee",
        "price": "150000",
        "type": "product",
    }


@pytest.fixture
def current_record(full_product):
    full_product.created_at = "2023-01-01T00:00:00Z"
    full_product.updated_at = "2023-01-01T00:00:00Z"
    return product_to_record(full_product)


class TestIsCurrentRecord:
    def test_current(self, current_record):
        assert is_current_record(current_record)

    def test_legacy(self, legacy_record):
        assert not is_current_record(legacy_record)

    def test_zero_quantity_still_current(self, current_record):
        current_record["quantity"] = 0
        assert is_current_record(current_record)

    def test_missing_created_at(self, current_record):
        current_record["created_at"] = ""
        assert not is_current_record(current_record)

    def test_parse(self, current_record, legacy_record):
        assert isinstance(parse_product_record(current_record), Product)
        parsed = parse_product_record(legacy_record)
        assert isinstance(parsed, LegacyProduct)
        assert parsed.record == legacy_record


class TestUpgrade:
    def test_maps_legacy_keys(self, legacy_record):
        product = upgrade(LegacyProduct(legacy_record), NOW)

        assert product.id == "P1"
        assert product.title == "Áo thun"
        assert product.code == "8931234567890"
        assert product.quantity == 12
        assert product.brief == "Cotton tee"
        assert product.content == "Cotton tee"
        assert product.price == 150000.0
        assert product.status == 1
        assert product.created_at == product.updated_at == NOW

    def test_renames_type(self, legacy_record):
        product = upgrade(LegacyProduct(legacy_record), NOW)
        assert product.extra == {"productType": "product"}

    def test_current_keys_win(self, legacy_record):
        legacy_record.update({"_id": "P2", "title": "Polo", "quantity": 3, "code": "POLO"})
        product = upgrade(LegacyProduct(legacy_record), NOW)
        assert (product.id, product.title, product.quantity, product.code) == ("P2", "Polo", 3, "POLO")

    def test_code_falls_back_to_id(self):
        product = upgrade(LegacyProduct({"id": "P3", "name": "Mug"}), NOW)
        assert product.code == "P3"

    def test_keeps_existing_timestamps(self, legacy_record):
        legacy_record["created_at"] = "2022-02-02T00:00:00Z"
        product = upgrade(LegacyProduct(legacy_record), NOW)
        assert product.created_at == "2022-02-02T00:00:00Z"
        assert product.updated_at == NOW

    def test_missing_id_is_deterministic(self):
        record = {"name": "Mug", "stock": 1}
        a = upgrade(LegacyProduct(dict(record)), NOW)
        b = upgrade(LegacyProduct(dict(record)), NOW)
        assert a.id == b.id == legacy_id(record)
        assert a.id.startswith("PROD-")

    @pytest.mark.parametrize("record", [
        {},
        {"price": "abc", "stock": "many", "status": None},
        {"name": None, "id": None, "variant_properties": "oops"},
        {"cost_price": [1], "waiting_quantity": {}},
    ])
    def test_never_raises(self, record):
        product = upgrade(LegacyProduct(record), NOW)
        assert product.id
        assert product.quantity == 0
        assert product.created_at == NOW

    def test_unreadable_variant_block_kept_raw(self):
        block = {"units": [{"id": "u1", "name": "Piece", "conversion": "abc"}]}
        product = upgrade(LegacyProduct({"id": "P4", "variant_properties": block}), NOW)
        assert product.variant_properties is None
        assert product.extra["variant_properties_raw"] == block

    def test_overflowing_numbers_fall_back(self):
        record = json.loads('{"id": "P5", "name": "Ao", "stock": 1e400, "price": 1e400, "cost_price": -1e400}')
        product = upgrade(LegacyProduct(record), NOW)
        assert product.quantity == 0
        assert product.price == 0
        assert product.cost_price is None

    def test_overflowing_variant_stock_kept_raw(self):
        record = json.loads(
            '{"id": "P6", "name": "Ao", "variant_properties":'
            ' {"variants": [{"attributes": {"Color": "Red"}, "stock": 1e400}]}}'
        )
        product = upgrade(LegacyProduct(record), NOW)
        assert product.variant_properties is None
        assert product.extra["variant_properties_raw"] == record["variant_properties"]

    def test_variant_block_parsed(self, current_record):
        record = dict(current_record)
        record.pop("created_at")
        product = upgrade(LegacyProduct(record), NOW)
        assert [v.id for v in product.variant_properties.variants] == ["Color=Red@Piece", "Color=Red@Box"]


class TestMigrateRecords:
    def test_mixed(self, current_record, legacy_record):
        records, report = migrate_records([current_record, legacy_record], NOW)

        assert records[0] is current_record
        assert records[1]["_id"] == "P1"
        assert records[1]["name"] == "Áo thun"
        assert is_current_record(records[1])
        assert (report.migrated_count, report.skipped_count) == (1, 1)

    def test_overflowing_record_does_not_stop_batch(self, legacy_record):
        bad = json.loads('{"id": "P7", "name": "Quan", "stock": 1e400}')
        records, report = migrate_records([legacy_record, bad], NOW)

        assert [r["_id"] for r in records] == ["P1", "P7"]
        assert records[1]["quantity"] == 0
        assert report.migrated_count == 2

    def test_idempotent(self, legacy_record):
        once, _ = migrate_records([legacy_record], NOW)
        twice, report = migrate_records(once, "2030-01-01T00:00:00Z")
        assert twice == once
        assert report.migrated_count == 0

    def test_report_message(self):
        report = MigrationReport(migrated_count=2, skipped_count=3)
        assert report.message == "Migration complete! Migrated 2 products, skipped 3 already migrated."


class TestMigrateStore:
    def test_writes_upgraded_records(self, store, legacy_record):
        store.save_products([legacy_record])
        report = migrate_store(store, NOW)

        assert report.migrated_count == 1
        assert store.get_products()[0]["_id"] == "P1"

    def test_no_write_when_all_current(self, store, current_record):
        store.save_products([current_record])
        with patch.object(store, "save_products") as mock_save:
            report = migrate_store(store, NOW)

        assert report.skipped_count == 1
        mock_save.assert_not_called()

    def test_empty_store(self, store):
        report = migrate_store(store, NOW)
        assert (report.migrated_count, report.skipped_count) == (0, 0)
        assert not store.path.exists()
