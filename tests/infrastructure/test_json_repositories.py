"""Tests for the JSON-file repositories, against a real temp directory."""

import json

import pytest
from structlog.testing import capture_logs

from shop.application.inventory_ledger import InventoryLedger
from shop.domain.exceptions import ConflictError, StoreUnavailableError
from shop.domain.model.cart import Cart
from shop.domain.model.inventory import InventoryRecord
from shop.domain.model.product import Product
from shop.domain.model.value_objects import Money, Quantity, new_id
from shop.infrastructure.persistence.json_cart_repository import JsonCartRepository
from shop.infrastructure.persistence.json_inventory_repository import JsonInventoryRepository
from shop.infrastructure.persistence.json_product_repository import JsonProductRepository


# ── Products ─────────────────────────────────────────────────────────────────


class TestJsonProductRepository:

    def test_creates_missing_file(self, tmp_path):
        path = tmp_path / "nested" / "products.json"
        JsonProductRepository(path)
        assert json.loads(path.read_text()) == []

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "products.json"
        product = Product.create("Oat Milk", Money.of("6.99"), "1L carton")
        JsonProductRepository(path).save(product)

        loaded = JsonProductRepository(path).get_by_id(product.id)

        assert loaded == product

    def test_stored_shape(self, tmp_path):
        path = tmp_path / "products.json"
        product = Product.create("Oat Milk", Money.of("6.99"))
        JsonProductRepository(path).save(product)

        assert json.loads(path.read_text()) == [{
            "id": product.id,
            "name": "Oat Milk",
            "price": "6.99",
            "description": None,
        }]

    def test_get_by_name_matches_exactly(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        product = Product.create("Oat Milk", Money.of("6.99"))
        repo.save(product)
        assert repo.get_by_name(" Oat Milk ").id == product.id
        assert repo.get_by_name("OAT milk") is None

    def test_duplicate_name_conflicts(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(Product.create("Oat Milk", Money.of("6.99")))
        with pytest.raises(ConflictError):
            repo.save(Product.create("Oat Milk", Money.of("1.00")))
        assert len(repo.list_all()) == 1

    def test_case_variant_names_are_distinct(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(Product.create("Widget", Money.of("1.00")))
        repo.save(Product.create("widget", Money.of("1.00")))
        assert {p.name for p in repo.list_all()} == {"Widget", "widget"}

    def test_unparseable_price_is_unavailable(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text(json.dumps([{"id": "p1", "name": "Oat Milk", "price": "abc"}]))
        repo = JsonProductRepository(path)
        with pytest.raises(StoreUnavailableError, match="Corrupt collection"):
            repo.get_by_id("p1")

    def test_update_in_place(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        product = Product.create("Oat Milk", Money.of("6.99"))
        repo.save(product)
        product.update_price(Money.of("7.25"))
        repo.save(product)
        assert len(repo.list_all()) == 1
        assert str(repo.get_by_id(product.id).price) == "$7.25"

    def test_delete(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        product = Product.create("Oat Milk", Money.of("6.99"))
        repo.save(product)
        assert repo.delete(product.id) is True
        assert repo.delete(product.id) is False
        assert repo.get_by_id(product.id) is None


# ── Inventory ────────────────────────────────────────────────────────────────


class TestJsonInventoryRepository:

    def test_save_and_lookup(self, tmp_path):
        repo = JsonInventoryRepository(tmp_path / "inventory.json")
        record = InventoryRecord.create(new_id(), 10)
        repo.save(record)
        assert repo.get_by_id(record.id) == record
        assert repo.get_by_product_id(record.product_id) == record

    def test_one_record_per_product(self, tmp_path):
        repo = JsonInventoryRepository(tmp_path / "inventory.json")
        product_id = new_id()
        original = InventoryRecord.create(product_id, 10)
        repo.save(original)

        with pytest.raises(ConflictError):
            repo.save(InventoryRecord.create(product_id, 99))

        assert repo.list_all() == [original]

    def test_delete(self, tmp_path):
        repo = JsonInventoryRepository(tmp_path / "inventory.json")
        record = InventoryRecord.create(new_id(), 10)
        repo.save(record)
        assert repo.delete(record.id) is True
        assert repo.list_all() == []

    def test_corrupt_file_is_unavailable(self, tmp_path):
        path = tmp_path / "inventory.json"
        path.write_text("{not json")
        repo = JsonInventoryRepository(path)
        with pytest.raises(StoreUnavailableError, match="Could not read"):
            repo.list_all()

    def test_invalid_utf8_file_is_unavailable(self, tmp_path):
        path = tmp_path / "inventory.json"
        path.write_bytes(b"[\xff\xfe]")
        repo = JsonInventoryRepository(path)
        with pytest.raises(StoreUnavailableError, match="Could not read"):
            repo.list_all()

    def test_document_missing_a_field_is_unavailable(self, tmp_path):
        path = tmp_path / "inventory.json"
        path.write_text(json.dumps([{"id": "r1", "product_id": "p1"}]))
        repo = JsonInventoryRepository(path)
        with pytest.raises(StoreUnavailableError, match="Corrupt collection"):
            repo.list_all()
        with pytest.raises(StoreUnavailableError, match="Corrupt collection"):
            repo.get_by_id("r1")

    def test_non_object_document_is_unavailable(self, tmp_path):
        path = tmp_path / "inventory.json"
        path.write_text(json.dumps(["r1"]))
        repo = JsonInventoryRepository(path)
        with pytest.raises(StoreUnavailableError, match="Corrupt collection"):
            repo.save(InventoryRecord.create(new_id(), 1))
        assert json.loads(path.read_text()) == ["r1"]

    def test_unreadable_store_is_logged_by_ledger(self, tmp_path):
        path = tmp_path / "inventory.json"
        path.write_bytes(b"[\xff\xfe]")
        ledger = InventoryLedger(JsonInventoryRepository(path))

        with capture_logs() as logs:
            with pytest.raises(StoreUnavailableError):
                ledger.list_all()

        assert logs[0]["event"] == "Store unavailable"
        assert logs[0]["operation"] == "inventory.list"

    def test_non_list_document_is_unavailable(self, tmp_path):
        path = tmp_path / "inventory.json"
        path.write_text('{"id": "x"}')
        repo = JsonInventoryRepository(path)
        with pytest.raises(StoreUnavailableError, match="expected a list"):
            repo.get_by_id("x")

    def test_failed_write_leaves_file_intact(self, tmp_path):
        path = tmp_path / "inventory.json"
        repo = JsonInventoryRepository(path)
        product_id = new_id()
        repo.save(InventoryRecord.create(product_id, 10))
        before = path.read_text()

        with pytest.raises(ConflictError):
            repo.save(InventoryRecord.create(product_id, 1))

        assert path.read_text() == before


# ── Carts ────────────────────────────────────────────────────────────────────


class TestJsonCartRepository:

    def test_save_and_reload_with_items(self, tmp_path):
        path = tmp_path / "carts.json"
        cart = Cart.empty_for("alice")
        cart.add_item("p1", Quantity(2))
        cart.add_item("p2", Quantity(1))
        JsonCartRepository(path).save(cart)

        loaded = JsonCartRepository(path).get_by_user_id("alice")

        assert loaded == cart

    def test_one_cart_per_user(self, tmp_path):
        repo = JsonCartRepository(tmp_path / "carts.json")
        repo.save(Cart.empty_for("alice"))
        with pytest.raises(ConflictError):
            repo.save(Cart.empty_for("alice"))

    def test_list_all(self, tmp_path):
        repo = JsonCartRepository(tmp_path / "carts.json")
        repo.save(Cart.empty_for("alice"))
        repo.save(Cart.empty_for("bob"))
        assert {c.user_id for c in repo.list_all()} == {"alice", "bob"}
