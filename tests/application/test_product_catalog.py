"""Integration tests for the ProductCatalog service.

Uses in-memory fake repositories, no file I/O.
"""

import pytest

from shop.application.dto import ProductPatch, ProductSpec
from shop.application.product_catalog import ProductCatalog
from shop.domain.exceptions import ConflictError, EntityNotFoundError, ValidationError
from shop.domain.model.value_objects import new_id
from tests.fakes import FakeProductRepository


def _setup() -> tuple[ProductCatalog, FakeProductRepository]:
    repo = FakeProductRepository()
    return ProductCatalog(repo), repo


class TestCreate:

    def test_creates_and_persists(self):
        catalog, repo = _setup()
        product = catalog.create(ProductSpec("Oat Milk", "6.99", "1L carton"))
        saved = repo.get_by_id(product.id)
        assert saved.name == "Oat Milk"
        assert str(saved.price) == "$6.99"
        assert saved.description == "1L carton"

    def test_duplicate_name_conflicts(self):
        catalog, _ = _setup()
        catalog.create(ProductSpec("Oat Milk", "6.99"))
        with pytest.raises(ConflictError, match="already exists"):
            catalog.create(ProductSpec("  Oat Milk ", "5.00"))

    def test_case_variant_names_are_distinct(self):
        catalog, repo = _setup()
        catalog.create(ProductSpec("Widget", "1.00"))
        catalog.create(ProductSpec("widget", "1.00"))
        assert {p.name for p in repo.list_all()} == {"Widget", "widget"}

    def test_invalid_price_rejected(self):
        catalog, repo = _setup()
        with pytest.raises(ValidationError):
            catalog.create(ProductSpec("Oat Milk", "-1"))
        assert repo.list_all() == []


class TestQueries:

    def test_get_returns_product(self):
        catalog, _ = _setup()
        created = catalog.create(ProductSpec("Oat Milk", "6.99"))
        assert catalog.get(created.id).name == "Oat Milk"

    def test_get_missing_is_not_found(self):
        catalog, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            catalog.get(new_id())

    def test_get_malformed_is_invalid(self):
        catalog, _ = _setup()
        with pytest.raises(ValidationError):
            catalog.get("nope")

    def test_find_product_returns_none_when_absent(self):
        catalog, _ = _setup()
        assert catalog.find_product(new_id()) is None

    def test_list_all(self):
        catalog, _ = _setup()
        catalog.create(ProductSpec("Oat Milk", "6.99"))
        catalog.create(ProductSpec("Rye Bread", "3.50"))
        assert {p.name for p in catalog.list_all()} == {"Oat Milk", "Rye Bread"}


class TestUpdate:

    def test_only_given_fields_change(self):
        catalog, _ = _setup()
        created = catalog.create(ProductSpec("Oat Milk", "6.99", "1L carton"))

        updated = catalog.update(created.id, ProductPatch(price="7.49"))

        assert updated.name == "Oat Milk"
        assert str(updated.price) == "$7.49"
        assert updated.description == "1L carton"

    def test_empty_description_clears_it(self):
        catalog, repo = _setup()
        created = catalog.create(ProductSpec("Oat Milk", "6.99", "1L carton"))
        catalog.update(created.id, ProductPatch(description=""))
        assert repo.get_by_id(created.id).description is None

    def test_rename_to_taken_name_conflicts(self):
        catalog, repo = _setup()
        catalog.create(ProductSpec("Oat Milk", "6.99"))
        bread = catalog.create(ProductSpec("Rye Bread", "3.50"))

        with pytest.raises(ConflictError):
            catalog.update(bread.id, ProductPatch(name=" Oat Milk"))

        assert repo.get_by_id(bread.id).name == "Rye Bread"

    def test_rename_to_own_name_with_other_case_allowed(self):
        catalog, _ = _setup()
        created = catalog.create(ProductSpec("Oat Milk", "6.99"))
        assert catalog.update(created.id, ProductPatch(name="OAT MILK")).name == "OAT MILK"

    def test_invalid_patch_not_persisted(self):
        catalog, repo = _setup()
        created = catalog.create(ProductSpec("Oat Milk", "6.99"))
        with pytest.raises(ValidationError):
            catalog.update(created.id, ProductPatch(price="1.999"))
        assert str(repo.get_by_id(created.id).price) == "$6.99"


class TestRemove:

    def test_removes_product(self):
        catalog, repo = _setup()
        created = catalog.create(ProductSpec("Oat Milk", "6.99"))
        removed = catalog.remove(created.id)
        assert removed.id == created.id
        assert repo.get_by_id(created.id) is None

    def test_remove_missing_is_not_found(self):
        catalog, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            catalog.remove(new_id())
