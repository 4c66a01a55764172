"""Application service: Product Catalog.

Owns product identity and existence. Name uniqueness is checked here
before writing and enforced again by the repository, so the rule holds
even against a store without unique indexes.
"""

from __future__ import annotations

import structlog

from shop.application.dto import ProductPatch, ProductSpec
from shop.application.locking import KeyedLock
from shop.application.store_errors import reporting_store_failures
from shop.domain.exceptions import ConflictError, EntityNotFoundError
from shop.domain.model.product import Product
from shop.domain.model.value_objects import Money, parse_id
from shop.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class ProductCatalog:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo
        self._product_locks = KeyedLock()

    def list_all(self) -> list[Product]:
        with reporting_store_failures("product.list"):
            return self._product_repo.list_all()

    def find_product(self, product_id: str) -> Product | None:
        """Catalog boundary for other components: the product, or None."""
        with reporting_store_failures("product.find", product_id=product_id):
            return self._product_repo.get_by_id(parse_id(product_id, "product ID"))

    def get(self, product_id: str) -> Product:
        product = self.find_product(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product

    def create(self, spec: ProductSpec) -> Product:
        """Add a new product to the catalog."""
        product = Product.create(
            name=spec.name,
            price=Money.of(spec.price),
            description=spec.description,
        )
        with reporting_store_failures("product.create", name=product.name):
            self._ensure_name_free(product.name, product.id)
            self._product_repo.save(product)
        logger.info("Product created", product_id=product.id, name=product.name)
        return product

    def update(self, product_id: str, patch: ProductPatch) -> Product:
        """Change the fields present in ``patch``; others keep their value."""
        product_id = parse_id(product_id, "product ID")
        with self._product_locks.hold(product_id):
            product = self.get(product_id)
            if patch.name is not None:
                product.rename(patch.name)
            if patch.price is not None:
                product.update_price(Money.of(patch.price))
            if patch.description is not None:
                product.describe(patch.description or None)

            with reporting_store_failures("product.update", product_id=product.id):
                self._ensure_name_free(product.name, product.id)
                self._product_repo.save(product)
        logger.info("Product updated", product_id=product.id)
        return product

    def remove(self, product_id: str) -> Product:
        product_id = parse_id(product_id, "product ID")
        with self._product_locks.hold(product_id):
            product = self.get(product_id)
            with reporting_store_failures("product.remove", product_id=product_id):
                removed = self._product_repo.delete(product_id)
        if not removed:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        logger.info("Product removed", product_id=product.id)
        return product

    def _ensure_name_free(self, name: str, product_id: str) -> None:
        holder = self._product_repo.get_by_name(name)
        if holder is not None and holder.id != product_id:
            raise ConflictError(f"Product with name '{name}' already exists")
