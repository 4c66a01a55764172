"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from shop.domain.exceptions import ConflictError
from shop.domain.model.product import Product
from shop.domain.model.value_objects import Money
from shop.domain.repository.product_repository import ProductRepository
from shop.infrastructure.persistence.json_collection import JsonCollection


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._collection = JsonCollection(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        with self._collection.decoding():
            raw = self._collection.find(lambda r: r["id"] == product_id)
            return self._to_domain(raw) if raw is not None else None

    def get_by_name(self, name: str) -> Product | None:
        wanted = name.strip()
        with self._collection.decoding():
            raw = self._collection.find(lambda r: r["name"] == wanted)
            return self._to_domain(raw) if raw is not None else None

    def list_all(self) -> list[Product]:
        with self._collection.decoding():
            return [self._to_domain(raw) for raw in self._collection.load()]

    def save(self, product: Product) -> None:
        with self._collection.decoding(), self._collection.transaction() as records:
            # Unique index on name
            for raw in records:
                if raw["id"] != product.id and product.has_name(raw["name"]):
                    raise ConflictError(f"Product with name '{product.name}' already exists")

            # Upsert: replace if exists, otherwise append
            for i, raw in enumerate(records):
                if raw["id"] == product.id:
                    records[i] = self._to_raw(product)
                    break
            else:
                records.append(self._to_raw(product))

    def delete(self, product_id: str) -> bool:
        with self._collection.decoding(), self._collection.transaction() as records:
            for i, raw in enumerate(records):
                if raw["id"] == product_id:
                    del records[i]
                    return True
        return False

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "price": str(product.price.amount),
            "description": product.description,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            price=Money(Decimal(raw["price"])),
            description=raw.get("description"),
        )
