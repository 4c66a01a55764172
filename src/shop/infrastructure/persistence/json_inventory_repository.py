"""JSON-file-backed implementation of InventoryRepository."""

from __future__ import annotations

from pathlib import Path

from shop.domain.exceptions import ConflictError
from shop.domain.model.inventory import InventoryRecord
from shop.domain.repository.inventory_repository import InventoryRepository
from shop.infrastructure.persistence.json_collection import JsonCollection


class JsonInventoryRepository(InventoryRepository):

    def __init__(self, file_path: Path) -> None:
        self._collection = JsonCollection(file_path)

    # --- InventoryRepository interface ----------------------------------------

    def get_by_id(self, record_id: str) -> InventoryRecord | None:
        with self._collection.decoding():
            raw = self._collection.find(lambda r: r["id"] == record_id)
            return self._to_domain(raw) if raw is not None else None

    def get_by_product_id(self, product_id: str) -> InventoryRecord | None:
        with self._collection.decoding():
            raw = self._collection.find(lambda r: r["product_id"] == product_id)
            return self._to_domain(raw) if raw is not None else None

    def list_all(self) -> list[InventoryRecord]:
        with self._collection.decoding():
            return [self._to_domain(raw) for raw in self._collection.load()]

    def save(self, record: InventoryRecord) -> None:
        with self._collection.decoding(), self._collection.transaction() as records:
            # Unique index on product_id
            for raw in records:
                if raw["id"] != record.id and raw["product_id"] == record.product_id:
                    raise ConflictError(
                        f"Inventory record for product '{record.product_id}' already exists"
                    )

            for i, raw in enumerate(records):
                if raw["id"] == record.id:
                    records[i] = self._to_raw(record)
                    break
            else:
                records.append(self._to_raw(record))

    def delete(self, record_id: str) -> bool:
        with self._collection.decoding(), self._collection.transaction() as records:
            for i, raw in enumerate(records):
                if raw["id"] == record_id:
                    del records[i]
                    return True
        return False

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(record: InventoryRecord) -> dict:
        return {
            "id": record.id,
            "product_id": record.product_id,
            "quantity": record.quantity,
        }

    @staticmethod
    def _to_domain(raw: dict) -> InventoryRecord:
        return InventoryRecord(
            id=raw["id"],
            product_id=raw["product_id"],
            quantity=raw["quantity"],
        )
