"""Abstract repository for InventoryRecord aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shop.domain.model.inventory import InventoryRecord


class InventoryRepository(ABC):

    @abstractmethod
    def get_by_id(self, record_id: str) -> InventoryRecord | None:
        """Return an inventory record by its ID, or None."""

    @abstractmethod
    def get_by_product_id(self, product_id: str) -> InventoryRecord | None:
        """Return the inventory record for a product, or None."""

    @abstractmethod
    def list_all(self) -> list[InventoryRecord]:
        """Return every inventory record."""

    @abstractmethod
    def save(self, record: InventoryRecord) -> None:
        """Persist a new or updated inventory record.

        Raises ConflictError if a different record already tracks the product.
        """

    @abstractmethod
    def delete(self, record_id: str) -> bool:
        """Remove a record. Returns False if there was nothing to remove."""
