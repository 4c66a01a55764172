"""Application service: Inventory Ledger.

Owns the stock level of each product. Every mutation is a
read-modify-write on one record, serialized per record ID, and every
committed mutation is handed to the change publisher *after* the write.

Product existence is not checked here: callers run the product ID through
``ProductReferenceGuard`` before ``create``.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from shop.application.locking import KeyedLock
from shop.application.store_errors import reporting_store_failures
from shop.domain.exceptions import ConflictError, EntityNotFoundError
from shop.domain.model.events import ChangeEvent, ChangePublisher
from shop.domain.model.inventory import InventoryRecord
from shop.domain.model.value_objects import parse_id
from shop.domain.repository.inventory_repository import InventoryRepository

logger = structlog.get_logger(__name__)


class InventoryLedger:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        publisher: ChangePublisher | None = None,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._publisher = publisher
        self._record_locks = KeyedLock()
        self._product_locks = KeyedLock()

    def attach_publisher(self, publisher: ChangePublisher) -> None:
        """Wire the change publisher; replaces any previous one."""
        self._publisher = publisher

    # --- Queries --------------------------------------------------------------

    def list_all(self) -> list[InventoryRecord]:
        with reporting_store_failures("inventory.list"):
            return self._inventory_repo.list_all()

    def get(self, record_id: str) -> InventoryRecord:
        record_id = parse_id(record_id, "inventory ID")
        with reporting_store_failures("inventory.get", record_id=record_id):
            record = self._inventory_repo.get_by_id(record_id)
        if record is None:
            raise EntityNotFoundError(f"Inventory record '{record_id}' not found")
        return record

    # --- Commands -------------------------------------------------------------

    def create(self, product_id: str, quantity: int) -> InventoryRecord:
        """Start tracking stock for a product that has no record yet."""
        product_id = parse_id(product_id, "product ID")
        record = InventoryRecord.create(product_id, quantity)

        with self._product_locks.hold(product_id):
            with reporting_store_failures("inventory.create", product_id=product_id):
                if self._inventory_repo.get_by_product_id(product_id) is not None:
                    raise ConflictError(
                        f"Inventory record for product '{product_id}' already exists"
                    )
                self._inventory_repo.save(record)

        logger.info(
            "Inventory record created",
            record_id=record.id,
            product_id=product_id,
            quantity=record.quantity,
        )
        self._emit(ChangeEvent.created(record))
        return record

    def set_quantity(self, record_id: str, quantity: int | None = None) -> InventoryRecord:
        """Replace the absolute stock level."""
        return self._mutate(
            "inventory.set", record_id, lambda record: record.set_quantity(quantity)
        )

    def adjust_quantity(self, record_id: str, delta: int | None = None) -> InventoryRecord:
        """Add ``delta`` to the stock level; the result may not go below zero."""
        return self._mutate(
            "inventory.adjust", record_id, lambda record: record.adjust(delta)
        )

    def reset_quantity(self, record_id: str) -> InventoryRecord:
        return self._mutate("inventory.reset", record_id, InventoryRecord.reset)

    def remove(self, record_id: str) -> InventoryRecord:
        record_id = parse_id(record_id, "inventory ID")
        with self._record_locks.hold(record_id):
            with reporting_store_failures("inventory.remove", record_id=record_id):
                record = self._inventory_repo.get_by_id(record_id)
                if record is None or not self._inventory_repo.delete(record_id):
                    raise EntityNotFoundError(f"Inventory record '{record_id}' not found")

        logger.info("Inventory record removed", record_id=record_id, product_id=record.product_id)
        self._emit(ChangeEvent.deleted(record))
        return record

    # --- Internal helpers -----------------------------------------------------

    def _mutate(
        self,
        operation: str,
        record_id: str,
        change: Callable[[InventoryRecord], None],
    ) -> InventoryRecord:
        record_id = parse_id(record_id, "inventory ID")
        with self._record_locks.hold(record_id):
            with reporting_store_failures(operation, record_id=record_id):
                record = self._inventory_repo.get_by_id(record_id)
                if record is None:
                    raise EntityNotFoundError(f"Inventory record '{record_id}' not found")
                change(record)
                self._inventory_repo.save(record)

        logger.info(
            "Inventory quantity changed",
            operation=operation,
            record_id=record_id,
            quantity=record.quantity,
        )
        self._emit(ChangeEvent.updated(record))
        return record

    def _emit(self, event: ChangeEvent) -> None:
        if self._publisher is None:
            return
        self._publisher.publish(event)
