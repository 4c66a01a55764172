"""Inventory change notifications.

A ChangeEvent describes one committed Ledger mutation. Events are
transient: they are handed to a ChangePublisher after the write and are
never stored.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from shop.domain.model.inventory import InventoryRecord

INVENTORY_UPDATE = "inventory_update"


class ChangeKind(Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


@dataclass(frozen=True)
class ChangeEvent:
    kind: ChangeKind
    record_id: str
    product_id: str
    quantity: int | None = None

    @staticmethod
    def created(record: InventoryRecord) -> ChangeEvent:
        return ChangeEvent(ChangeKind.CREATED, record.id, record.product_id, record.quantity)

    @staticmethod
    def updated(record: InventoryRecord) -> ChangeEvent:
        return ChangeEvent(ChangeKind.UPDATED, record.id, record.product_id, record.quantity)

    @staticmethod
    def deleted(record: InventoryRecord) -> ChangeEvent:
        return ChangeEvent(ChangeKind.DELETED, record.id, record.product_id)

    @property
    def is_deletion(self) -> bool:
        return self.kind is ChangeKind.DELETED

    def to_payload(self) -> dict:
        """Wire shape: the record snapshot, or a deletion marker."""
        if self.is_deletion:
            return {
                "change": self.kind.value,
                "id": self.record_id,
                "product_id": self.product_id,
                "deleted": True,
            }
        return {
            "change": self.kind.value,
            "id": self.record_id,
            "product_id": self.product_id,
            "quantity": self.quantity,
        }


class ChangePublisher(ABC):
    """Anything the Ledger can hand committed changes to."""

    @abstractmethod
    def publish(self, event: ChangeEvent) -> None:
        """Accept an event for delivery. Must not block or raise."""
