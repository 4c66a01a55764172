"""InventoryRecord aggregate: tracks the stock level of one product.

Each product has at most one InventoryRecord. The record refers to its
product by ID only; the product's existence is checked when the record is
created and never re-validated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass

from shop.domain.exceptions import ValidationError
from shop.domain.model.value_objects import new_id


def _check_integer(value: int, label: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{label} must be an integer, got {type(value).__name__}")


@dataclass
class InventoryRecord:
    """Aggregate root for stock tracking.

    Invariants:
    - ``quantity`` is an integer and never negative

    Every mutator validates before assigning, so a rejected change leaves
    the record exactly as it was.
    """

    id: str
    product_id: str
    quantity: int

    @staticmethod
    def create(product_id: str, quantity: int) -> InventoryRecord:
        record = InventoryRecord(id=new_id(), product_id=product_id, quantity=0)
        record.set_quantity(quantity)
        return record

    def set_quantity(self, quantity: int | None) -> None:
        """Replace the stock level. ``None`` leaves it unchanged."""
        if quantity is None:
            return
        _check_integer(quantity, "Quantity")
        if quantity < 0:
            raise ValidationError(f"Quantity cannot be negative, got {quantity}")
        self.quantity = quantity

    def adjust(self, delta: int | None) -> None:
        """Add ``delta`` (possibly negative) to the stock level."""
        if delta is None:
            return
        _check_integer(delta, "Delta")
        result = self.quantity + delta
        if result < 0:
            raise ValidationError(
                f"Insufficient stock for product '{self.product_id}' "
                f"(have {self.quantity}, adjustment {delta})"
            )
        self.quantity = result

    def reset(self) -> None:
        self.quantity = 0
