"""Cart aggregate.

The Cart is an aggregate root that owns its line items. Each user has at
most one cart, and a cart holds at most one line per product.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from shop.domain.exceptions import ValidationError
from shop.domain.model.value_objects import Quantity, new_id


@dataclass
class CartLine:
    """A desired quantity of one product."""

    product_id: str
    quantity: int

    def add(self, quantity: Quantity) -> None:
        self.quantity += quantity.value


@dataclass
class Cart:
    """Aggregate root for shopping carts.

    ``Cart.empty_for()`` is the factory for new carts; ``__init__`` is used
    by repositories to reconstitute stored ones.
    """

    id: str
    user_id: str
    items: list[CartLine] = field(default_factory=list)

    @staticmethod
    def empty_for(user_id: str) -> Cart:
        if not user_id or not user_id.strip():
            raise ValidationError("User ID is required")
        return Cart(id=new_id(), user_id=user_id.strip())

    def add_item(self, product_id: str, quantity: Quantity) -> None:
        """Accumulate onto the existing line for ``product_id`` or append one."""
        line = self.find_line(product_id)
        if line is not None:
            line.add(quantity)
        else:
            self.items.append(CartLine(product_id=product_id, quantity=quantity.value))

    def find_line(self, product_id: str) -> CartLine | None:
        for line in self.items:
            if line.product_id == product_id:
                return line
        return None

    @property
    def total_quantity(self) -> int:
        return sum(line.quantity for line in self.items)
