"""Domain service: Cart Merge.

Folds a batch of requested lines into a cart. It lives in the domain
layer because "one line per product, quantities accumulate" is a core
business rule that spans the Cart and Product aggregates.

The two-phase approach (validate-then-mutate) ensures a batch with one bad
line never leaves the cart half-merged.
"""

from __future__ import annotations

from dataclasses import dataclass

from shop.domain.model.cart import Cart
from shop.domain.model.value_objects import Quantity
from shop.domain.service.product_reference_guard import ProductReferenceGuard


@dataclass(frozen=True)
class CartLineRequest:
    """Input: a product and how many of it to add."""

    product_id: str
    quantity: int


class CartMergeService:

    def __init__(self, guard: ProductReferenceGuard) -> None:
        self._guard = guard

    def merge(self, cart: Cart, lines: list[CartLineRequest]) -> None:
        """Merge every requested line into ``cart``.

        Phase 1, validate: every product must exist and every quantity
                  must be positive.  Fails fast before any mutation.
        Phase 2, mutate: apply lines in input order, so repeated products
                  in one batch accumulate.
        """
        # Phase 1: resolve and validate everything
        resolved: list[tuple[str, Quantity]] = []
        for line in lines:
            product_id = self._guard.require(line.product_id)
            resolved.append((product_id, Quantity(line.quantity)))

        # Phase 2: mutate
        for product_id, quantity in resolved:
            cart.add_item(product_id, quantity)
