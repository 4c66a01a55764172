"""Domain service: Product Reference Guard.

Carts and inventory records refer to products by ID only. Before such a
reference is written, the guard confirms the ID is well formed and that
the product exists *right now*. The check is a snapshot: a product removed
afterwards is not chased down.
"""

from __future__ import annotations

from shop.domain.exceptions import ValidationError
from shop.domain.model.value_objects import parse_id
from shop.domain.repository.product_repository import ProductRepository


class ProductReferenceGuard:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def require(self, product_id: str) -> str:
        """Return the normalized product ID, or raise ValidationError."""
        if product_id is None:
            raise ValidationError("Product ID is required")
        normalized = parse_id(product_id, "product ID")
        if self._product_repo.get_by_id(normalized) is None:
            raise ValidationError(f"Product with ID '{product_id}' does not exist")
        return normalized
