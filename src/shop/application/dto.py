"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ProductSpec:
    """Input: a new catalog entry."""

    name: str
    price: str  # parsed into Money by the catalog, e.g. "6.99"
    description: str | None = None


@dataclass(frozen=True)
class ProductPatch:
    """Input: the fields of a product to change. ``None`` means untouched."""

    name: str | None = None
    price: str | None = None
    description: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.name is None and self.price is None and self.description is None


@dataclass(frozen=True)
class CartLineDTO:
    """Output: a single cart line as displayed to the user."""

    product_id: str
    product_name: str
    quantity: int


@dataclass(frozen=True)
class CartDTO:
    """Output: a cart with product names resolved for display."""

    id: str
    user_id: str
    items: list[CartLineDTO]
    total_quantity: int
