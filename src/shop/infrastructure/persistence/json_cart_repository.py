"""JSON-file-backed implementation of CartRepository."""

from __future__ import annotations

from pathlib import Path

from shop.domain.exceptions import ConflictError
from shop.domain.model.cart import Cart, CartLine
from shop.domain.repository.cart_repository import CartRepository
from shop.infrastructure.persistence.json_collection import JsonCollection


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._collection = JsonCollection(file_path)

    # --- CartRepository interface ---------------------------------------------

    def get_by_user_id(self, user_id: str) -> Cart | None:
        with self._collection.decoding():
            raw = self._collection.find(lambda r: r["user_id"] == user_id)
            return self._to_domain(raw) if raw is not None else None

    def list_all(self) -> list[Cart]:
        with self._collection.decoding():
            return [self._to_domain(raw) for raw in self._collection.load()]

    def save(self, cart: Cart) -> None:
        with self._collection.decoding(), self._collection.transaction() as records:
            # Unique index on user_id
            for raw in records:
                if raw["id"] != cart.id and raw["user_id"] == cart.user_id:
                    raise ConflictError(f"Cart for user '{cart.user_id}' already exists")

            for i, raw in enumerate(records):
                if raw["id"] == cart.id:
                    records[i] = self._to_raw(cart)
                    break
            else:
                records.append(self._to_raw(cart))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(cart: Cart) -> dict:
        return {
            "id": cart.id,
            "user_id": cart.user_id,
            "items": [
                {"product_id": line.product_id, "quantity": line.quantity}
                for line in cart.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Cart:
        return Cart(
            id=raw["id"],
            user_id=raw["user_id"],
            items=[
                CartLine(product_id=i["product_id"], quantity=i["quantity"])
                for i in raw["items"]
            ],
        )
