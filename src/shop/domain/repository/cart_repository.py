"""Abstract repository for Cart aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shop.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def get_by_user_id(self, user_id: str) -> Cart | None:
        """Return the cart owned by a user, or None."""

    @abstractmethod
    def list_all(self) -> list[Cart]:
        """Return every cart."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist a new or updated cart.

        Raises ConflictError if a different cart already belongs to the user.
        """
