"""Application service: Cart Engine.

One cart per user, created lazily. Merges are serialized per user and
all-or-nothing: a batch is validated in full before the cart is saved.
The ``user_id`` is taken as-is from the caller's authenticated principal.
"""

from __future__ import annotations

import structlog

from shop.application.dto import CartDTO, CartLineDTO
from shop.application.locking import KeyedLock
from shop.application.store_errors import reporting_store_failures
from shop.domain.exceptions import EntityNotFoundError, ValidationError
from shop.domain.model.cart import Cart
from shop.domain.repository.cart_repository import CartRepository
from shop.domain.repository.product_repository import ProductRepository
from shop.domain.service.cart_merge_service import CartLineRequest, CartMergeService
from shop.domain.service.product_reference_guard import ProductReferenceGuard

logger = structlog.get_logger(__name__)


class CartEngine:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo
        self._merge_service = CartMergeService(ProductReferenceGuard(product_repo))
        self._user_locks = KeyedLock()

    def get_all(self) -> list[Cart]:
        with reporting_store_failures("cart.list"):
            return self._cart_repo.list_all()

    def get_or_create(self, user_id: str) -> Cart:
        """Return the user's cart, creating an empty one on first access."""
        user_id = self._require_user(user_id)
        with self._user_locks.hold(user_id):
            with reporting_store_failures("cart.get_or_create", user_id=user_id):
                cart = self._cart_repo.get_by_user_id(user_id)
                if cart is not None:
                    return cart
                cart = Cart.empty_for(user_id)
                self._cart_repo.save(cart)

        logger.info("Cart created", cart_id=cart.id, user_id=user_id)
        return cart

    def merge(self, user_id: str, lines: list[CartLineRequest]) -> Cart:
        """Fold ``lines`` into the user's existing cart.

        Raises EntityNotFoundError if the user has no cart yet; callers are
        expected to ``get_or_create`` first.
        """
        user_id = self._require_user(user_id)
        with self._user_locks.hold(user_id):
            with reporting_store_failures("cart.merge", user_id=user_id):
                cart = self._cart_repo.get_by_user_id(user_id)
                if cart is None:
                    raise EntityNotFoundError(f"Cart for user '{user_id}' not found")
                self._merge_service.merge(cart, lines)
                self._cart_repo.save(cart)

        logger.info(
            "Cart updated",
            cart_id=cart.id,
            user_id=user_id,
            line_count=len(cart.items),
        )
        return cart

    def describe(self, cart: Cart) -> CartDTO:
        """Build a display DTO, resolving product names where still possible."""
        items = []
        for line in cart.items:
            with reporting_store_failures("cart.describe", cart_id=cart.id):
                product = self._product_repo.get_by_id(line.product_id)
            items.append(
                CartLineDTO(
                    product_id=line.product_id,
                    product_name=product.name if product is not None else "(removed)",
                    quantity=line.quantity,
                )
            )
        return CartDTO(
            id=cart.id,
            user_id=cart.user_id,
            items=items,
            total_quantity=cart.total_quantity,
        )

    @staticmethod
    def _require_user(user_id: str) -> str:
        if not isinstance(user_id, str) or not user_id.strip():
            raise ValidationError("User ID is required")
        return user_id.strip()
