"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from shop.application.cart_engine import CartEngine
from shop.application.inventory_ledger import InventoryLedger
from shop.application.product_catalog import ProductCatalog
from shop.domain.service.product_reference_guard import ProductReferenceGuard
from shop.infrastructure.config import Settings
from shop.infrastructure.persistence.json_cart_repository import JsonCartRepository
from shop.infrastructure.persistence.json_inventory_repository import (
    JsonInventoryRepository,
)
from shop.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from shop.realtime.broadcaster import ChangeBroadcaster
from shop.realtime.redis_channel import RedisChannel

logger = structlog.get_logger(__name__)


@dataclass
class Services:
    catalog: ProductCatalog
    product_guard: ProductReferenceGuard
    ledger: InventoryLedger
    carts: CartEngine
    broadcaster: ChangeBroadcaster

    def close(self) -> None:
        """Flush pending change deliveries and release the live channel."""
        self.broadcaster.close()


def build_services(settings: Settings) -> Services:
    product_repo = JsonProductRepository(settings.data_dir / "products.json")
    inventory_repo = JsonInventoryRepository(settings.data_dir / "inventory.json")
    cart_repo = JsonCartRepository(settings.data_dir / "carts.json")

    broadcaster = ChangeBroadcaster()
    if settings.realtime_enabled:
        broadcaster.attach(RedisChannel.from_url(settings.redis_url, settings.redis_channel))
    else:
        logger.debug("SHOP_REDIS_URL not set, inventory changes are not broadcast")

    return Services(
        catalog=ProductCatalog(product_repo),
        product_guard=ProductReferenceGuard(product_repo),
        ledger=InventoryLedger(inventory_repo, publisher=broadcaster),
        carts=CartEngine(cart_repo, product_repo),
        broadcaster=broadcaster,
    )
