"""Product aggregate.

Products live independently of carts and inventory. They have their own
lifecycle: prices change, products are added and removed from the catalog.
Carts and inventory records only hold a product's ID.
"""

from __future__ import annotations

from dataclasses import dataclass

from shop.domain.exceptions import ValidationError
from shop.domain.model.value_objects import Money, new_id

MAX_NAME_LENGTH = 255
MAX_DESCRIPTION_LENGTH = 1000
MAX_PRICE_DECIMALS = 2


@dataclass
class Product:
    """A product in the catalog.

    Use ``Product.create()`` for new products; it enforces the field
    rules.  The ``__init__`` stays plain so repositories can reconstitute
    persisted products without re-validating.
    """

    id: str
    name: str
    price: Money
    description: str | None = None

    @staticmethod
    def create(name: str, price: Money, description: str | None = None) -> Product:
        product = Product(id=new_id(), name="", price=price)
        product.rename(name)
        product.update_price(price)
        product.describe(description)
        return product

    def rename(self, name: str) -> None:
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Product name is required")
        name = name.strip()
        if len(name) > MAX_NAME_LENGTH:
            raise ValidationError(
                f"Product name must be at most {MAX_NAME_LENGTH} characters"
            )
        self.name = name

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        Carts don't store prices, so this never touches cart contents.
        """
        if new_price.decimal_places > MAX_PRICE_DECIMALS:
            raise ValidationError(
                f"Product price allows at most {MAX_PRICE_DECIMALS} decimal places, "
                f"got {new_price.amount}"
            )
        self.price = new_price

    def describe(self, description: str | None) -> None:
        if description is not None and len(description) > MAX_DESCRIPTION_LENGTH:
            raise ValidationError(
                f"Product description must be at most {MAX_DESCRIPTION_LENGTH} characters"
            )
        self.description = description

    def has_name(self, name: str) -> bool:
        return self.name == name.strip()
