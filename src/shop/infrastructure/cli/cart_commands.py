"""CLI commands for shopping carts.

``--user`` is the authenticated principal handed over by the identity
provider; it is trusted as-is.
"""

from __future__ import annotations

import click

from shop.application.dto import CartDTO
from shop.domain.service.cart_merge_service import CartLineRequest
from shop.infrastructure.bootstrap import Services
from shop.infrastructure.cli.common import domain_errors, parse_pairs


def _display_cart(dto: CartDTO) -> None:
    click.echo(f"Cart {dto.id}  (user={dto.user_id})")
    if not dto.items:
        click.echo("  (empty)")
        return
    click.echo(f"  {'Product':<20} {'ID':<32} {'Qty':>5}")
    click.echo(f"  {'-'*59}")
    for item in dto.items:
        click.echo(f"  {item.product_name:<20} {item.product_id:<32} {item.quantity:>5}")
    click.echo(f"  {'-'*59}")
    click.echo(f"  {'Total items':<53} {dto.total_quantity:>5}")


@click.command("show")
@click.option("--user", "user_id", required=True, help="User ID of the cart owner.")
@click.pass_obj
def cart_show(services: Services, user_id: str) -> None:
    """Show a user's cart (created empty on first access)."""
    with domain_errors():
        cart = services.carts.get_or_create(user_id)
        dto = services.carts.describe(cart)

    _display_cart(dto)


@click.command("add")
@click.option("--user", "user_id", required=True, help="User ID of the cart owner.")
@click.option("--items", required=True, help="Items as 'ProductID:Qty,ProductID:Qty'.")
@click.pass_obj
def cart_add(services: Services, user_id: str, items: str) -> None:
    """Add items to a user's cart; quantities accumulate per product."""
    lines = [CartLineRequest(product_id=pid, quantity=qty) for pid, qty in parse_pairs(items)]

    with domain_errors():
        services.carts.get_or_create(user_id)
        cart = services.carts.merge(user_id, lines)
        dto = services.carts.describe(cart)

    _display_cart(dto)


@click.command("list")
@click.pass_obj
def cart_list(services: Services) -> None:
    """List every cart."""
    with domain_errors():
        carts = services.carts.get_all()

    if not carts:
        click.echo("No carts found.")
        return

    click.echo(f"{'ID':<32} {'User':<24} {'Lines':>6} {'Items':>6}")
    click.echo("-" * 71)
    for cart in carts:
        click.echo(
            f"{cart.id:<32} {cart.user_id:<24} {len(cart.items):>6} {cart.total_quantity:>6}"
        )
