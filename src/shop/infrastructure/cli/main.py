import click

from shop.infrastructure.bootstrap import build_services
from shop.infrastructure.cli.cart_commands import cart_add, cart_list, cart_show
from shop.infrastructure.cli.inventory_commands import (
    inventory_adjust,
    inventory_create,
    inventory_list,
    inventory_remove,
    inventory_reset,
    inventory_set,
    inventory_show,
    inventory_watch,
)
from shop.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_remove,
    product_show,
    product_update,
)
from shop.infrastructure.config import Settings
from shop.infrastructure.logging import configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Shop: product catalog, inventory and carts."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    if ctx.invoked_subcommand is None or ctx.resilient_parsing:
        return
    services = build_services(settings)
    ctx.obj = services
    ctx.call_on_close(services.close)


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def inventory() -> None:
    """Manage inventory."""


@cli.group()
def cart() -> None:
    """Manage shopping carts."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_remove)
product.add_command(product_show)
product.add_command(product_update)
inventory.add_command(inventory_adjust)
inventory.add_command(inventory_create)
inventory.add_command(inventory_list)
inventory.add_command(inventory_remove)
inventory.add_command(inventory_reset)
inventory.add_command(inventory_set)
inventory.add_command(inventory_show)
inventory.add_command(inventory_watch)
cart.add_command(cart_add)
cart.add_command(cart_list)
cart.add_command(cart_show)
