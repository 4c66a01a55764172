"""CLI commands for the Product Catalog."""

from __future__ import annotations

import click

from shop.application.dto import ProductPatch, ProductSpec
from shop.domain.model.product import Product
from shop.infrastructure.bootstrap import Services
from shop.infrastructure.cli.common import domain_errors


def _display_product(product: Product) -> None:
    click.echo(f"Product {product.id}")
    click.echo(f"Name:        {product.name}")
    click.echo(f"Price:       {product.price}")
    if product.description:
        click.echo(f"Description: {product.description}")


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 6.99).")
@click.option("--description", default=None, help="Optional description.")
@click.pass_obj
def product_add(services: Services, name: str, price: str, description: str | None) -> None:
    """Add a new product to the catalog."""
    with domain_errors():
        product = services.catalog.create(ProductSpec(name, price, description))

    click.echo(f"Product {product.id} '{product.name}' added at {product.price}")


@click.command("list")
@click.pass_obj
def product_list(services: Services) -> None:
    """List all products in the catalog."""
    with domain_errors():
        products = services.catalog.list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<32} {'Name':<20} {'Price':>10}")
    click.echo("-" * 64)
    for p in products:
        click.echo(f"{p.id:<32} {p.name:<20} {str(p.price):>10}")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_show(services: Services, product_id: str) -> None:
    """Show a single product."""
    with domain_errors():
        product = services.catalog.get(product_id)

    _display_product(product)


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--description", default=None, help="New description ('' clears it).")
@click.pass_obj
def product_update(
    services: Services,
    product_id: str,
    name: str | None,
    price: str | None,
    description: str | None,
) -> None:
    """Update some fields of a product."""
    patch = ProductPatch(name=name, price=price, description=description)
    if patch.is_empty:
        raise click.UsageError("Nothing to update: pass --name, --price or --description.")

    with domain_errors():
        product = services.catalog.update(product_id, patch)

    click.echo(f"Product {product.id} updated")
    _display_product(product)


@click.command("remove")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_remove(services: Services, product_id: str) -> None:
    """Remove a product from the catalog."""
    with domain_errors():
        product = services.catalog.remove(product_id)

    click.echo(f"Product {product.id} '{product.name}' removed")
