"""CLI commands for the Inventory Ledger."""

from __future__ import annotations

import threading

import click
import redis

from shop.domain.model.inventory import InventoryRecord
from shop.infrastructure.bootstrap import Services
from shop.infrastructure.cli.common import domain_errors
from shop.infrastructure.config import Settings
from shop.realtime.redis_channel import listen_for_changes


def _display_record(record: InventoryRecord) -> None:
    click.echo(f"Inventory {record.id}  product={record.product_id}  quantity={record.quantity}")


@click.command("list")
@click.pass_obj
def inventory_list(services: Services) -> None:
    """Show current inventory levels."""
    with domain_errors():
        records = services.ledger.list_all()

    if not records:
        click.echo("No inventory records found.")
        return

    click.echo(f"{'ID':<32} {'Product':<32} {'Quantity':>8}")
    click.echo("-" * 74)
    for record in records:
        click.echo(f"{record.id:<32} {record.product_id:<32} {record.quantity:>8}")


@click.command("show")
@click.option("--id", "record_id", required=True, help="Inventory record ID.")
@click.pass_obj
def inventory_show(services: Services, record_id: str) -> None:
    """Show one inventory record."""
    with domain_errors():
        record = services.ledger.get(record_id)

    _display_record(record)


@click.command("create")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Initial quantity in stock.")
@click.pass_obj
def inventory_create(services: Services, product_id: str, quantity: int) -> None:
    """Start tracking stock for a product."""
    with domain_errors():
        product_id = services.product_guard.require(product_id)
        record = services.ledger.create(product_id, quantity)

    click.echo("Inventory record created")
    _display_record(record)


@click.command("set")
@click.option("--id", "record_id", required=True, help="Inventory record ID.")
@click.option("--quantity", default=None, type=int, help="New absolute quantity.")
@click.pass_obj
def inventory_set(services: Services, record_id: str, quantity: int | None) -> None:
    """Replace the stock level of a record."""
    with domain_errors():
        record = services.ledger.set_quantity(record_id, quantity)

    _display_record(record)


@click.command("adjust")
@click.option("--id", "record_id", required=True, help="Inventory record ID.")
@click.option("--delta", default=None, type=int, help="Amount to add (negative to remove).")
@click.pass_obj
def inventory_adjust(services: Services, record_id: str, delta: int | None) -> None:
    """Add to or take from the stock level of a record."""
    with domain_errors():
        record = services.ledger.adjust_quantity(record_id, delta)

    _display_record(record)


@click.command("reset")
@click.option("--id", "record_id", required=True, help="Inventory record ID.")
@click.pass_obj
def inventory_reset(services: Services, record_id: str) -> None:
    """Set the stock level of a record to zero."""
    with domain_errors():
        record = services.ledger.reset_quantity(record_id)

    _display_record(record)


@click.command("remove")
@click.option("--id", "record_id", required=True, help="Inventory record ID.")
@click.pass_obj
def inventory_remove(services: Services, record_id: str) -> None:
    """Stop tracking stock for a record."""
    with domain_errors():
        record = services.ledger.remove(record_id)

    click.echo(f"Inventory {record.id} removed")


@click.command("watch")
def inventory_watch() -> None:
    """Print inventory changes as they are broadcast (Ctrl+C to stop)."""
    settings = Settings.from_env()
    if not settings.realtime_enabled:
        raise click.ClickException("SHOP_REDIS_URL is not set; nothing to watch.")

    def _echo(event_name: str, data: dict) -> None:
        change = data.get("change", "?")
        if data.get("deleted"):
            click.echo(f"[{event_name}] {change} {data.get('id')} product={data.get('product_id')}")
        else:
            click.echo(
                f"[{event_name}] {change} {data.get('id')} "
                f"product={data.get('product_id')} quantity={data.get('quantity')}"
            )

    client = redis.Redis.from_url(settings.redis_url, decode_responses=True)
    stop = threading.Event()
    try:
        listen_for_changes(client, _echo, stop, settings.redis_channel)
    except KeyboardInterrupt:
        stop.set()
    except redis.RedisError as exc:
        raise click.ClickException(f"unavailable: {exc}") from exc
    finally:
        client.close()
