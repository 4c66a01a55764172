"""Helpers shared by the CLI command modules."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import click

from shop.domain.exceptions import DomainException


@contextmanager
def domain_errors() -> Iterator[None]:
    """Turn a DomainException into a ClickException tagged with its kind."""
    try:
        yield
    except DomainException as exc:
        raise click.ClickException(f"{exc.kind}: {exc}") from exc


def parse_pairs(raw: str) -> list[tuple[str, int]]:
    """Parse 'abc123:3,def456:5' into [(id, qty), ...]."""
    pairs: list[tuple[str, int]] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductID:Quantity'."
            )
        key, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{key}'."
            )
        pairs.append((key.strip(), qty))
    return pairs
