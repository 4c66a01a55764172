"""Logging of document-store failures at the application boundary."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from shop.domain.exceptions import StoreUnavailableError

logger = structlog.get_logger(__name__)


@contextmanager
def reporting_store_failures(operation: str, **context: object) -> Iterator[None]:
    """Log a StoreUnavailableError with its operation context, then re-raise."""
    try:
        yield
    except StoreUnavailableError as exc:
        logger.error("Store unavailable", operation=operation, error=str(exc), **context)
        raise
