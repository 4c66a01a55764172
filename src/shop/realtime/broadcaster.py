"""Change Broadcaster: best-effort fan-out of inventory changes.

The Ledger calls ``publish`` right after a write commits. Delivery runs on
a background worker so a slow or broken transport can never delay or fail
the write. Events published while no channel is attached are dropped.
Delivery is at-most-once: nothing is retried or kept for later.
"""

from __future__ import annotations

import threading
from concurrent.futures import Executor, ThreadPoolExecutor

import structlog

from shop.domain.model.events import INVENTORY_UPDATE, ChangeEvent, ChangePublisher
from shop.realtime.channel import Channel

logger = structlog.get_logger(__name__)


class ChangeBroadcaster(ChangePublisher):

    def __init__(self, executor: Executor | None = None) -> None:
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="change-broadcast"
        )
        self._channel: Channel | None = None
        self._closed = False
        self._lock = threading.Lock()

    @property
    def attached(self) -> bool:
        return self._channel is not None

    def attach(self, channel: Channel) -> None:
        """Wire the live transport. Re-attaching replaces the old channel."""
        with self._lock:
            previous = self._channel
            if previous is channel:
                return
            self._channel = channel
        if previous is not None:
            previous.bind(None)
        channel.bind(self)
        logger.info("Change channel attached", channel=type(channel).__name__)

    def publish(self, event: ChangeEvent) -> None:
        if self._closed:
            logger.warning("Broadcaster closed, event dropped", change=event.kind.value)
            return
        channel = self._channel
        if channel is None:
            logger.debug("No change channel attached, event dropped", change=event.kind.value)
            return
        try:
            self._executor.submit(self._deliver, channel, event)
        except RuntimeError:
            # executor already shut down
            logger.warning("Broadcaster closed, event dropped", change=event.kind.value)

    def subscriber_connected(self, subscriber_id: str) -> None:
        logger.info("Subscriber connected", subscriber_id=subscriber_id)

    def subscriber_disconnected(self, subscriber_id: str) -> None:
        logger.info("Subscriber disconnected", subscriber_id=subscriber_id)

    def close(self) -> None:
        """Wait for queued deliveries to finish, stop the worker, then close
        the attached channel."""
        with self._lock:
            self._closed = True
        self._executor.shutdown(wait=True)
        with self._lock:
            channel, self._channel = self._channel, None
        if channel is not None:
            channel.close()
            logger.info("Change channel closed", channel=type(channel).__name__)

    @staticmethod
    def _deliver(channel: Channel, event: ChangeEvent) -> None:
        try:
            channel.emit(INVENTORY_UPDATE, event.to_payload())
        except Exception:
            logger.exception(
                "Change delivery failed",
                change=event.kind.value,
                record_id=event.record_id,
            )
