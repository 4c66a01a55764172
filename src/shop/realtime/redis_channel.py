"""Redis Pub/Sub transport for inventory changes.

Redis Pub/Sub is fire-and-forget: a subscriber that is not listening when
a message is published never sees it, which matches the broadcaster's
at-most-once contract.
"""

from __future__ import annotations

import json
import threading
from collections.abc import Callable

import redis
import structlog

from shop.realtime.channel import Channel

logger = structlog.get_logger(__name__)

DEFAULT_CHANNEL = "inventory_events"


class RedisChannel(Channel):

    def __init__(self, client: redis.Redis, channel_name: str = DEFAULT_CHANNEL) -> None:
        self._client = client
        self._channel_name = channel_name

    @classmethod
    def from_url(cls, url: str, channel_name: str = DEFAULT_CHANNEL) -> RedisChannel:
        return cls(redis.Redis.from_url(url, decode_responses=True), channel_name)

    def emit(self, event_name: str, payload: dict) -> None:
        receivers = self._client.publish(
            self._channel_name,
            json.dumps({"event_type": event_name, "data": payload}, default=str),
        )
        logger.debug(
            "Change published",
            channel=self._channel_name,
            event_name=event_name,
            receivers=receivers,
        )

    def close(self) -> None:
        self._client.close()


def listen_for_changes(
    client: redis.Redis,
    on_change: Callable[[str, dict], None],
    stop_event: threading.Event,
    channel_name: str = DEFAULT_CHANNEL,
) -> None:
    """Subscribe to ``channel_name`` and call ``on_change`` per message.

    Runs until ``stop_event`` is set. Malformed messages are logged and
    skipped.
    """
    pubsub = client.pubsub()
    pubsub.subscribe(channel_name)
    logger.info("Subscribed to change channel", channel=channel_name)

    try:
        while not stop_event.is_set():
            message = pubsub.get_message(ignore_subscribe_messages=True, timeout=1.0)
            if not message or message["type"] != "message":
                continue
            try:
                event = json.loads(message["data"])
                on_change(event["event_type"], event.get("data", {}))
            except (ValueError, KeyError, TypeError):
                logger.warning("Malformed change message skipped", data=message["data"])
    finally:
        pubsub.unsubscribe(channel_name)
        pubsub.close()
        logger.info("Unsubscribed from change channel", channel=channel_name)
