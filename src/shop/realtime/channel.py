"""Live transports for inventory change notifications.

A Channel accepts named events and delivers them to whoever is connected
at that moment. Membership changes are reported to a listener (the
broadcaster) purely for logging.
"""

from __future__ import annotations

import threading
import weakref
from abc import ABC, abstractmethod
from typing import Protocol

import structlog

logger = structlog.get_logger(__name__)


class MembershipListener(Protocol):

    def subscriber_connected(self, subscriber_id: str) -> None: ...

    def subscriber_disconnected(self, subscriber_id: str) -> None: ...


class Channel(ABC):

    @abstractmethod
    def emit(self, event_name: str, payload: dict) -> None:
        """Deliver one event to the currently connected subscribers."""

    def bind(self, listener: MembershipListener | None) -> None:
        """Report connects/disconnects to ``listener``. Optional for transports
        whose membership is managed elsewhere."""

    def close(self) -> None:
        """Release the transport's connections, if it holds any."""


class Subscriber(ABC):
    """An in-process consumer of channel events."""

    subscriber_id: str

    @abstractmethod
    def deliver(self, event_name: str, payload: dict) -> None:
        """Receive one event. Exceptions are logged and otherwise ignored."""


class LocalChannel(Channel):
    """In-process fan-out.

    Subscribers are held weakly: the channel never keeps a subscriber
    alive, and one that is garbage collected simply stops receiving.
    """

    def __init__(self) -> None:
        self._subscribers: weakref.WeakSet[Subscriber] = weakref.WeakSet()
        self._listener: MembershipListener | None = None
        self._lock = threading.Lock()

    def bind(self, listener: MembershipListener | None) -> None:
        self._listener = listener

    def connect(self, subscriber: Subscriber) -> None:
        with self._lock:
            self._subscribers.add(subscriber)
        if self._listener is not None:
            self._listener.subscriber_connected(subscriber.subscriber_id)

    def disconnect(self, subscriber: Subscriber) -> None:
        with self._lock:
            if subscriber not in self._subscribers:
                return
            self._subscribers.discard(subscriber)
        if self._listener is not None:
            self._listener.subscriber_disconnected(subscriber.subscriber_id)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def emit(self, event_name: str, payload: dict) -> None:
        with self._lock:
            targets = list(self._subscribers)
        for subscriber in targets:
            try:
                subscriber.deliver(event_name, payload)
            except Exception:
                logger.exception(
                    "Subscriber delivery failed",
                    subscriber_id=subscriber.subscriber_id,
                    event_name=event_name,
                )
