"""
Synchronous publish/subscribe used between the watcher, classifiers
and the session.
"""

import threading
from collections.abc import Callable
from typing import Any

from aurawatch.logging_config import get_logger

logger = get_logger(__name__)

Subscriber = Callable[..., None]


class EventHub:
    """
    Ordered fan-out of published payloads to subscriber callbacks.

    Subscribers run on the publishing thread in registration order. A
    subscriber that raises is logged and skipped; the remaining
    subscribers still receive the payload and the publisher never sees
    the exception.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._subscribers: list[Subscriber] = []
        self._lock = threading.Lock()

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback.

        Returns:
            A function that removes the callback again
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        """Number of registered callbacks."""
        return len(self._subscribers)

    def publish(self, *args: Any) -> int:
        """
        Invoke every subscriber with ``args``.

        Returns:
            Number of subscribers that handled the payload without raising
        """
        with self._lock:
            subscribers = list(self._subscribers)

        delivered = 0
        for callback in subscribers:
            try:
                callback(*args)
                delivered += 1
            except Exception:
                logger.error(
                    "Subscriber %r of '%s' failed",
                    callback,
                    self.name,
                    exc_info=True
                )
        return delivered
