"""In-process publisher for indexing lifecycle events."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, List

LOGGER = logging.getLogger(__name__)

Listener = Callable[[Any], None]


class EventPublisher:
    """Deliver events to subscribed listeners, fire-and-forget."""

    def __init__(self) -> None:
        self._listeners: List[Listener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: Listener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def publish(self, event: Any) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(event)
            except Exception:
                LOGGER.exception("Listener %r failed for %s", listener, type(event).__name__)
