"""In-memory pub/sub dispatcher with no external dependencies."""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List

from .backend import EventBackend
from .types import EventHandler, Unsubscribe, event_type_of, find_handler

logger = logging.getLogger("eventunit.bus")


class MemoryEventBus(EventBackend):
    """Synchronous event dispatcher backed by a plain dictionary.

    Handlers run in registration order on the caller's thread. Each emission
    iterates over a copy of the bucket taken when :meth:`emit` starts, so a
    handler that subscribes, unsubscribes or clears its own event type does
    not change who receives the event being delivered. Handler exceptions are
    not caught: they abort the emission and propagate to the caller.
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[EventHandler]] = {}
        self._lock = threading.RLock()

    # ------------------------------------------------------------------ subscription
    def subscribe(self, event_type: str, handler: EventHandler) -> Unsubscribe:
        """Register *handler* for *event_type*; subscribing it twice is a no-op."""

        with self._lock:
            listeners = self._handlers.setdefault(event_type, [])
            if find_handler(listeners, handler) == -1:
                listeners.append(handler)
                logger.debug("Subscribed %r to '%s'", handler, event_type)

        def unsubscribe() -> None:
            self._remove(event_type, handler)

        return unsubscribe

    def _remove(self, event_type: str, handler: EventHandler) -> None:
        with self._lock:
            listeners = self._handlers.get(event_type)
            if not listeners:
                return
            index = find_handler(listeners, handler)
            if index == -1:
                return
            del listeners[index]
            if not listeners:
                self._handlers.pop(event_type, None)
        logger.debug("Unsubscribed %r from '%s'", handler, event_type)

    def off(self, event_type: str) -> None:
        with self._lock:
            removed = self._handlers.pop(event_type, None)
        if removed:
            logger.debug("Removed %d handler(s) for '%s'", len(removed), event_type)

    def remove_all_listeners(self) -> None:
        with self._lock:
            self._handlers.clear()

    # ------------------------------------------------------------------ publishing
    def emit(self, event: Any) -> None:
        """Invoke every handler registered for the type of *event*."""

        event_type = event_type_of(event)
        with self._lock:
            listeners = list(self._handlers.get(event_type, ()))
        if not listeners:
            logger.debug("No subscribers for '%s'", event_type)
            return
        for handler in listeners:
            handler(event)

    # ------------------------------------------------------------------ introspection
    def listener_count(self, event_type: str) -> int:
        with self._lock:
            return len(self._handlers.get(event_type, ()))

    def event_types(self) -> List[str]:
        with self._lock:
            return list(self._handlers)


__all__ = ["MemoryEventBus"]
