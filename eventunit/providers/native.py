"""Event backend that delegates to :class:`pyee.EventEmitter`."""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Tuple

from pyee import EventEmitter

from eventunit.core.backend import EventBackend
from eventunit.core.types import EventHandler, Unsubscribe, event_type_of, find_handler

logger = logging.getLogger("eventunit.native")

# pyee reserves "error" and "new_listener"; user event types live under this
# prefix so they can never collide with them.
_CHANNEL_PREFIX = "eventunit:"


def _channel(event_type: str) -> str:
    return _CHANNEL_PREFIX + event_type


def _adapter(handler: EventHandler) -> EventHandler:
    def deliver(event: Any) -> None:
        handler(event)

    return deliver


class NativeEventBus(EventBackend):
    """Dispatcher backed by pyee's Node.js style emitter.

    pyee keys listeners by hashing them, so each user handler is registered
    through its own adapter function and the handler itself is only ever
    compared by identity in ``_adapters``. pyee copies its listener list
    before each emission, which gives the same snapshot delivery as
    :class:`~eventunit.core.event_bus.MemoryEventBus`.
    """

    def __init__(self) -> None:
        self._emitter = EventEmitter()
        self._adapters: Dict[str, List[Tuple[EventHandler, EventHandler]]] = {}
        self._lock = threading.RLock()

    # ------------------------------------------------------------------ subscription
    def subscribe(self, event_type: str, handler: EventHandler) -> Unsubscribe:
        channel = _channel(event_type)
        with self._lock:
            entries = self._adapters.setdefault(channel, [])
            if find_handler([entry[0] for entry in entries], handler) == -1:
                adapter = _adapter(handler)
                entries.append((handler, adapter))
                self._emitter.on(channel, adapter)
                logger.debug("Subscribed %r to '%s'", handler, event_type)

        def unsubscribe() -> None:
            self._remove(channel, handler)

        return unsubscribe

    def _remove(self, channel: str, handler: EventHandler) -> None:
        with self._lock:
            entries = self._adapters.get(channel)
            if not entries:
                return
            index = find_handler([entry[0] for entry in entries], handler)
            if index == -1:
                return
            _, adapter = entries.pop(index)
            if not entries:
                self._adapters.pop(channel, None)
            self._emitter.remove_listener(channel, adapter)
        logger.debug("Unsubscribed %r from '%s'", handler, channel[len(_CHANNEL_PREFIX):])

    def off(self, event_type: str) -> None:
        channel = _channel(event_type)
        with self._lock:
            self._adapters.pop(channel, None)
            self._emitter.remove_all_listeners(channel)

    def remove_all_listeners(self) -> None:
        with self._lock:
            self._adapters.clear()
            self._emitter.remove_all_listeners()

    # ------------------------------------------------------------------ publishing
    def emit(self, event: Any) -> None:
        event_type = event_type_of(event)
        channel = _channel(event_type)
        if not self._emitter.listeners(channel):
            logger.debug("No subscribers for '%s'", event_type)
            return
        self._emitter.emit(channel, event)

    # ------------------------------------------------------------------ introspection
    def listener_count(self, event_type: str) -> int:
        return len(self._emitter.listeners(_channel(event_type)))

    def event_types(self) -> List[str]:
        # remove_all_listeners(event) leaves an empty entry behind in pyee
        return [
            name[len(_CHANNEL_PREFIX):]
            for name in self._emitter.event_names()
            if isinstance(name, str)
            and name.startswith(_CHANNEL_PREFIX)
            and self._emitter.listeners(name)
        ]

    @property
    def native_emitter(self) -> EventEmitter:
        """The underlying pyee emitter; event types are stored under a prefix."""

        return self._emitter


__all__ = ["NativeEventBus"]
