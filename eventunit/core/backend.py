"""Abstract contract shared by every event backend."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List

from .types import EventHandler, Unsubscribe


class EventBackend(ABC):
    """Publish/subscribe contract implemented by each provider.

    Backends own their registry outright; two instances never share state.
    ``subscribe_once`` and ``has_handlers`` are written here in terms of the
    abstract operations so that every provider gets identical once-semantics.
    """

    # ------------------------------------------------------------------ subscription
    @abstractmethod
    def subscribe(self, event_type: str, handler: EventHandler) -> Unsubscribe:
        """Register *handler* for *event_type* and return its unsubscribe callable."""

    def subscribe_once(self, event_type: str, handler: EventHandler) -> Unsubscribe:
        """
        Register *handler* to run for the next *event_type* emission only.

        Once the wrapped handler has run, every handler registered for
        *event_type* is removed, not only this one. The returned callable
        cancels the subscription before it fires.
        """

        def once_wrapper(event: Any) -> None:
            handler(event)
            self.off(event_type)

        return self.subscribe(event_type, once_wrapper)

    @abstractmethod
    def off(self, event_type: str) -> None:
        """Remove every handler registered for *event_type*."""

    @abstractmethod
    def remove_all_listeners(self) -> None:
        """Remove every handler for every event type."""

    # ------------------------------------------------------------------ publishing
    @abstractmethod
    def emit(self, event: Any) -> None:
        """Deliver *event* to the handlers registered for its type."""

    # ------------------------------------------------------------------ introspection
    @abstractmethod
    def listener_count(self, event_type: str) -> int:
        """Return the number of handlers registered for *event_type*."""

    @abstractmethod
    def event_types(self) -> List[str]:
        """Return every event type that currently has at least one handler."""

    def has_handlers(self, event_type: str) -> bool:
        return self.listener_count(event_type) > 0

    # node-style aliases
    def on(self, event_type: str, handler: EventHandler) -> Unsubscribe:
        return self.subscribe(event_type, handler)

    def once(self, event_type: str, handler: EventHandler) -> Unsubscribe:
        return self.subscribe_once(event_type, handler)


__all__ = ["EventBackend"]
