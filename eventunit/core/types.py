"""Shared event types and handler aliases."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MethodType
from typing import Any, Callable, Dict, Mapping, Sequence

EventHandler = Callable[[Any], None]
Unsubscribe = Callable[[], None]


@dataclass
class Event:
    """Convenience event value.

    Any mapping with a ``"type"`` key or any object exposing a ``type``
    attribute is accepted wherever an event is expected; this class is only a
    ready-made shape for producers that have none of their own.
    """

    type: str
    payload: Dict[str, Any] = field(default_factory=dict)


def event_type_of(event: Any) -> str:
    """Return the type discriminator of *event*.

    Mappings are read through their ``"type"`` key, everything else through
    the ``type`` attribute. No other field is ever inspected.
    """

    if isinstance(event, Mapping):
        return event["type"]
    return event.type


def same_handler(first: Any, second: Any) -> bool:
    """Return True when *first* and *second* are the same subscription target.

    Handlers are compared by identity. Bound methods are recreated on every
    attribute access, so two bound methods count as the same handler when
    they wrap the same function on the same object.
    """

    if first is second:
        return True
    if isinstance(first, MethodType) and isinstance(second, MethodType):
        return first.__self__ is second.__self__ and first.__func__ is second.__func__
    return False


def find_handler(listeners: Sequence[Any], handler: Any) -> int:
    """Index of *handler* in *listeners* per :func:`same_handler`, or -1."""

    for index, existing in enumerate(listeners):
        if same_handler(existing, handler):
            return index
    return -1


__all__ = ["Event", "EventHandler", "Unsubscribe", "event_type_of", "find_handler", "same_handler"]
