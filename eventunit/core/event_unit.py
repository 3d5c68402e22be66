"""Unit wrapper that makes an event backend teachable."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional, Union

from .backend import EventBackend
from .provider_manager import ProviderManager
from .types import EventHandler, Unsubscribe
from .unit import TeachingContract, Unit, UnitProps, create_unit_schema


@dataclass
class EventUnitConfig:
    id: str = "event-unit"
    provider: str = "memory"
    version: str = "1.0.0"
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class EventUnitProps(UnitProps):
    provider: str = "memory"


class EventUnit(Unit, EventBackend):
    """Event dispatcher exposed as a unit.

    Every event operation is delegated to the backend chosen by
    ``config.provider``; :meth:`teach` packages seven of them so another unit
    can call them by name, e.g. ``learner.execute("event-unit.emit", event)``.
    """

    def __init__(self, props: EventUnitProps, backend: EventBackend) -> None:
        super().__init__(props)
        self._backend = backend

    @classmethod
    def create(
        cls,
        config: Union[EventUnitConfig, Mapping[str, Any], None] = None,
        *,
        providers: Optional[ProviderManager] = None,
    ) -> "EventUnit":
        """Build a unit and its backend from *config*.

        *config* is an :class:`EventUnitConfig` or a mapping with the same keys;
        keys the config does not define are ignored.
        """

        if config is None:
            config = EventUnitConfig()
        elif isinstance(config, Mapping):
            known = {item.name for item in fields(EventUnitConfig)}
            config = EventUnitConfig(**{key: value for key, value in config.items() if key in known})
        props = EventUnitProps(
            dna=create_unit_schema(config.id, config.version),
            metadata=dict(config.metadata),
            provider=config.provider,
        )
        manager = providers or ProviderManager()
        return cls(props, manager.create(config.provider))

    @property
    def provider(self) -> str:
        return self.props.provider

    def get_provider(self) -> str:
        return self.provider

    # -- unit ----------------------------------------------------------------------
    def whoami(self) -> str:
        return f"EventUnit[{self.dna.id}] v{self.dna.version} ({self.provider})"

    def teach(self) -> TeachingContract:
        return TeachingContract(
            unit_id=self.dna.id,
            capabilities={
                "subscribe": lambda *args, **kwargs: self.subscribe(*args, **kwargs),
                "subscribe_once": lambda *args, **kwargs: self.subscribe_once(*args, **kwargs),
                "off": lambda *args, **kwargs: self.off(*args, **kwargs),
                "emit": lambda *args, **kwargs: self.emit(*args, **kwargs),
                "remove_all_listeners": lambda *args, **kwargs: self.remove_all_listeners(),
                "listener_count": lambda *args, **kwargs: self.listener_count(*args, **kwargs),
                "event_types": lambda *args, **kwargs: self.event_types(),
            },
        )

    def help(self) -> str:
        types = self.event_types()
        return f"""
EventUnit [{self.dna.id}] v{self.dna.version}

Provider: {self.provider}
Event Types: {", ".join(types) if types else "none"}

Capabilities:
  subscribe(type, handler)       Subscribe to events, returns an unsubscribe callable
  subscribe_once(type, handler)  One-time subscription, clears the type after firing
  off(type)                      Remove all handlers for type
  emit(event)                    Emit an event
  remove_all_listeners()         Clear all handlers
  listener_count(type)           Get handler count
  event_types()                  Get all event types

Usage:
  events = EventUnit.create({{"provider": "{self.provider}"}})
  unsubscribe = events.subscribe("user.login", print)
  events.emit({{"type": "user.login", "userId": "123"}})

Teaching:
  other.learn([events.teach()])
  other.execute("{self.dna.id}.emit", {{"type": "custom", "data": "value"}})
"""

    # -- events --------------------------------------------------------------------
    def subscribe(self, event_type: str, handler: EventHandler) -> Unsubscribe:
        return self._backend.subscribe(event_type, handler)

    def subscribe_once(self, event_type: str, handler: EventHandler) -> Unsubscribe:
        return self._backend.subscribe_once(event_type, handler)

    def off(self, event_type: str) -> None:
        self._backend.off(event_type)

    def emit(self, event: Any) -> None:
        self._backend.emit(event)

    def remove_all_listeners(self) -> None:
        self._backend.remove_all_listeners()

    def listener_count(self, event_type: str) -> int:
        return self._backend.listener_count(event_type)

    def event_types(self) -> List[str]:
        return self._backend.event_types()


__all__ = ["EventUnit", "EventUnitConfig", "EventUnitProps"]
