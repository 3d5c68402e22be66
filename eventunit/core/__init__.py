"""Core building blocks: the dispatcher contract, memory backend and units."""

from .backend import EventBackend
from .event_bus import MemoryEventBus
from .event_unit import EventUnit, EventUnitConfig, EventUnitProps
from .provider_manager import ProviderManager
from .types import Event, EventHandler, Unsubscribe, event_type_of
from .unit import TeachingContract, Unit, UnitProps, UnitSchema, create_unit_schema

__all__ = [
    "Event",
    "EventBackend",
    "EventHandler",
    "EventUnit",
    "EventUnitConfig",
    "EventUnitProps",
    "MemoryEventBus",
    "ProviderManager",
    "TeachingContract",
    "Unit",
    "UnitProps",
    "UnitSchema",
    "Unsubscribe",
    "create_unit_schema",
    "event_type_of",
]
