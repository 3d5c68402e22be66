"""Provider-pluggable publish/subscribe events with teachable units."""

from .config.loader import load_configuration
from .core import (
    Event,
    EventBackend,
    EventUnit,
    EventUnitConfig,
    MemoryEventBus,
    ProviderManager,
    TeachingContract,
    Unit,
)
from .errors import (
    CapabilityNotFoundError,
    ConfigurationError,
    EventUnitError,
    ProviderDisabledError,
    UnknownProviderError,
)
from .factory import Emitter, create_emitter
from .providers import NativeEventBus

__all__ = [
    "CapabilityNotFoundError",
    "ConfigurationError",
    "Emitter",
    "Event",
    "EventBackend",
    "EventUnit",
    "EventUnitConfig",
    "EventUnitError",
    "MemoryEventBus",
    "NativeEventBus",
    "ProviderDisabledError",
    "ProviderManager",
    "TeachingContract",
    "Unit",
    "UnknownProviderError",
    "create_emitter",
    "load_configuration",
]
