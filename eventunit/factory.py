"""Provider factory for event emitters."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from .config import ConfigurationBundle
from .core.event_bus import MemoryEventBus
from .core.event_unit import EventUnit, EventUnitConfig
from .core.provider_manager import ProviderManager
from .providers.native import NativeEventBus


class Emitter:
    """Entry points for every emitter flavour.

    ``memory`` runs anywhere, ``native`` delegates to pyee and ``unit`` wraps
    either of them in a teachable :class:`EventUnit`.
    """

    @staticmethod
    def memory() -> MemoryEventBus:
        return MemoryEventBus()

    @staticmethod
    def native() -> NativeEventBus:
        return NativeEventBus()

    @staticmethod
    def unit(config: Union[EventUnitConfig, Mapping[str, Any], None] = None) -> EventUnit:
        return EventUnit.create(config)

    @staticmethod
    def from_settings(bundle: ConfigurationBundle) -> EventUnit:
        """Build a unit from a loaded :class:`ConfigurationBundle`."""

        unit = bundle.unit
        config = EventUnitConfig(
            id=unit.id,
            provider=unit.provider,
            version=unit.version,
            metadata=dict(unit.metadata),
        )
        return EventUnit.create(config, providers=ProviderManager(bundle.providers))


def create_emitter(provider: str = "memory", *, wrap: bool = False, **unit_options: Any):
    """
    Create an emitter for *provider*.

    With ``wrap=True`` the backend is wrapped in an :class:`EventUnit`;
    *unit_options* (``id``, ``version``, ``metadata``) are passed to it.
    Otherwise the bare backend from the default provider table is returned.
    """

    if wrap:
        return EventUnit.create(EventUnitConfig(provider=provider, **unit_options))
    return ProviderManager().create(provider)


__all__ = ["Emitter", "create_emitter"]
