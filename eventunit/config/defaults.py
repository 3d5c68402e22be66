"""Default configuration used when no user settings are available."""

from __future__ import annotations

from copy import deepcopy

DEFAULT_UNIT_CONFIG = {
    "id": "event-unit",
    "version": "1.0.0",
    "provider": "memory",
    "metadata": {},
}


DEFAULT_PROVIDERS = {
    "memory": {
        "provider": "eventunit.core.event_bus:MemoryEventBus",
        "enabled": True,
        "config": {},
    },
    "native": {
        "provider": "eventunit.providers.native:NativeEventBus",
        "enabled": True,
        "config": {},
    },
}


def clone_defaults():
    """
    Create deep copies of the default configuration structures.

    Returns:
        tuple: (unit_config, providers)
            unit_config (dict): Deep copy of DEFAULT_UNIT_CONFIG.
            providers (dict): Deep copy of DEFAULT_PROVIDERS.
    """

    return deepcopy(DEFAULT_UNIT_CONFIG), deepcopy(DEFAULT_PROVIDERS)
