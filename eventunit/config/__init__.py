"""Configuration utilities for eventunit."""

from .loader import (
    ConfigurationBundle,
    ProviderSettings,
    UnitSettings,
    load_configuration,
)

__all__ = [
    "ConfigurationBundle",
    "ProviderSettings",
    "UnitSettings",
    "load_configuration",
]
