"""Error types raised by the eventunit package.

The dispatcher itself defines no errors: handler failures propagate unchanged
and unknown event types are no-ops. These types cover configuration, provider
selection and capability lookup.
"""

from __future__ import annotations


class EventUnitError(Exception):
    """Base error for eventunit operations."""


class ConfigurationError(EventUnitError, ValueError):
    """Configuration files or overrides are malformed."""


class UnknownProviderError(EventUnitError):
    """No provider is registered under the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown event provider '{name}'")


class ProviderDisabledError(EventUnitError):
    """The requested provider exists but is disabled in configuration."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Event provider '{name}' is disabled")


class CapabilityNotFoundError(EventUnitError, LookupError):
    """A unit was asked to execute a capability it never learned."""

    def __init__(self, capability: str) -> None:
        self.capability = capability
        super().__init__(f"Unknown capability: {capability}")


__all__ = [
    "CapabilityNotFoundError",
    "ConfigurationError",
    "EventUnitError",
    "ProviderDisabledError",
    "UnknownProviderError",
]
