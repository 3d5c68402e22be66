"""Resolve provider names to event backend instances."""

from __future__ import annotations

import logging
from importlib import import_module
from typing import Any, Dict, List, Mapping, Optional

from eventunit.config import ProviderSettings
from eventunit.config.defaults import DEFAULT_PROVIDERS
from eventunit.errors import ProviderDisabledError, UnknownProviderError

from .backend import EventBackend

logger = logging.getLogger("eventunit.providers")


def _import_string(target: str) -> Any:
    """Import *target* which may be ``module`` or ``module:attribute``."""

    module_path, _, attr = target.partition(":")
    module = import_module(module_path)
    if attr:
        return getattr(module, attr)
    return module


def default_provider_settings() -> Dict[str, ProviderSettings]:
    """Provider table built from the packaged defaults."""

    return {
        name: ProviderSettings(
            path=payload["provider"],
            enabled=payload["enabled"],
            settings=dict(payload["config"]),
        )
        for name, payload in DEFAULT_PROVIDERS.items()
    }


class ProviderManager:
    """Instantiate event backends by provider name.

    Every call to :meth:`create` builds a fresh backend, so units created from
    the same manager never share a registry.
    """

    def __init__(self, providers: Optional[Mapping[str, ProviderSettings]] = None) -> None:
        if providers is None:
            providers = default_provider_settings()
        self._provider_defs: Dict[str, ProviderSettings] = dict(providers)

    # ------------------------------------------------------------------ registration
    def register(
        self,
        name: str,
        path: str,
        *,
        enabled: bool = True,
        settings: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Add or replace the provider *name* pointing at ``module:Class`` *path*."""

        self._provider_defs[name] = ProviderSettings(
            path=path,
            enabled=enabled,
            settings=dict(settings or {}),
        )

    # ------------------------------------------------------------------ lifecycle
    def create(self, name: str) -> EventBackend:
        """Import and instantiate the backend registered under *name*."""

        settings = self._provider_defs.get(name)
        if settings is None:
            raise UnknownProviderError(name)
        if not settings.enabled:
            raise ProviderDisabledError(name)
        cls = _import_string(settings.path)
        instance = cls(**settings.settings)
        logger.info("Created event backend '%s' (%s)", name, settings.path)
        return instance

    # ------------------------------------------------------------------ accessors
    def names(self) -> List[str]:
        """Names of every enabled provider."""

        return [name for name, settings in self._provider_defs.items() if settings.enabled]

    def get(self, name: str) -> Optional[ProviderSettings]:
        return self._provider_defs.get(name)


__all__ = ["ProviderManager", "default_provider_settings"]
