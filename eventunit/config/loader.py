"""Configuration loader that merges defaults, files and caller overrides."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping, Optional

import yaml

from eventunit.errors import ConfigurationError

from .defaults import clone_defaults

logger = logging.getLogger("eventunit.config")


def _deep_update(base: MutableMapping[str, Any], updates: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """
    Recursively merge mapping values from `updates` into `base`.

    Nested mappings are merged into corresponding nested mutable mappings in `base`; other values overwrite `base` entries. The `base` mapping is modified in place and also returned.

    Parameters:
        base (MutableMapping[str, Any]): The mapping to update; mutated in place.
        updates (Mapping[str, Any]): The mapping providing updates to apply.

    Returns:
        MutableMapping[str, Any]: The same `base` mapping after applying the updates.
    """
    for key, value in updates.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), MutableMapping):
            _deep_update(base[key], value)  # type: ignore[index]
        else:
            base[key] = value
    return base


def _load_yaml(path: Path) -> Dict[str, Any]:
    """
    Load a YAML file and return its top-level mapping as a dictionary.

    Returns an empty dict if the file does not exist or the document is empty.

    Raises:
        ConfigurationError: If the YAML document exists but is not a mapping.
    """
    if not path.exists():
        return {}
    with path.open("r", encoding="utf8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Configuration file '{path}' must contain a mapping")
    return dict(data)


def _merge_provider(
    providers: MutableMapping[str, Any],
    name: str,
    payload: Mapping[str, Any],
    source: str,
) -> None:
    existing = providers.get(name, {})
    path = payload.get("provider") or payload.get("path") or existing.get("provider")
    if not path:
        raise ConfigurationError(f"Provider '{name}' from {source} is missing the 'provider' key")
    providers[name] = {
        "provider": path,
        "enabled": payload.get("enabled", existing.get("enabled", True)),
        "config": payload.get("config") or payload.get("settings") or existing.get("config", {}),
    }


@dataclass
class UnitSettings:
    id: str
    version: str
    provider: str
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ProviderSettings:
    path: str
    enabled: bool = True
    settings: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ConfigurationBundle:
    unit: UnitSettings
    providers: Dict[str, ProviderSettings]


def load_configuration(
    settings_dir: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> ConfigurationBundle:
    """
    Load and merge layered configuration from defaults, YAML files and caller overrides.

    Layers, lowest precedence first: the defaults in :mod:`eventunit.config.defaults`,
    ``unit.yaml`` and ``providers/*.yaml`` inside the settings directory, the
    ``EVENTUNIT_PROVIDER`` environment variable, and finally *overrides*.

    Parameters:
        settings_dir (Optional[Path]): Directory to load YAML configuration from. If not provided, resolved from the EVENTUNIT_SETTINGS_DIR environment variable or defaults to the repository's "settings" directory.
        overrides (Optional[Mapping[str, Any]]): Unit keys (``id``, ``version``, ``provider``, ``metadata``) plus an optional ``providers`` mapping shaped like the provider files.

    Returns:
        ConfigurationBundle: the unit settings and the provider table.

    Raises:
        ConfigurationError: If a file is not a mapping, a new provider lacks its import path, or the selected provider is not in the table.
    """

    root_dir = Path(__file__).resolve().parents[2]
    settings_dir = Path(
        settings_dir
        or os.environ.get("EVENTUNIT_SETTINGS_DIR")
        or (root_dir / "settings")
    )

    unit_config, providers_config = clone_defaults()

    # -- load YAML files ----------------------------------------------------------
    unit_yaml = settings_dir / "unit.yaml"
    if unit_yaml.exists():
        _deep_update(unit_config, _load_yaml(unit_yaml))

    providers_dir = settings_dir / "providers"
    if providers_dir.exists():
        for provider_file in sorted(providers_dir.glob("*.yaml")):
            payload = _load_yaml(provider_file)
            _merge_provider(providers_config, provider_file.stem, payload, f"file '{provider_file}'")

    # -- environment and caller overrides ----------------------------------------
    env_provider = os.environ.get("EVENTUNIT_PROVIDER")
    if env_provider:
        unit_config["provider"] = env_provider

    if overrides:
        override_copy = dict(overrides)
        providers_section = override_copy.pop("providers", None)
        _deep_update(unit_config, override_copy)
        if isinstance(providers_section, Mapping):
            for name, payload in providers_section.items():
                if not isinstance(payload, Mapping):
                    continue
                _merge_provider(providers_config, name, payload, "overrides")

    # -- convert provider dicts into dataclasses ----------------------------------
    provider_settings: Dict[str, ProviderSettings] = {}
    for name, payload in providers_config.items():
        path = payload.get("provider") or payload.get("path")
        if not isinstance(path, str):
            continue
        enabled = bool(payload.get("enabled", True))
        cfg = payload.get("config") or payload.get("settings") or {}
        provider_settings[name] = ProviderSettings(path=path, enabled=enabled, settings=dict(cfg))

    provider = str(unit_config.get("provider") or "memory")
    if provider not in provider_settings:
        raise ConfigurationError(f"Selected provider '{provider}' is not configured")

    metadata = unit_config.get("metadata") or {}
    if not isinstance(metadata, Mapping):
        raise ConfigurationError("Unit metadata must be a mapping")

    unit = UnitSettings(
        id=str(unit_config.get("id") or "event-unit"),
        version=str(unit_config.get("version") or "1.0.0"),
        provider=provider,
        metadata=dict(metadata),
    )
    logger.debug(
        "Loaded configuration from '%s': provider=%s, providers=%s",
        settings_dir,
        unit.provider,
        sorted(provider_settings),
    )
    return ConfigurationBundle(unit=unit, providers=provider_settings)


__all__ = [
    "ConfigurationBundle",
    "ProviderSettings",
    "UnitSettings",
    "load_configuration",
]
