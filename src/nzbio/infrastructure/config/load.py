"""Layered configuration loading: defaults < YAML < environment < CLI."""

from __future__ import annotations

from copy import deepcopy
from functools import reduce
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from .defaults import DEFAULT_CONFIG
from .schema import AppConfig, EnvOverrides

_SECTIONS: frozenset[str] = frozenset({"server", "logging", "tmdb", "newznab", "addon"})
_TOP_LEVEL: frozenset[str] = frozenset({"app_name", "environment"})

# Flat keys (env vars, CLI flags) and the section field each one targets.
_FLAT_KEYS: dict[str, tuple[str, str]] = {
    "host": ("server", "host"),
    "port": ("server", "port"),
    "log_level": ("logging", "level"),
    "log_format": ("logging", "format"),
    "tmdb_api_key": ("tmdb", "api_key"),
    "tmdb_timeout_seconds": ("tmdb", "timeout_seconds"),
    "hydra_url": ("newznab", "url"),
    "hydra_api_key": ("newznab", "api_key"),
    "search_timeout_seconds": ("newznab", "timeout_seconds"),
    "retention_days": ("newznab", "retention_days"),
}


def _merged(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Return a new mapping where *override* wins; nested sections merge."""
    out = deepcopy(dict(base))
    for key, value in override.items():
        current = out.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            out[key] = _merged(current, value)
        else:
            out[key] = value
    return out


def _sectioned(layer: Mapping[str, Any]) -> dict[str, Any]:
    """Bring one layer into the sectioned shape; unknown keys are dropped.

    Sectioned blocks pass through as-is, flat keys are folded into the
    section listed in ``_FLAT_KEYS``. A flat key beats the same field given
    inside a section of the same layer.
    """
    out: dict[str, Any] = {k: layer[k] for k in _TOP_LEVEL if k in layer}
    for section in _SECTIONS:
        block = layer.get(section)
        if isinstance(block, Mapping):
            out[section] = dict(block)
    for flat_key, (section, field) in _FLAT_KEYS.items():
        if flat_key in layer:
            out.setdefault(section, {})[field] = layer[flat_key]
    return out


def _yaml_layer(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(config_path)
    parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Config YAML must be a mapping, got: {type(parsed)!r}")
    return parsed


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """Build the validated AppConfig.

    A ``.env`` file, when given, is loaded into the process environment
    before the environment layer is read and never replaces variables that
    are already set. No files or directories are created.
    """
    if dotenv_path is not None:
        if not dotenv_path.exists():
            raise FileNotFoundError(dotenv_path)
        load_dotenv(dotenv_path, override=False)

    layers: list[Mapping[str, Any]] = [DEFAULT_CONFIG]
    if config_path is not None:
        layers.append(_yaml_layer(config_path))
    layers.append(EnvOverrides().to_update_dict())
    layers.append(cli_overrides or {})

    merged = reduce(_merged, (_sectioned(layer) for layer in layers), {})
    return AppConfig.model_validate(merged)
