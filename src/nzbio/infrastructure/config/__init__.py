from __future__ import annotations

from .load import load_config
from .schema import AddonConfig, AppConfig, EnvOverrides, NewznabConfig, TmdbConfig

__all__ = [
    "AddonConfig",
    "AppConfig",
    "EnvOverrides",
    "NewznabConfig",
    "TmdbConfig",
    "load_config",
]
