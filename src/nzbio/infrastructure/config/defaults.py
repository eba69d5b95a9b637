"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "nzbio",
    "environment": "dev",
    "server": {
        "host": "0.0.0.0",
        "port": 3000,
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
    "tmdb": {
        "base_url": "https://api.themoviedb.org/3",
        "api_key": "",
        "timeout_seconds": 10.0,
    },
    "newznab": {
        "url": "http://localhost:5076",
        "api_key": "",
        "timeout_seconds": 15.0,
        "retention_days": 365,
    },
}
