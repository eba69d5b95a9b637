"""Shared fixtures for integration tests.

Config tests read the real process environment, so every variable the
loader understands is cleared first and restored afterwards.
"""

from __future__ import annotations

import pytest

_ENV_VARS = (
    "NZBIO_APP_NAME",
    "NZBIO_ENVIRONMENT",
    "NZBIO_HOST",
    "NZBIO_PORT",
    "NZBIO_LOG_LEVEL",
    "NZBIO_LOG_FORMAT",
    "NZBIO_TMDB_API_KEY",
    "NZBIO_TMDB_TIMEOUT_SECONDS",
    "NZBIO_HYDRA_URL",
    "NZBIO_HYDRA_API_KEY",
    "NZBIO_SEARCH_TIMEOUT_SECONDS",
    "NZBIO_RETENTION_DAYS",
    "PORT",
    "TMDB_API_KEY",
    "HYDRA_URL",
    "HYDRA_API_KEY",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        # setenv records the original value, so teardown also removes
        # anything a .env file loaded during the test.
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
