"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import State

from nzbio.infrastructure.config import AppConfig

if TYPE_CHECKING:
    from nzbio.application.use_cases import (
        NewznabSearchUseCase,
        StremioStreamUseCase,
    )
    from nzbio.domain.ports import IndexerPort, MetadataResolverPort


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig

    # Infrastructure
    http_client: httpx.AsyncClient

    # Domain Ports
    tmdb_client: MetadataResolverPort
    newznab_client: IndexerPort

    # Application Services
    newznab_search_uc: NewznabSearchUseCase
    stremio_stream_uc: StremioStreamUseCase
