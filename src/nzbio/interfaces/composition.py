"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from nzbio.application.use_cases import NewznabSearchUseCase, StremioStreamUseCase
from nzbio.infrastructure.newznab.client import HttpxNewznabClient
from nzbio.infrastructure.newznab.feed_parser import parse_feed
from nzbio.infrastructure.stremio.stream_builder import StreamBuilder
from nzbio.infrastructure.tmdb.client import HttpxTmdbClient
from nzbio.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan Hook: Initialize and cleanup all resources (DI Composition Root).

    Order matters:
        1. HTTP Client (shared by both upstream clients)
        2. TMDB + Newznab clients
        3. Use cases
    """
    state = cast(AppState, app.state)
    config = state.config

    # 1) HTTP client; per-request timeouts are set by each upstream client
    state.http_client = httpx.AsyncClient(follow_redirects=True)
    log.info("http_client_initialized")

    # 2) Upstream clients
    state.tmdb_client = HttpxTmdbClient(
        config=config.tmdb,
        http_client=state.http_client,
    )
    state.newznab_client = HttpxNewznabClient(
        config=config.newznab,
        http_client=state.http_client,
    )
    if not config.tmdb.api_key:
        log.warning("tmdb_api_key_missing")
    if not config.newznab.api_key:
        log.warning("newznab_api_key_missing")

    # 3) Use cases
    state.newznab_search_uc = NewznabSearchUseCase(
        indexer=state.newznab_client,
        parse_fn=parse_feed,
        retention_days=config.newznab.retention_days,
    )
    state.stremio_stream_uc = StremioStreamUseCase(
        tmdb=state.tmdb_client,
        search=state.newznab_search_uc,
        builder=StreamBuilder(config.addon),
    )
    log.info(
        "app_started",
        indexer_url=config.newznab.api_url,
        retention_days=config.newznab.retention_days,
    )

    try:
        yield
    finally:
        await state.http_client.aclose()
        log.info("app_shutdown")
