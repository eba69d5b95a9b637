"""Stremio addon API endpoints (manifest, stream)."""

from __future__ import annotations

from typing import Any, cast

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.responses import Response

from nzbio.domain.entities.stremio import (
    MediaReference,
    StreamDescriptor,
    StremioContentType,
)
from nzbio.infrastructure.config.schema import AddonConfig
from nzbio.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(tags=["stremio"])

_JSON_MEDIA_TYPE = "application/json; charset=utf-8"

_CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "*",
}


def _json(content: dict[str, Any]) -> JSONResponse:
    return JSONResponse(
        content=content,
        media_type=_JSON_MEDIA_TYPE,
        headers={**_CORS_HEADERS, "Cache-Control": "no-cache"},
    )


def _build_manifest(addon: AddonConfig) -> dict[str, Any]:
    """Build the Stremio addon manifest."""
    return {
        "id": addon.id,
        "name": addon.name,
        "version": addon.version,
        "description": addon.description,
        "resources": ["stream"],
        "types": ["movie", "series"],
        "idPrefixes": list(addon.id_prefixes),
        "catalogs": [],
        "logo": addon.logo,
        "background": addon.background,
        "behaviorHints": {
            "configurable": False,
            "configurationRequired": False,
        },
    }


def _parse_stream_id(
    content_type: str,
    raw_id: str,
    id_prefixes: tuple[str, ...] = ("tt",),
) -> MediaReference | None:
    """Parse Stremio stream ID into a MediaReference.

    Movies: "tt1234567"
    Series: "tt1234567:1:5" (season 1, episode 5)

    Returns None for unknown content types, foreign id prefixes and series
    ids without a usable season/episode pair.
    """
    if content_type not in ("movie", "series"):
        return None

    ct: StremioContentType = cast(StremioContentType, content_type)

    parts = raw_id.split(":")
    imdb_id = parts[0]
    if not imdb_id.startswith(id_prefixes):
        return None

    if ct == "movie":
        return MediaReference(imdb_id=imdb_id, content_type=ct)

    if len(parts) != 3:
        return None
    try:
        season = int(parts[1])
        episode = int(parts[2])
    except ValueError:
        return None
    if season < 0 or episode < 0:
        return None
    return MediaReference(
        imdb_id=imdb_id,
        content_type=ct,
        season=season,
        episode=episode,
    )


def _format_stream(stream: StreamDescriptor) -> dict[str, Any]:
    """Convert a StreamDescriptor dataclass to Stremio JSON format."""
    hints: dict[str, Any] = {
        "notWebReady": stream.not_web_ready,
        "filename": stream.filename,
        "bingeGroup": stream.binge_group,
    }
    if stream.video_size:
        hints["videoSize"] = stream.video_size
    return {
        "name": stream.name,
        "description": stream.description,
        "url": stream.url,
        "behaviorHints": hints,
    }


@router.options("/{path:path}")
async def cors_preflight(path: str) -> Response:
    """Answer CORS preflight requests for any path."""
    return Response(status_code=204, headers=_CORS_HEADERS)


@router.get("/")
@router.get("/manifest.json")
async def stremio_manifest(request: Request) -> JSONResponse:
    """Serve the Stremio addon manifest."""
    state = cast(AppState, request.app.state)
    return _json(_build_manifest(state.config.addon))


@router.get("/stream/{content_type}/{stream_id}.json")
async def stremio_stream(
    request: Request,
    content_type: str,
    stream_id: str,
) -> JSONResponse:
    """Resolve streams for a movie or episode.

    1. Parse the Stremio stream ID (IMDb ID + optional season/episode).
    2. Run the stream use case (TMDB lookup, indexer search, ranking).
    3. Format for Stremio. Any failure answers with an empty list.
    """
    state = cast(AppState, request.app.state)

    parsed = _parse_stream_id(content_type, stream_id, state.config.addon.id_prefixes)
    if parsed is None:
        log.info("stremio_invalid_id", content_type=content_type, stream_id=stream_id)
        return _json({"streams": []})

    log.info(
        "stremio_stream_request",
        imdb_id=parsed.imdb_id,
        content_type=parsed.content_type,
        season=parsed.season,
        episode=parsed.episode,
    )

    try:
        streams = await state.stremio_stream_uc.execute(parsed)
    except Exception:
        log.warning("stremio_stream_failed", imdb_id=parsed.imdb_id, exc_info=True)
        return _json({"streams": []})

    log.info(
        "stremio_stream_response",
        imdb_id=parsed.imdb_id,
        streams_returned=len(streams),
    )
    return _json({"streams": [_format_stream(s) for s in streams]})


@router.get("/{path:path}")
async def stremio_fallback(request: Request, path: str) -> JSONResponse:
    """Unknown paths answer with the manifest."""
    state = cast(AppState, request.app.state)
    return _json(_build_manifest(state.config.addon))
