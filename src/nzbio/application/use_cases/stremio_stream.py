"""Stremio stream resolution use case.

IMDb ID -> TMDB title/year -> Newznab search -> ranked StreamDescriptors.
"""

from __future__ import annotations

from typing import Protocol

import structlog

from nzbio.domain.entities.stremio import (
    CandidateItem,
    MediaReference,
    ResolvedMetadata,
    StreamDescriptor,
)
from nzbio.domain.ports.tmdb import MetadataResolverPort

log = structlog.get_logger(__name__)


class _Searcher(Protocol):
    """Finds fresh indexer items for resolved metadata."""

    async def execute(
        self,
        metadata: ResolvedMetadata,
        *,
        season: int | None = None,
        episode: int | None = None,
    ) -> list[CandidateItem]: ...


class _StreamBuilder(Protocol):
    """Converts items into sorted StreamDescriptors."""

    def build(
        self, items: list[CandidateItem], metadata: ResolvedMetadata
    ) -> list[StreamDescriptor]: ...


class StremioStreamUseCase:
    """Resolve a Stremio stream request into sorted stream descriptors.

    Flow:
        1. Resolve IMDb ID to title/year via TMDB.
        2. Search the indexer (query built from title + year or SxxEyy).
        3. Build and rank one StreamDescriptor per fresh item.

    Returns an empty list whenever a step yields nothing; the indexer is
    not contacted when metadata cannot be resolved.
    """

    def __init__(
        self,
        *,
        tmdb: MetadataResolverPort,
        search: _Searcher,
        builder: _StreamBuilder,
    ) -> None:
        self._tmdb = tmdb
        self._search = search
        self._builder = builder

    async def execute(self, request: MediaReference) -> list[StreamDescriptor]:
        metadata = await self._tmdb.find_by_imdb_id(request.imdb_id)
        if metadata is None:
            log.info("stremio_metadata_not_found", imdb_id=request.imdb_id)
            return []

        log.info(
            "stremio_metadata_found",
            imdb_id=request.imdb_id,
            title=metadata.title,
            year=metadata.year,
        )

        items = await self._search.execute(
            metadata, season=request.season, episode=request.episode
        )
        if not items:
            log.info("stremio_no_results", imdb_id=request.imdb_id)
            return []

        streams = self._builder.build(items, metadata)
        log.info(
            "stremio_streams_built",
            imdb_id=request.imdb_id,
            item_count=len(items),
            stream_count=len(streams),
        )
        return streams
