"""Port for catalog (TMDB) lookups."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from nzbio.domain.entities.stremio import ResolvedMetadata


@runtime_checkable
class MetadataResolverPort(Protocol):
    """Async interface for resolving external ids to title/year."""

    async def find_by_imdb_id(self, imdb_id: str) -> ResolvedMetadata | None:
        """Lookup catalog entry by IMDb ID.

        Returns ResolvedMetadata or None if not found (or on any failure).
        """
        ...
