"""Tests for StremioStreamUseCase."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from nzbio.application.use_cases.stremio_stream import StremioStreamUseCase
from nzbio.domain.entities.stremio import (
    CandidateItem,
    MediaReference,
    ResolvedMetadata,
    StreamDescriptor,
)
from nzbio.infrastructure.config.schema import AddonConfig
from nzbio.infrastructure.stremio.stream_builder import StreamBuilder

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_use_case(
    tmdb: AsyncMock,
    search: AsyncMock,
    builder: object | None = None,
) -> StremioStreamUseCase:
    return StremioStreamUseCase(
        tmdb=tmdb,
        search=search,
        builder=builder or StreamBuilder(AddonConfig()),
    )


@pytest.fixture()
def mock_search() -> AsyncMock:
    search = AsyncMock()
    search.execute = AsyncMock(return_value=[])
    return search


# ---------------------------------------------------------------------------
# execute
# ---------------------------------------------------------------------------


class TestExecute:
    @pytest.mark.asyncio()
    async def test_movie_pipeline(
        self,
        mock_tmdb: AsyncMock,
        mock_search: AsyncMock,
        movie_request: MediaReference,
        movie_metadata: ResolvedMetadata,
        candidate_item: CandidateItem,
    ) -> None:
        mock_tmdb.find_by_imdb_id.return_value = movie_metadata
        mock_search.execute.return_value = [candidate_item]
        uc = _make_use_case(mock_tmdb, mock_search)

        streams = await uc.execute(movie_request)

        mock_tmdb.find_by_imdb_id.assert_awaited_once_with("tt0111161")
        mock_search.execute.assert_awaited_once_with(
            movie_metadata, season=None, episode=None
        )
        assert len(streams) == 1
        assert isinstance(streams[0], StreamDescriptor)
        assert streams[0].name == "NZBio 1080p"

    @pytest.mark.asyncio()
    async def test_episode_passes_season_and_episode(
        self,
        mock_tmdb: AsyncMock,
        mock_search: AsyncMock,
        episode_request: MediaReference,
        series_metadata: ResolvedMetadata,
    ) -> None:
        mock_tmdb.find_by_imdb_id.return_value = series_metadata
        uc = _make_use_case(mock_tmdb, mock_search)

        await uc.execute(episode_request)

        mock_search.execute.assert_awaited_once_with(
            series_metadata, season=1, episode=1
        )

    @pytest.mark.asyncio()
    async def test_metadata_not_found_skips_search(
        self,
        mock_tmdb: AsyncMock,
        mock_search: AsyncMock,
        movie_request: MediaReference,
    ) -> None:
        mock_tmdb.find_by_imdb_id.return_value = None
        uc = _make_use_case(mock_tmdb, mock_search)

        assert await uc.execute(movie_request) == []
        mock_search.execute.assert_not_awaited()

    @pytest.mark.asyncio()
    async def test_no_items_skips_builder(
        self,
        mock_tmdb: AsyncMock,
        mock_search: AsyncMock,
        movie_request: MediaReference,
        movie_metadata: ResolvedMetadata,
    ) -> None:
        mock_tmdb.find_by_imdb_id.return_value = movie_metadata
        builder = MagicMock()
        uc = _make_use_case(mock_tmdb, mock_search, builder)

        assert await uc.execute(movie_request) == []
        builder.build.assert_not_called()

    @pytest.mark.asyncio()
    async def test_one_stream_per_item_best_first(
        self,
        mock_tmdb: AsyncMock,
        mock_search: AsyncMock,
        movie_request: MediaReference,
        movie_metadata: ResolvedMetadata,
    ) -> None:
        mock_tmdb.find_by_imdb_id.return_value = movie_metadata
        mock_search.execute.return_value = [
            CandidateItem(title="a.720p", link="a", quality_tags=("720p",)),
            CandidateItem(title="b", link="b"),
            CandidateItem(title="c.2160p", link="c", quality_tags=("2160p",)),
        ]
        uc = _make_use_case(mock_tmdb, mock_search)

        streams = await uc.execute(movie_request)

        assert [s.url for s in streams] == ["c", "a", "b"]
