"""Shared test fixtures for the NZBio test suite."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from nzbio.domain.entities.stremio import (
    CandidateItem,
    MediaReference,
    ResolvedMetadata,
)
from nzbio.infrastructure.config.schema import AddonConfig, AppConfig

# ---------------------------------------------------------------------------
# Domain entity fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def movie_metadata() -> ResolvedMetadata:
    return ResolvedMetadata(
        tmdb_id=278,
        title="The Shawshank Redemption",
        year="1994",
        content_type="movie",
    )


@pytest.fixture()
def series_metadata() -> ResolvedMetadata:
    return ResolvedMetadata(
        tmdb_id=1399,
        title="Game of Thrones",
        year="2011",
        content_type="series",
    )


@pytest.fixture()
def movie_request() -> MediaReference:
    return MediaReference(imdb_id="tt0111161", content_type="movie")


@pytest.fixture()
def episode_request() -> MediaReference:
    return MediaReference(
        imdb_id="tt0944947", content_type="series", season=1, episode=1
    )


@pytest.fixture()
def candidate_item() -> CandidateItem:
    return CandidateItem(
        title="The.Shawshank.Redemption.1994.1080p.BluRay.x264",
        link="https://indexer.example/getnzb/abc123",
        pub_date="",
        size_bytes=2147483648,
        size="2.00 GB",
        quality_tags=("1080p", "BluRay", "x264"),
        category="Movies > HD",
    )


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def addon_config() -> AddonConfig:
    return AddonConfig()


@pytest.fixture()
def app_config() -> AppConfig:
    return AppConfig.model_validate(
        {
            "environment": "test",
            "tmdb": {"api_key": "tmdb-key", "base_url": "https://tmdb.test/3"},
            "newznab": {"url": "http://hydra.test:5076", "api_key": "hydra-key"},
        }
    )


# ---------------------------------------------------------------------------
# Mock port fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_tmdb() -> AsyncMock:
    """Mock MetadataResolverPort."""
    tmdb = AsyncMock()
    tmdb.find_by_imdb_id = AsyncMock(return_value=None)
    return tmdb


@pytest.fixture()
def mock_indexer() -> AsyncMock:
    """Mock IndexerPort."""
    indexer = AsyncMock()
    indexer.search = AsyncMock(return_value=None)
    return indexer
