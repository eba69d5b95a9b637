"""Domain entities for the Stremio stream pipeline.

Pure value objects with no framework dependencies and no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

StremioContentType = Literal["movie", "series"]


@dataclass(frozen=True)
class MediaReference:
    """Parsed Stremio stream request.

    Created from URL path: ``tt1234567`` (movie) or
    ``tt1234567:1:5`` (series, season 1, episode 5).
    """

    imdb_id: str
    content_type: StremioContentType
    season: int | None = None
    episode: int | None = None


@dataclass(frozen=True)
class ResolvedMetadata:
    """Canonical title/year for an external id, as reported by TMDB."""

    tmdb_id: int | str
    title: str
    year: str  # "1994", or "" when the catalog has no release date
    content_type: StremioContentType


@dataclass(frozen=True)
class CandidateItem:
    """A single release parsed from the indexer feed."""

    title: str
    link: str
    pub_date: str = ""
    size_bytes: int = 0
    size: str = "Unknown"  # Human readable, e.g. "2.00 GB"
    quality_tags: tuple[str, ...] = ()
    category: str = "Unknown"

    @property
    def quality(self) -> str:
        """Quality tags joined with single spaces ("" when none were found)."""
        return " ".join(self.quality_tags)


@dataclass(frozen=True)
class StreamDescriptor:
    """Stremio protocol Stream object (one per surviving CandidateItem)."""

    name: str  # Bold title in Stremio UI, e.g. "NZBio 1080p"
    description: str  # Multi-line details below the name
    url: str  # NZB link
    filename: str = ""
    video_size: int | None = None
    binge_group: str = ""
    not_web_ready: bool = True
