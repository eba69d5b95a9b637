"""Newznab search use case.

ResolvedMetadata (+ season/episode) -> query -> indexer -> parsed feed
-> retention filter.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime

import structlog

from nzbio.domain.entities.stremio import CandidateItem, ResolvedMetadata
from nzbio.domain.ports.indexer import IndexerPort

log = structlog.get_logger(__name__)

_ParseFn = Callable[[str], list[CandidateItem]]
_Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def build_search_query(
    metadata: ResolvedMetadata,
    season: int | None = None,
    episode: int | None = None,
) -> str:
    """``"{title} {year}"`` for movies, ``"{title} SxxEyy"`` for episodes."""
    if season is not None and episode is not None:
        return f"{metadata.title} S{season:02d}E{episode:02d}"
    return f"{metadata.title} {metadata.year}".strip()


def parse_pub_date(value: str) -> datetime | None:
    """Parse an RSS (RFC 822) or ISO-8601 date. Naive values are taken as UTC."""
    if not value:
        return None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def is_within_retention(item: CandidateItem, cutoff: datetime) -> bool:
    """Keep undated and unparsable items; dated items must be >= cutoff."""
    published = parse_pub_date(item.pub_date)
    if published is None:
        return True
    return published >= cutoff


class NewznabSearchUseCase:
    """Search the indexer for a resolved title and drop stale releases.

    Never raises on upstream failures: the indexer port already reports
    them as ``None``, which becomes an empty result list here.
    """

    def __init__(
        self,
        *,
        indexer: IndexerPort,
        parse_fn: _ParseFn,
        retention_days: int,
        clock: _Clock = _utcnow,
    ) -> None:
        self._indexer = indexer
        self._parse_fn = parse_fn
        self._retention = timedelta(days=retention_days)
        self._clock = clock

    def cutoff(self) -> datetime:
        return self._clock() - self._retention

    async def execute(
        self,
        metadata: ResolvedMetadata,
        *,
        season: int | None = None,
        episode: int | None = None,
    ) -> list[CandidateItem]:
        query = build_search_query(metadata, season, episode)
        log.info("newznab_search_start", query=query)

        body = await self._indexer.search(query)
        if body is None:
            return []

        items = self._parse_fn(body)
        cutoff = self.cutoff()
        fresh = [item for item in items if is_within_retention(item, cutoff)]

        log.info(
            "newznab_search_complete",
            query=query,
            parsed_count=len(items),
            fresh_count=len(fresh),
        )
        return fresh
