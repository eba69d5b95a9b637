"""Turn parsed indexer items into ranked Stremio streams.

Tier detection and ranking both read ``QUALITY_TOKENS`` so the tags the
feed parser extracts are exactly the tags that can rank a stream.
"""

from __future__ import annotations

import re

from nzbio.domain.entities.quality import (
    SD_LABEL,
    TIER_TOKENS,
    TIER_TOKENS_BY_RANK,
    UNRANKED,
)
from nzbio.domain.entities.stremio import (
    CandidateItem,
    ResolvedMetadata,
    StreamDescriptor,
)
from nzbio.infrastructure.config.schema import AddonConfig

_TIER_RE = re.compile(
    "|".join(re.escape(token.label) for token in TIER_TOKENS), re.IGNORECASE
)
_RANK_PATTERNS: tuple[tuple[re.Pattern[str], int], ...] = tuple(
    (re.compile(re.escape(token.label), re.IGNORECASE), token.rank or UNRANKED)
    for token in TIER_TOKENS_BY_RANK
)
_CANONICAL_LABELS: dict[str, str] = {t.label.lower(): t.label for t in TIER_TOKENS}
_WHITESPACE_RE = re.compile(r"\s+")


def tier_label(quality: str) -> str:
    """First tier token appearing in *quality* (canonical spelling), else "SD"."""
    match = _TIER_RE.search(quality)
    if match is None:
        return SD_LABEL
    return _CANONICAL_LABELS[match.group(0).lower()]


def quality_rank(quality: str) -> int:
    """Rank of the best tier token in *quality*; lower is preferred."""
    for pattern, rank in _RANK_PATTERNS:
        if pattern.search(quality):
            return rank
    return UNRANKED


def build_description(item: CandidateItem, metadata: ResolvedMetadata) -> str:
    lines = [
        ("📁", metadata.title),
        ("🎥", item.category),
        ("📦", item.size),
        ("🎬", item.quality),
    ]
    return "\n".join(f"{icon} {value}" for icon, value in lines if value)


def build_binge_group(namespace: str, tier: str, category: str) -> str:
    """``{namespace}|{tier}|{category}`` with the category slugged."""
    slug = _WHITESPACE_RE.sub("-", category.lower())
    return f"{namespace}|{tier.lower()}|{slug}"


class StreamBuilder:
    """Build StreamDescriptors and order them best quality first.

    Sorting is stable: items sharing a rank keep their feed order.
    """

    def __init__(self, config: AddonConfig) -> None:
        self._brand = config.name
        self._namespace = config.id

    def build_one(
        self, item: CandidateItem, metadata: ResolvedMetadata
    ) -> StreamDescriptor:
        tier = tier_label(item.quality)
        return StreamDescriptor(
            name=f"{self._brand} {tier}",
            description=build_description(item, metadata),
            url=item.link,
            filename=item.title,
            video_size=item.size_bytes or None,
            binge_group=build_binge_group(self._namespace, tier, item.category),
        )

    def build(
        self, items: list[CandidateItem], metadata: ResolvedMetadata
    ) -> list[StreamDescriptor]:
        ranked = sorted(items, key=lambda item: quality_rank(item.quality))
        return [self.build_one(item, metadata) for item in ranked]
