"""Quality token vocabulary shared by feed parsing and stream ranking.

Scan order is the order tags are searched for in release titles. Tokens
with a ``rank`` also name a quality tier (lower rank = preferred).
"""

from __future__ import annotations

from dataclasses import dataclass

UNRANKED = 999
SD_LABEL = "SD"


@dataclass(frozen=True)
class QualityToken:
    label: str
    rank: int | None = None

    @property
    def is_tier(self) -> bool:
        return self.rank is not None


QUALITY_TOKENS: tuple[QualityToken, ...] = (
    QualityToken("4K", rank=2),
    QualityToken("2160p", rank=1),
    QualityToken("1080p", rank=3),
    QualityToken("720p", rank=3),
    QualityToken("480p", rank=4),
    QualityToken("HDTV"),
    QualityToken("WEB-DL"),
    QualityToken("BluRay"),
    QualityToken("HEVC"),
    QualityToken("x265"),
    QualityToken("H.265"),
    QualityToken("H264"),
    QualityToken("x264"),
)

TIER_TOKENS: tuple[QualityToken, ...] = tuple(t for t in QUALITY_TOKENS if t.is_tier)

# Tier tokens in ranking priority order (2160p, 4K, 1080p, 720p, 480p).
TIER_TOKENS_BY_RANK: tuple[QualityToken, ...] = tuple(
    sorted(TIER_TOKENS, key=lambda t: t.rank or UNRANKED)
)
