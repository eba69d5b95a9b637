from .quality import (
    QUALITY_TOKENS,
    SD_LABEL,
    TIER_TOKENS,
    TIER_TOKENS_BY_RANK,
    UNRANKED,
    QualityToken,
)
from .stremio import (
    CandidateItem,
    MediaReference,
    ResolvedMetadata,
    StreamDescriptor,
    StremioContentType,
)

__all__ = [
    "QUALITY_TOKENS",
    "SD_LABEL",
    "TIER_TOKENS",
    "TIER_TOKENS_BY_RANK",
    "UNRANKED",
    "CandidateItem",
    "MediaReference",
    "QualityToken",
    "ResolvedMetadata",
    "StreamDescriptor",
    "StremioContentType",
]
