"""Permissive Newznab RSS feed parser.

Indexers (NZBHydra and friends) frequently emit feeds that are not
well-formed XML, so items are extracted with regular expressions instead of
an XML parser. Missing tags fall back to defaults; nothing raises.
"""

from __future__ import annotations

import re

from nzbio.domain.entities.quality import QUALITY_TOKENS
from nzbio.domain.entities.stremio import CandidateItem

_GB = 1024**3
_MB = 1024**2

_ITEM_RE = re.compile(r"<item(?:\s[^>]*)?>([\s\S]*?)</item>", re.IGNORECASE)
_ENCLOSURE_LENGTH_RE = re.compile(
    r"<enclosure[^>]*length=\"(\d+)\"[^>]*>", re.IGNORECASE
)
_QUALITY_RE = re.compile(
    "|".join(re.escape(token.label) for token in QUALITY_TOKENS), re.IGNORECASE
)

_TAG_RE_CACHE: dict[str, re.Pattern[str]] = {}


def _tag_re(tag: str) -> re.Pattern[str]:
    pattern = _TAG_RE_CACHE.get(tag)
    if pattern is None:
        pattern = re.compile(
            rf"<{re.escape(tag)}(?:\s[^>]*)?>([\s\S]*?)</{re.escape(tag)}>",
            re.IGNORECASE,
        )
        _TAG_RE_CACHE[tag] = pattern
    return pattern


def extract_tag(xml: str, tag: str) -> str:
    """Return the trimmed inner text of the first ``<tag>`` in *xml*, or ""."""
    match = _tag_re(tag).search(xml)
    return match.group(1).strip() if match else ""


def extract_enclosure_length(xml: str) -> int:
    """Byte length from the ``<enclosure length="...">`` attribute, 0 if absent."""
    match = _ENCLOSURE_LENGTH_RE.search(xml)
    return int(match.group(1)) if match else 0


def format_size(size_bytes: int) -> str:
    """Format a byte count as "X.XX GB" / "X.XX MB", or "Unknown" for <= 1 MiB."""
    if size_bytes > _GB:
        return f"{size_bytes / _GB:.2f} GB"
    if size_bytes > _MB:
        return f"{size_bytes / _MB:.2f} MB"
    return "Unknown"


def extract_quality_tags(title: str) -> tuple[str, ...]:
    """All quality markers in *title*, in order of appearance, as written."""
    return tuple(match.group(0) for match in _QUALITY_RE.finditer(title))


def parse_item(block: str) -> CandidateItem:
    """Build a CandidateItem from the inner text of one ``<item>`` block."""
    title = extract_tag(block, "title")
    size_bytes = extract_enclosure_length(block)
    return CandidateItem(
        title=title,
        link=extract_tag(block, "link"),
        pub_date=extract_tag(block, "pubDate"),
        size_bytes=size_bytes,
        size=format_size(size_bytes),
        quality_tags=extract_quality_tags(title),
        category=extract_tag(block, "category") or "Unknown",
    )


def parse_feed(text: str) -> list[CandidateItem]:
    """Parse a raw feed body into CandidateItems, preserving feed order."""
    if not text:
        return []
    return [parse_item(match.group(1)) for match in _ITEM_RE.finditer(text)]
