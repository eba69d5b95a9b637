"""Port for Newznab indexer searches."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IndexerPort(Protocol):
    """Async interface for a text search against a Newznab-style indexer."""

    async def search(self, query: str) -> str | None:
        """Run a search and return the raw feed body.

        Returns None on transport errors, timeouts and non-200 responses.
        """
        ...
