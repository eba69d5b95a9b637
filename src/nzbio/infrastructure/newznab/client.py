"""Newznab indexer client (NZBHydra2 compatible)."""

from __future__ import annotations

import httpx
import structlog

from nzbio.infrastructure.config.schema import NewznabConfig

log = structlog.get_logger(__name__)


class HttpxNewznabClient:
    """Run ``t=search`` queries against a Newznab API endpoint.

    Implements ``IndexerPort`` from domain.ports.indexer. The raw feed body is
    returned untouched; parsing is left to ``feed_parser``.
    """

    def __init__(
        self,
        *,
        config: NewznabConfig,
        http_client: httpx.AsyncClient,
    ) -> None:
        self._api_url = config.api_url
        self._api_key = config.api_key
        self._timeout = config.timeout_seconds
        self._headers = {
            "User-Agent": config.user_agent,
            "Accept": "application/xml, application/rss+xml, text/xml",
            "Accept-Language": "en-US,en;q=0.9",
        }
        self._http = http_client

    async def search(self, query: str) -> str | None:
        params = {"apikey": self._api_key, "t": "search", "q": query}
        try:
            resp = await self._http.get(
                self._api_url,
                params=params,
                headers=self._headers,
                timeout=self._timeout,
            )
        except httpx.TimeoutException:
            log.warning("newznab_search_timeout", query=query, timeout=self._timeout)
            return None
        except httpx.HTTPError:
            log.warning("newznab_search_error", query=query, exc_info=True)
            return None

        if resp.status_code != 200:
            log.warning(
                "newznab_search_failed", query=query, status=resp.status_code
            )
            return None

        return resp.text
