"""Async httpx TMDB client used for IMDb id lookups."""

from __future__ import annotations

import re
from typing import Any

import httpx
import structlog

from nzbio.domain.entities.stremio import ResolvedMetadata
from nzbio.infrastructure.config.schema import TmdbConfig

log = structlog.get_logger(__name__)

_YEAR_RE = re.compile(r"\b(\d{4})\b")


def _extract_year(date_str: str | None) -> str:
    """Pull the four-digit year out of a TMDB date ("1994-09-23" -> "1994")."""
    if not date_str:
        return ""
    match = _YEAR_RE.search(date_str)
    return match.group(1) if match else ""


class HttpxTmdbClient:
    """Async TMDB client using a shared httpx.AsyncClient.

    Implements ``MetadataResolverPort`` from domain.ports.tmdb.
    Every failure (network, timeout, status, bad JSON) is absorbed and
    reported as "not found".
    """

    def __init__(
        self,
        *,
        config: TmdbConfig,
        http_client: httpx.AsyncClient,
    ) -> None:
        self._base_url = config.base_url.rstrip("/")
        self._api_key = config.api_key
        self._timeout = config.timeout_seconds
        self._http = http_client

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _get(self, path: str, **extra: Any) -> dict[str, Any] | None:
        """GET request with error handling. Returns parsed JSON or None."""
        url = f"{self._base_url}{path}"
        params = {"api_key": self._api_key, **extra}
        try:
            resp = await self._http.get(url, params=params, timeout=self._timeout)
            if resp.status_code == 401:
                log.error("tmdb_api_key_invalid", status=401)
                return None
            if resp.status_code == 404:
                log.debug("tmdb_resource_not_found", path=path)
                return None
            resp.raise_for_status()
            data = resp.json()
        except httpx.TimeoutException:
            log.warning("tmdb_timeout", path=path, timeout=self._timeout)
            return None
        except httpx.HTTPStatusError as exc:
            log.warning(
                "tmdb_http_error", path=path, status=exc.response.status_code
            )
            return None
        except httpx.HTTPError:
            log.warning("tmdb_network_error", path=path, exc_info=True)
            return None
        except ValueError:
            log.warning("tmdb_invalid_json", path=path)
            return None

        if not isinstance(data, dict):
            log.warning("tmdb_unexpected_payload", path=path)
            return None
        return data

    @staticmethod
    def _first_result(data: dict[str, Any], key: str) -> dict[str, Any] | None:
        """First entry of a /find result list; None when absent or malformed."""
        results = data.get(key)
        if results is None:
            return None
        if not isinstance(results, list):
            log.warning("tmdb_unexpected_payload", key=key)
            return None
        if results and isinstance(results[0], dict):
            return results[0]
        return None

    @staticmethod
    def _movie_to_metadata(movie: dict[str, Any]) -> ResolvedMetadata:
        return ResolvedMetadata(
            tmdb_id=movie.get("id", ""),
            title=movie.get("title") or movie.get("original_title") or "",
            year=_extract_year(movie.get("release_date")),
            content_type="movie",
        )

    @staticmethod
    def _tv_to_metadata(show: dict[str, Any]) -> ResolvedMetadata:
        return ResolvedMetadata(
            tmdb_id=show.get("id", ""),
            title=show.get("name") or show.get("original_name") or "",
            year=_extract_year(show.get("first_air_date")),
            content_type="series",
        )

    # ------------------------------------------------------------------
    # Public API (MetadataResolverPort)
    # ------------------------------------------------------------------

    async def find_by_imdb_id(self, imdb_id: str) -> ResolvedMetadata | None:
        """Lookup TMDB entry by IMDb ID. Movies win over TV shows."""
        data = await self._get(f"/find/{imdb_id}", external_source="imdb_id")
        if data is None:
            return None

        movie = self._first_result(data, "movie_results")
        if movie is not None:
            return self._movie_to_metadata(movie)

        show = self._first_result(data, "tv_results")
        if show is not None:
            return self._tv_to_metadata(show)

        log.info("tmdb_no_match", imdb_id=imdb_id)
        return None
