"""HTTP gateway to the Hacker News search endpoint."""

from __future__ import annotations

from urllib.parse import quote

import httpx
from pydantic import ValidationError

from hnsearch.config import SearchApiSettings
from hnsearch.domain.models import SearchResult
from hnsearch.logging import logger
from hnsearch.services.exceptions import FetchFailure
from hnsearch.utils.retry import retry_async

SEARCH_PATH = "/search"
PARAM_SEARCH = "query="
PARAM_PAGE = "page="


class HackerNewsSearchClient:
    """Fetches one page of hits per call.

    Every failure mode is reported as :class:`FetchFailure`; callers never see
    raw ``httpx`` or validation errors.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: SearchApiSettings | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings or SearchApiSettings()

    def build_search_url(self, term: str, page: int = 0) -> str:
        if page < 0:
            raise ValueError("page must be non-negative")
        query = quote(term, safe="") if self._settings.encode_query else term
        return (
            f"{self._settings.search_base()}{SEARCH_PATH}"
            f"?{PARAM_SEARCH}{query}&{PARAM_PAGE}{page}"
        )

    async def fetch_page(self, term: str, page: int = 0) -> SearchResult:
        url = self.build_search_url(term, page)

        async def _request() -> httpx.Response:
            response = await self._client.get(
                url,
                timeout=self._settings.request_timeout_seconds,
            )
            response.raise_for_status()
            return response

        try:
            response = await retry_async(
                _request,
                max_attempts=self._settings.retry_attempts,
                base_delay=self._settings.retry_base_delay,
                retry_on=(httpx.TransportError, httpx.HTTPStatusError),
                logger=logger,
                operation_name="hn_search_request",
            )
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            detail = exc.response.text[:200]
            raise FetchFailure(
                f"Search request failed ({status_code}): {detail}",
                url=url,
                status_code=status_code,
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            # InvalidURL is not an HTTPError; raw terms with control characters raise it.
            raise FetchFailure(f"Search request failed: {exc}", url=url) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise FetchFailure(
                "Search response is not valid JSON",
                url=url,
                status_code=response.status_code,
            ) from exc

        try:
            result = SearchResult.model_validate(payload)
        except ValidationError as exc:
            raise FetchFailure(
                f"Search response has an unexpected shape: {exc.error_count()} error(s)",
                url=url,
                status_code=response.status_code,
            ) from exc

        logger.debug("hn_search_page_fetched", term=term, page=result.page, hits=len(result.hits))
        return result


__all__ = ["HackerNewsSearchClient"]
