"""Google Custom Search provider implementing IWebSearchProvider.

Calls the Custom Search JSON API with an API key and search engine id.
The API returns at most 10 items per request, which is also the console's
default ``resultsLimit``; larger limits are clamped.  A response without
an ``items`` key simply means no results.
"""

from __future__ import annotations

import httpx
import structlog

from src.config.settings import Settings
from src.interfaces.web_search_provider import IWebSearchProvider
from src.models.search import SearchHit
from src.utils.errors import ConfigurationError, SearchError
from src.utils.json_parsing import tolerant_json

logger = structlog.get_logger(logger_name=__name__)

_ENDPOINT = "https://www.googleapis.com/customsearch/v1"
_MAX_PER_REQUEST = 10


class GoogleSearchProvider(IWebSearchProvider):
    """Keyword search via Google Custom Search."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient) -> None:
        self._api_key = settings.google_search_api_key
        self._engine_id = settings.google_search_engine_id
        self._client = http_client

    async def search(self, query: str, num_results: int = 10) -> list[SearchHit]:
        if not self.is_available():
            raise ConfigurationError(
                message="Missing environment variables for Google Search API",
                provider_name=self.get_provider_name(),
            )
        limit = max(0, num_results)
        if limit == 0:
            return []

        params = {
            "q": query,
            "key": self._api_key,
            "cx": self._engine_id,
            "num": min(limit, _MAX_PER_REQUEST),
        }
        try:
            response = await self._client.get(_ENDPOINT, params=params)
        except httpx.HTTPError as exc:
            raise SearchError(
                message=f"Google Search request failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if response.is_error:
            raise SearchError(
                message=f"Google Search API failed: {response.reason_phrase}",
                provider_name=self.get_provider_name(),
            )

        parsed = tolerant_json(response.content, expect=dict)
        if not parsed.ok:
            raise SearchError(
                message="Google Search API returned an unexpected body",
                provider_name=self.get_provider_name(),
            )

        items = parsed.value.get("items")
        if not isinstance(items, list):
            items = []
        hits = [SearchHit.from_google_item(item) for item in items if isinstance(item, dict)]
        hits = hits[:limit]

        logger.info("google_search_complete", query=query, result_count=len(hits))
        return hits

    def get_provider_name(self) -> str:
        return "google"

    def is_available(self) -> bool:
        return bool(self._api_key and self._engine_id)
