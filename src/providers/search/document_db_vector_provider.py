"""Vector similarity search served by the remote document database.

The database exposes ``GET /search?limit=&distance=`` and expects the query
text in the ``X-Search-Query`` header (query strings are logged by too
many proxies).  It answers with a JSON array of chunk rows::

    [{"id": "...", "title": "...", "source": "...", "chunk": "...", "distance": 0.21}, ...]

Rows are normalized into :class:`SearchHit` in backend order.
"""

from __future__ import annotations

import httpx
import structlog

from src.config.settings import Settings
from src.interfaces.vector_search_provider import IVectorSearchProvider
from src.models.search import SearchHit
from src.providers.document_store.http_document_store import bearer_headers
from src.utils.errors import ConfigurationError, SearchError
from src.utils.json_parsing import tolerant_json

logger = structlog.get_logger(logger_name=__name__)


class DocumentDBVectorSearchProvider(IVectorSearchProvider):
    """Semantic search against the document database's embedding index."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient) -> None:
        self._base_url = settings.document_db_url.rstrip("/")
        self._token = settings.security_token
        self._client = http_client

    async def search(self, query: str, limit: int = 10, distance: float = 0.4) -> list[SearchHit]:
        if not self.is_available():
            raise ConfigurationError(
                message="Missing backend configuration",
                provider_name=self.get_provider_name(),
            )

        headers = {**bearer_headers(self._token), "X-Search-Query": query}
        try:
            response = await self._client.get(
                f"{self._base_url}/search",
                params={"limit": limit, "distance": distance},
                headers=headers,
            )
        except httpx.HTTPError as exc:
            raise SearchError(
                message=f"Search request failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if response.is_error:
            raise SearchError(
                message=f"Search request failed: {response.reason_phrase}",
                provider_name=self.get_provider_name(),
            )

        parsed = tolerant_json(response.content, expect=list)
        if not parsed.ok:
            raise SearchError(
                message="Vector search returned a non-array body",
                provider_name=self.get_provider_name(),
            )

        hits = [SearchHit.from_vector_row(row) for row in parsed.value if isinstance(row, dict)]
        logger.info(
            "vector_search_complete",
            limit=limit,
            distance=distance,
            result_count=len(hits),
        )
        return hits

    def get_provider_name(self) -> str:
        return "document_db_vector"

    def is_available(self) -> bool:
        return bool(self._base_url and self._token)
