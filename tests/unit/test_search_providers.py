"""Unit tests for the Google and document-database vector search providers.

HTTP is faked with ``httpx.MockTransport``; no network access.
"""

from __future__ import annotations

import json

import httpx
import pytest

from src.providers.search.document_db_vector_provider import DocumentDBVectorSearchProvider
from src.providers.search.google_search_provider import GoogleSearchProvider
from src.utils.errors import ConfigurationError, SearchError
from tests.conftest import RecordingHandler, build_settings, mock_client


def _google_items(n: int) -> dict:
    return {
        "items": [
            {
                "title": f"Result {i}",
                "link": f"https://web.test/{i}",
                "snippet": f"Snippet {i}",
                "displayLink": "web.test",
            }
            for i in range(n)
        ]
    }


# ======================================================================
# Google Custom Search
# ======================================================================


class TestGoogleSearchProvider:
    @pytest.mark.asyncio
    async def test_maps_items_and_sends_credentials(self) -> None:
        handler = RecordingHandler(httpx.Response(200, json=_google_items(3)))
        async with mock_client(handler) as client:
            provider = GoogleSearchProvider(build_settings(), client)
            hits = await provider.search("intersight policies", num_results=5)

        assert [h.source for h in hits] == [f"https://web.test/{i}" for i in range(3)]
        assert all(h.source_type == "google" for h in hits)
        params = handler.requests[0].url.params
        assert params["q"] == "intersight policies"
        assert params["key"] == "g-key"
        assert params["cx"] == "g-cx"
        assert params["num"] == "5"

    @pytest.mark.asyncio
    async def test_truncates_to_limit_and_clamps_num(self) -> None:
        handler = RecordingHandler(httpx.Response(200, json=_google_items(10)))
        async with mock_client(handler) as client:
            hits = await GoogleSearchProvider(build_settings(), client).search("q", num_results=3)
            await GoogleSearchProvider(build_settings(), client).search("q", num_results=50)

        assert len(hits) == 3
        assert handler.requests[1].url.params["num"] == "10"

    @pytest.mark.asyncio
    async def test_missing_items_means_no_results(self) -> None:
        handler = RecordingHandler(httpx.Response(200, json={"searchInformation": {}}))
        async with mock_client(handler) as client:
            assert await GoogleSearchProvider(build_settings(), client).search("q") == []

    @pytest.mark.asyncio
    async def test_non_list_items_means_no_results(self) -> None:
        handler = RecordingHandler(httpx.Response(200, json={"items": 3}))
        async with mock_client(handler) as client:
            assert await GoogleSearchProvider(build_settings(), client).search("q") == []

    @pytest.mark.asyncio
    async def test_error_status_raises(self) -> None:
        handler = RecordingHandler(httpx.Response(403, text="quota"))
        async with mock_client(handler) as client:
            with pytest.raises(SearchError, match="Forbidden"):
                await GoogleSearchProvider(build_settings(), client).search("q")

    @pytest.mark.asyncio
    async def test_non_json_body_raises(self) -> None:
        handler = RecordingHandler(httpx.Response(200, text="<html>"))
        async with mock_client(handler) as client:
            with pytest.raises(SearchError):
                await GoogleSearchProvider(build_settings(), client).search("q")

    @pytest.mark.asyncio
    async def test_unconfigured(self) -> None:
        handler = RecordingHandler(httpx.Response(200, json={}))
        async with mock_client(handler) as client:
            provider = GoogleSearchProvider(build_settings(google_search_api_key=""), client)
            with pytest.raises(ConfigurationError, match="Google Search API"):
                await provider.search("q")
        assert handler.requests == []


# ======================================================================
# Vector search on the document database
# ======================================================================


class TestDocumentDBVectorSearchProvider:
    @pytest.mark.asyncio
    async def test_query_goes_in_header(self) -> None:
        rows = [
            {"id": 1, "title": "A", "source": "s3://a", "chunk": "alpha", "distance": 0.1},
            {"id": 2, "title": "B", "source": "s3://b", "chunk": "beta", "distance": 0.3},
        ]
        handler = RecordingHandler(httpx.Response(200, json=rows))
        settings = build_settings(security_token="secret")
        async with mock_client(handler) as client:
            hits = await DocumentDBVectorSearchProvider(settings, client).search(
                "what is a server profile", limit=5, distance=0.35
            )

        request = handler.requests[0]
        assert request.url.path == "/search"
        assert request.url.params["limit"] == "5"
        assert request.url.params["distance"] == "0.35"
        assert request.headers["X-Search-Query"] == "what is a server profile"
        assert request.headers["Authorization"] == "Bearer secret"
        # backend order preserved
        assert [h.snippet for h in hits] == ["alpha", "beta"]
        assert [h.score for h in hits] == [0.1, 0.3]

    @pytest.mark.asyncio
    async def test_non_array_body_raises(self) -> None:
        handler = RecordingHandler(httpx.Response(200, content=json.dumps({"rows": []})))
        settings = build_settings(security_token="secret")
        async with mock_client(handler) as client:
            with pytest.raises(SearchError):
                await DocumentDBVectorSearchProvider(settings, client).search("q")

    @pytest.mark.asyncio
    async def test_error_status_raises(self) -> None:
        handler = RecordingHandler(httpx.Response(502))
        settings = build_settings(security_token="secret")
        async with mock_client(handler) as client:
            with pytest.raises(SearchError, match="Bad Gateway"):
                await DocumentDBVectorSearchProvider(settings, client).search("q")

    @pytest.mark.asyncio
    async def test_unconfigured(self) -> None:
        handler = RecordingHandler(httpx.Response(200, json=[]))
        async with mock_client(handler) as client:
            provider = DocumentDBVectorSearchProvider(build_settings(security_token=""), client)
            with pytest.raises(ConfigurationError, match="Missing backend configuration"):
                await provider.search("q")
