"""Unit tests for the concurrent keyword + vector search aggregator."""

from __future__ import annotations

import asyncio

import pytest

from src.models.search import SearchHit
from src.services.search_aggregator import SearchAggregator
from src.utils.errors import SearchError
from tests.conftest import FakeVectorSearch, FakeWebSearch, google_hit, vector_hit


class TestSearchAggregator:
    @pytest.mark.asyncio
    async def test_both_disabled_calls_nothing(self) -> None:
        web, vector = FakeWebSearch([google_hit()]), FakeVectorSearch([vector_hit()])
        result = await SearchAggregator(web, vector).aggregate(
            "what is intersight", use_google_search=False, use_vector_search=False
        )

        assert result.googleResults == []
        assert result.vectorResults == []
        assert web.calls == []
        assert vector.calls == []

    @pytest.mark.asyncio
    async def test_one_provider_failing_keeps_the_other(self) -> None:
        web = FakeWebSearch(error=SearchError("Google search failed: Forbidden"))
        vector = FakeVectorSearch([vector_hit(1), vector_hit(2), vector_hit(3)])

        result = await SearchAggregator(web, vector).aggregate(
            "server profiles", use_google_search=True, use_vector_search=True
        )

        assert result.googleResults == []
        assert [h.document_id for h in result.vectorResults] == ["1", "2", "3"]

    @pytest.mark.asyncio
    async def test_both_failing_is_empty_not_error(self) -> None:
        web = FakeWebSearch(error=SearchError("boom"))
        vector = FakeVectorSearch(error=RuntimeError("down"))

        result = await SearchAggregator(web, vector).aggregate(
            "q", use_google_search=True, use_vector_search=True
        )

        assert (result.googleResults, result.vectorResults) == ([], [])

    @pytest.mark.asyncio
    async def test_parameters_forwarded(self) -> None:
        web, vector = FakeWebSearch(), FakeVectorSearch()
        await SearchAggregator(web, vector).aggregate(
            "q", results_limit=4, limit=7, distance=0.25,
            use_google_search=True, use_vector_search=True,
        )
        assert web.calls == [("q", 4)]
        assert vector.calls == [("q", 7, 0.25)]

    @pytest.mark.asyncio
    async def test_attribution_is_by_slot_not_completion_order(self) -> None:
        class SlowWeb(FakeWebSearch):
            async def search(self, query: str, num_results: int = 10) -> list[SearchHit]:
                await asyncio.sleep(0.01)
                return await super().search(query, num_results)

        web = SlowWeb([google_hit(1)])
        vector = FakeVectorSearch([vector_hit(1)])

        result = await SearchAggregator(web, vector).aggregate(
            "q", use_google_search=True, use_vector_search=True
        )

        assert [h.source_type for h in result.googleResults] == ["google"]
        assert [h.source_type for h in result.vectorResults] == ["vector"]

    @pytest.mark.asyncio
    async def test_default_is_vector_only(self) -> None:
        web, vector = FakeWebSearch([google_hit()]), FakeVectorSearch([vector_hit()])
        result = await SearchAggregator(web, vector).aggregate("q")
        assert web.calls == []
        assert len(result.vectorResults) == 1

    @pytest.mark.asyncio
    async def test_blank_query(self) -> None:
        vector = FakeVectorSearch([vector_hit()])
        result = await SearchAggregator(None, vector).aggregate("   ")
        assert result.vectorResults == []
        assert vector.calls == []

    @pytest.mark.asyncio
    async def test_unwired_provider_is_skipped(self) -> None:
        vector = FakeVectorSearch([vector_hit()])
        result = await SearchAggregator(None, vector).aggregate(
            "q", use_google_search=True, use_vector_search=True
        )
        assert result.googleResults == []
        assert len(result.vectorResults) == 1
