"""Concurrent keyword + vector search with partial-failure tolerance.

Both enabled providers are dispatched together and joined with an
all-settled gather, so one provider failing never cancels or fails the
other.  Results are attributed by fixed slot (keyword first, vector
second), never by completion order, and the two lists are kept apart:
no interleaving, no re-ranking.

Whatever happens, :meth:`SearchAggregator.aggregate` returns an
:class:`AggregatedSearchResults` with two lists.  The caller decides
whether zero results is an error.
"""

from __future__ import annotations

from typing import Any, Awaitable

import structlog

from src.interfaces.vector_search_provider import IVectorSearchProvider
from src.interfaces.web_search_provider import IWebSearchProvider
from src.models.search import AggregatedSearchResults, SearchHit
from src.utils.concurrency import gather_settled
from src.utils.logging import get_logger

logger: structlog.BoundLogger = get_logger(__name__)

_GOOGLE = "google"
_VECTOR = "vector"


class SearchAggregator:
    """Fans a query out to the enabled search providers.

    Parameters
    ----------
    web_search:
        Keyword search provider, or ``None`` when not wired.
    vector_search:
        Vector search provider, or ``None`` when not wired.
    """

    def __init__(
        self,
        web_search: IWebSearchProvider | None,
        vector_search: IVectorSearchProvider | None,
    ) -> None:
        self._web_search = web_search
        self._vector_search = vector_search

    async def aggregate(
        self,
        query: str,
        results_limit: int = 10,
        limit: int = 10,
        distance: float = 0.4,
        use_google_search: bool = False,
        use_vector_search: bool = True,
    ) -> AggregatedSearchResults:
        """Run the enabled providers concurrently and merge their results.

        Parameters
        ----------
        query:
            The search text.  Blank queries yield empty results.
        results_limit:
            Keyword search result count.
        limit:
            Vector search result count.
        distance:
            Maximum vector distance; ignored by keyword search.
        use_google_search, use_vector_search:
            Independent enable flags.  With both off no provider is called.
        """
        if not query or not query.strip():
            logger.warning("search_aggregate_blank_query")
            return AggregatedSearchResults.empty()

        slots: list[str] = []
        calls: list[Awaitable[list[SearchHit]]] = []
        if use_google_search and self._web_search is not None:
            slots.append(_GOOGLE)
            calls.append(self._web_search.search(query, num_results=results_limit))
        if use_vector_search and self._vector_search is not None:
            slots.append(_VECTOR)
            calls.append(self._vector_search.search(query, limit=limit, distance=distance))

        if not calls:
            return AggregatedSearchResults.empty()

        try:
            settled = await gather_settled(*calls)
        except Exception as exc:  # noqa: BLE001
            logger.error("search_aggregate_failed", error=str(exc))
            return AggregatedSearchResults.empty()

        merged: dict[str, list[SearchHit]] = {_GOOGLE: [], _VECTOR: []}
        for slot, outcome in zip(slots, settled):
            merged[slot] = self._accept(slot, outcome)

        logger.info(
            "search_aggregate_complete",
            google=len(merged[_GOOGLE]),
            vector=len(merged[_VECTOR]),
        )
        return AggregatedSearchResults(
            googleResults=merged[_GOOGLE],
            vectorResults=merged[_VECTOR],
        )

    @staticmethod
    def _accept(slot: str, outcome: Any) -> list[SearchHit]:
        if isinstance(outcome, BaseException):
            logger.warning(
                "search_provider_failed",
                provider=slot,
                error_type=type(outcome).__name__,
                error=str(outcome),
            )
            return []
        if not isinstance(outcome, list):
            logger.warning("search_provider_bad_shape", provider=slot)
            return []
        return [hit for hit in outcome if isinstance(hit, SearchHit)]
