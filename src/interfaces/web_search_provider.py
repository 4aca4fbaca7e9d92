"""Abstract base class for keyword / web-search providers.

Implementations may wrap Google Custom Search, Bing, Brave Search or any
other engine; results are normalized into :class:`SearchHit` with
``source_type="google"``-style tagging by the concrete provider.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.search import SearchHit


# Concrete implementation: GoogleSearchProvider (src/providers/search/)
class IWebSearchProvider(ABC):
    """Contract for keyword web-search services."""

    @abstractmethod
    async def search(self, query: str, num_results: int = 10) -> list[SearchHit]:
        """Execute a web search and return at most *num_results* hits.

        Raises
        ------
        src.utils.errors.SearchError
            If the upstream call fails or answers with an unexpected shape.
        src.utils.errors.ConfigurationError
            If API credentials are not configured.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"google"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider is configured."""
