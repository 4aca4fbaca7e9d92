"""Abstract base class for semantic / vector similarity search."""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.search import SearchHit


# Concrete implementation: DocumentDBVectorSearchProvider (src/providers/search/)
class IVectorSearchProvider(ABC):
    """Contract for similarity search over embedded knowledge-base chunks."""

    @abstractmethod
    async def search(self, query: str, limit: int = 10, distance: float = 0.4) -> list[SearchHit]:
        """Return up to *limit* chunks within *distance* of the query embedding.

        Ordering is whatever the backend returned (closest first).

        Raises
        ------
        src.utils.errors.SearchError
            If the backend call fails or answers with something other than
            a JSON array.
        src.utils.errors.ConfigurationError
            If the backend URL or token is not configured.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider is configured."""
