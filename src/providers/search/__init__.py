"""Search provider implementations.

- GoogleSearchProvider             — keyword results from Google Custom Search
- DocumentDBVectorSearchProvider   — semantic results from the document database
"""

from src.providers.search.document_db_vector_provider import DocumentDBVectorSearchProvider
from src.providers.search.google_search_provider import GoogleSearchProvider

__all__ = ["DocumentDBVectorSearchProvider", "GoogleSearchProvider"]
