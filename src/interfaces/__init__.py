"""Public interface definitions for all external service providers.

Every external API the console talks to is accessed exclusively through
the abstract base classes defined in this package.  Concrete adapters
implement these interfaces and are constructed once at startup in
``src/main.py``, then handed to services by reference.  Tests substitute
fakes without touching module globals.

CONCRETE PROVIDER MAP:
    Interface                  →  Concrete implementations (in src/providers/)
    ─────────────────────────────────────────────────────────────────────
    ILLMProvider               →  OpenAILLMProvider
    IWebSearchProvider         →  GoogleSearchProvider
    IVectorSearchProvider      →  DocumentDBVectorSearchProvider
    IDocumentStore             →  HttpDocumentStore
    IObjectStorageProvider     →  S3StorageProvider
    IOCRProvider               →  TextractOCRProvider
    IPageScraper               →  ScraperServiceProvider
    ITranscriptProvider        →  TranscriptServiceProvider
"""

from src.interfaces.content_extraction_provider import (
    IPageScraper,
    ITranscriptProvider,
    ScrapedPage,
    VideoTranscript,
)
from src.interfaces.document_store import IDocumentStore
from src.interfaces.llm_provider import ILLMProvider
from src.interfaces.object_storage_provider import IObjectStorageProvider, StoredObject
from src.interfaces.ocr_provider import IOCRProvider
from src.interfaces.vector_search_provider import IVectorSearchProvider
from src.interfaces.web_search_provider import IWebSearchProvider

__all__ = [
    "IDocumentStore",
    "ILLMProvider",
    "IOCRProvider",
    "IObjectStorageProvider",
    "IPageScraper",
    "ITranscriptProvider",
    "IVectorSearchProvider",
    "IWebSearchProvider",
    "ScrapedPage",
    "StoredObject",
    "VideoTranscript",
]
