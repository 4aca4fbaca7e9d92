"""Utility modules for the knowledge-base console.

- **errors** -- exception hierarchy rooted at KnowledgeBaseError; each
  concern (ingestion, search, LLM, document store) raises its own
  subclass so callers handle failures without broad ``except`` blocks.
- **concurrency** -- all-settled fan-out helpers used by the search
  aggregator and document listing enrichment.
- **json_parsing** -- tolerant JSON decoding returning a success/empty
  outcome instead of raising.
- **logging** -- structlog setup: coloured console output in development,
  structured JSON in production.
"""

from src.utils.errors import (
    ConfigurationError,
    DocumentStoreError,
    IngestionError,
    InvalidInputError,
    KnowledgeBaseError,
    LLMError,
    OCRExtractionError,
    SearchError,
)
from src.utils.json_parsing import ParseOutcome, tolerant_json
from src.utils.logging import configure_logging, get_logger

__all__ = [
    "ConfigurationError",
    "DocumentStoreError",
    "IngestionError",
    "InvalidInputError",
    "KnowledgeBaseError",
    "LLMError",
    "OCRExtractionError",
    "ParseOutcome",
    "SearchError",
    "configure_logging",
    "get_logger",
    "tolerant_json",
]
