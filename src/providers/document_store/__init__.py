"""Document database adapter (HttpDocumentStore)."""

from src.providers.document_store.http_document_store import HttpDocumentStore, bearer_headers

__all__ = ["HttpDocumentStore", "bearer_headers"]
