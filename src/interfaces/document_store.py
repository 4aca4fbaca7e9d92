"""Abstract base class for the remote document database proxy.

The store owns no state: every method is one authenticated HTTP call (or
a small fan-out of them) against the remote database.  No caching, no
retries, no validation beyond presence checks.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from src.models.document import ExistenceCheck


# Concrete implementation: HttpDocumentStore (src/providers/document_store/)
class IDocumentStore(ABC):
    """Contract for document CRUD, history and existence checks.

    All methods raise :class:`src.utils.errors.DocumentStoreError` on an
    upstream failure and :class:`src.utils.errors.ConfigurationError` when
    the database URL or token is unset.
    """

    @abstractmethod
    async def list_documents(self) -> list[dict[str, Any]]:
        """Return every document; a non-array upstream body yields ``[]``."""

    @abstractmethod
    async def get_document(self, document_id: str) -> dict[str, Any]:
        """Return one document by id."""

    @abstractmethod
    async def create_document(self, body: dict[str, Any]) -> dict[str, Any]:
        """Persist a new document and return the database's response."""

    @abstractmethod
    async def update_document(self, document_id: str, body: dict[str, Any]) -> None:
        """Replace a document's fields."""

    @abstractmethod
    async def delete_document(self, document_id: str) -> None:
        """Soft-delete a document."""

    @abstractmethod
    async def document_history(self, document_id: str) -> list[dict[str, Any]]:
        """Return the stored chunks / history entries of a document."""

    @abstractmethod
    async def check_exists(self, source: str) -> ExistenceCheck:
        """Classify *source* as new, soft-deleted, or active."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if URL and token are configured."""
