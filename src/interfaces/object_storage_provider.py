"""Abstract base class for object storage (uploaded PDFs)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class StoredObject:
    """Location of an object after a successful put.

    ``public_url`` is composed deterministically from bucket, region and
    key; it is never fetched back from the storage API.
    """

    bucket: str
    key: str
    public_url: str


# Concrete implementation: S3StorageProvider (src/providers/storage/)
class IObjectStorageProvider(ABC):
    """Contract for put-object / public-URL-by-key storage."""

    @abstractmethod
    async def put_object(self, key: str, body: bytes, content_type: str) -> StoredObject:
        """Store *body* under *key*.

        Raises
        ------
        src.utils.errors.IngestionError
            If the upload fails.
        """

    @abstractmethod
    def public_url(self, key: str) -> str:
        """Return the public URL an object stored under *key* is served from."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"s3"``."""
