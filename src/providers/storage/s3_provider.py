"""AWS S3 object storage provider implementing IObjectStorageProvider.

boto3 is synchronous, so every call runs in ``asyncio.to_thread`` to keep
the event loop free while the upload is in flight.  The public URL is
composed from bucket, region and key rather than fetched from S3.
"""

from __future__ import annotations

import asyncio
from typing import Any

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError

from src.config.settings import Settings
from src.interfaces.object_storage_provider import IObjectStorageProvider, StoredObject
from src.utils.errors import IngestionError

logger = structlog.get_logger(logger_name=__name__)


def build_boto_client(service: str, settings: Settings) -> Any:
    """Create a boto3 client for *service* using explicit keys when set.

    With no keys configured boto3 falls back to its default credential
    chain (instance profile, shared config, environment).
    """
    kwargs: dict[str, Any] = {"region_name": settings.aws_region}
    if settings.aws_access_key_id and settings.aws_secret_access_key:
        kwargs["aws_access_key_id"] = settings.aws_access_key_id
        kwargs["aws_secret_access_key"] = settings.aws_secret_access_key
    return boto3.client(service, **kwargs)


class S3StorageProvider(IObjectStorageProvider):
    """Stores uploaded PDFs in a fixed bucket/region."""

    def __init__(self, settings: Settings, client: Any | None = None) -> None:
        self._bucket = settings.s3_bucket
        self._region = settings.aws_region
        self._client = client if client is not None else build_boto_client("s3", settings)

    async def put_object(self, key: str, body: bytes, content_type: str) -> StoredObject:
        try:
            await asyncio.to_thread(
                self._client.put_object,
                Bucket=self._bucket,
                Key=key,
                Body=body,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as exc:
            raise IngestionError(
                message=f"Upload to object storage failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        logger.info("s3_object_stored", bucket=self._bucket, key=key, bytes=len(body))
        return StoredObject(bucket=self._bucket, key=key, public_url=self.public_url(key))

    def public_url(self, key: str) -> str:
        return f"https://{self._bucket}.s3.{self._region}.amazonaws.com/{key}"

    def get_provider_name(self) -> str:
        return "s3"
