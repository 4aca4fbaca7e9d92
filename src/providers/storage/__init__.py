"""Object storage providers for uploaded source files."""

from src.providers.storage.s3_provider import S3StorageProvider, build_boto_client

__all__ = ["S3StorageProvider", "build_boto_client"]
