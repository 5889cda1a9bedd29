"""Object store clients and S3 client management."""

from .base import ObjectStoreClient
from .s3_client import S3ClientConfig, S3ClientManager
from .s3_store import S3ObjectStore

__all__ = ["ObjectStoreClient", "S3ClientConfig", "S3ClientManager", "S3ObjectStore"]
