"""Filesystem adapter over object storage."""

from .base import FileStoreAdapter
from .factory import build_adapter
from .object_operations import ObjectStorageAdapter, OperationResult

__all__ = [
    "FileStoreAdapter",
    "ObjectStorageAdapter",
    "OperationResult",
    "build_adapter",
]
