"""Core utilities and shared components for bucketfs."""

from .config import settings
from .exceptions import (
    BucketFSError,
    ErrorKind,
    StoreError,
    UnsupportedOperationError,
    ValidationError,
)
from .observability import get_logger, get_tracer

__all__ = [
    "settings",
    "BucketFSError",
    "ErrorKind",
    "StoreError",
    "UnsupportedOperationError",
    "ValidationError",
    "get_logger",
    "get_tracer",
]
