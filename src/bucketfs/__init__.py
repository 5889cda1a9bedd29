"""Hierarchical filesystem adapter for S3-compatible object storage.

Object stores hold a flat set of keys per bucket. This package presents one
bucket (optionally below a root prefix) as a filesystem: files and
directories, recursive listing, copy and rename, public/private visibility
and signed URLs.

Recommended Usage:
    >>> from bucketfs import AdapterConfig, S3ClientConfig, build_adapter
    >>> adapter = build_adapter(
    ...     AdapterConfig(
    ...         bucket="media",
    ...         prefix="uploads",
    ...         client=S3ClientConfig(aws_profile="media"),
    ...     )
    ... )
    >>> adapter.write("avatars/1.png", b"...", {"visibility": "public"})
    >>> [entry.path for entry in adapter.list_contents("avatars")]

Failures of expected kinds (missing object, denied access, store errors)
come back as False or None; see ``bucketfs.adapter.object_operations``.
"""

__version__ = "0.1.0"

from .adapter import (
    FileStoreAdapter,
    ObjectStorageAdapter,
    OperationResult,
    build_adapter,
)
from .objectstorage import (
    OptionMapper,
    PathPrefixer,
    S3ClientConfig,
    S3ClientManager,
    S3ObjectStore,
)
from .schemas import (
    DirectoryResult,
    Entry,
    EntryType,
    ObjectMetadata,
    ReadResult,
    StreamResult,
    Visibility,
    VisibilityResult,
    WriteResult,
)
from .storage_config import AdapterConfig

__all__ = [
    # Configuration
    "AdapterConfig",
    "S3ClientConfig",
    # Adapter
    "FileStoreAdapter",
    "ObjectStorageAdapter",
    "OperationResult",
    "build_adapter",
    # Building blocks
    "OptionMapper",
    "PathPrefixer",
    "S3ClientManager",
    "S3ObjectStore",
    # Records
    "DirectoryResult",
    "Entry",
    "EntryType",
    "ObjectMetadata",
    "ReadResult",
    "StreamResult",
    "Visibility",
    "VisibilityResult",
    "WriteResult",
]
