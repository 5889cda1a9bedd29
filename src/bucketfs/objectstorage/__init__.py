"""Object storage translation layer for S3-compatible services."""

from .clients import ObjectStoreClient, S3ClientConfig, S3ClientManager, S3ObjectStore
from .listing import PrefixContentsLister
from .metadata import MetadataTranslator
from .options import OPTION_NAMES, OptionMapper, acl_to_visibility, visibility_to_acl
from .paths import PathPrefixer
from .urls import SignedUrlGenerator

__all__ = [
    "MetadataTranslator",
    "OPTION_NAMES",
    "ObjectStoreClient",
    "OptionMapper",
    "PathPrefixer",
    "PrefixContentsLister",
    "S3ClientConfig",
    "S3ClientManager",
    "S3ObjectStore",
    "SignedUrlGenerator",
    "acl_to_visibility",
    "visibility_to_acl",
]
