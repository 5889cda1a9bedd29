"""Construction of adapters from configuration."""

from bucketfs.adapter.object_operations import ObjectStorageAdapter
from bucketfs.core import get_logger
from bucketfs.objectstorage.clients import S3ClientManager, S3ObjectStore
from bucketfs.storage_config import AdapterConfig

logger = get_logger(__name__)


def build_adapter(config: AdapterConfig) -> ObjectStorageAdapter:
    """Create the S3 client and wire an adapter for the configured bucket."""
    client_manager = S3ClientManager(config.client)
    store = S3ObjectStore(client_manager.client)
    logger.info("Adapter built", bucket=config.bucket, prefix=config.prefix)
    return ObjectStorageAdapter(
        store,
        config.bucket,
        prefix=config.prefix,
        options=config.default_options,
    )
