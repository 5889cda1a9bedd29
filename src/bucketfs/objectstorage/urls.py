"""Signed and public URL generation for stored objects."""

import math
import time
from datetime import datetime
from typing import Any, Callable, Mapping, Optional, Union
from urllib.parse import urlsplit, urlunsplit

from bucketfs.core import get_logger, settings
from bucketfs.core.exceptions import UnsupportedOperationError, ValidationError
from bucketfs.objectstorage.clients.base import ObjectStoreClient
from bucketfs.objectstorage.options import ACL_PRIVATE
from bucketfs.objectstorage.paths import PathPrefixer

logger = get_logger(__name__)


class SignedUrlGenerator:
    """Produces pre-authenticated and public URLs for objects."""

    def __init__(
        self,
        store: ObjectStoreClient,
        bucket: str,
        prefixer: PathPrefixer,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store
        self.bucket = bucket
        self.prefixer = prefixer
        self.clock = clock

    def signed_url(
        self,
        path: str,
        expires_at: Union[datetime, int, float],
        options: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Create a GET URL valid until ``expires_at``.

        Args:
            path: Logical path of the object
            expires_at: Expiry as an aware datetime or epoch seconds
            options: Extra signing parameters, passed through unchanged

        Returns:
            Signed URL

        Raises:
            ValidationError: If the expiry is not in the future
            StoreError: If signing fails
        """
        if isinstance(expires_at, datetime):
            expires_at = expires_at.timestamp()
        remaining = expires_at - self.clock()
        if remaining <= 0:
            raise ValidationError(
                f"Expiry must be in the future for '{path}', got {remaining:.1f}s"
            )
        timeout = math.ceil(remaining)

        key = self.prefixer.apply(path)
        logger.debug("Signing URL", bucket=self.bucket, key=key, timeout=timeout)
        return self.store.sign_url(self.bucket, key, timeout, "GET", options or {})

    def public_url(self, path: str) -> str:
        """Return the unsigned URL of a publicly readable object.

        The store client has no accessor for the bucket's base URL, so a
        short-lived signed URL is created and its query string dropped.

        Raises:
            UnsupportedOperationError: If the object is private
            StoreError: If the ACL lookup or signing fails
        """
        key = self.prefixer.apply(path)
        if self.store.get_acl(self.bucket, key) == ACL_PRIVATE:
            raise UnsupportedOperationError(
                f"Public URLs are not available for private object '{path}'"
            )

        signed = self.signed_url(
            path, self.clock() + settings.public_url_ttl_seconds, {}
        )
        parts = urlsplit(signed)
        return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))
