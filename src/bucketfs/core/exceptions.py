"""Exception hierarchy for bucketfs."""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Classification of store-level failures."""

    not_found = "not_found"
    permission_denied = "permission_denied"
    transient = "transient"
    unknown = "unknown"


class BucketFSError(Exception):
    """Base exception for all bucketfs errors."""

    pass


class ValidationError(BucketFSError):
    """Raised when validation fails."""

    pass


class UnsupportedOperationError(BucketFSError):
    """Raised when an operation is not possible for the target object."""

    pass


class StoreError(BucketFSError):
    """Raised when a call to the object store fails."""

    kind = ErrorKind.unknown

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        code: Optional[str] = None,
    ):
        super().__init__(message)
        self.key = key
        self.code = code


class ObjectNotFoundError(StoreError):
    """Raised when an object or bucket does not exist."""

    kind = ErrorKind.not_found


class StorePermissionError(StoreError):
    """Raised when the store denies access."""

    kind = ErrorKind.permission_denied


class TransientStoreError(StoreError):
    """Raised for throttling, timeouts and server-side errors."""

    kind = ErrorKind.transient
