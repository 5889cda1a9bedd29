"""boto3-backed implementation of the object store calls used by the adapter.

Each method performs one S3 API interaction (bulk delete may batch several)
and raises a ``StoreError`` subclass when the call fails. No retries are done
here beyond what botocore itself is configured to do.
"""

from typing import Any, Dict, Mapping, Optional, Sequence

from botocore.exceptions import BotoCoreError, ClientError

from bucketfs.core import get_logger
from bucketfs.core.exceptions import (
    ObjectNotFoundError,
    StoreError,
    StorePermissionError,
    TransientStoreError,
    ValidationError,
)
from bucketfs.objectstorage.options import (
    ACL_HEADER,
    ACL_PRIVATE,
    ACL_PUBLIC_READ,
    CACHE_CONTROL,
    CALLBACK,
    CALLBACK_VAR,
    CONTENT_DISPOSITION,
    CONTENT_LENGTH,
    CONTENT_MD5,
    CONTENT_TYPE,
    EXPIRES,
    HEADERS,
)
from bucketfs.schemas import ListPage, ObjectSummary

logger = get_logger(__name__)

# S3 caps DeleteObjects at 1000 keys per request
DELETE_BATCH_SIZE = 1000

ALL_USERS_URI = "http://acs.amazonaws.com/groups/global/AllUsers"

_PUT_ARGUMENTS = {
    CONTENT_TYPE: "ContentType",
    CONTENT_LENGTH: "ContentLength",
    CONTENT_MD5: "ContentMD5",
    CONTENT_DISPOSITION: "ContentDisposition",
    CACHE_CONTROL: "CacheControl",
    EXPIRES: "Expires",
}

_HEADER_ARGUMENTS = {
    ACL_HEADER: "ACL",
    "x-amz-storage-class": "StorageClass",
    "x-amz-server-side-encryption": "ServerSideEncryption",
    "content-language": "ContentLanguage",
    "content-encoding": "ContentEncoding",
}

_SIGNED_METHODS = {
    "GET": "get_object",
    "PUT": "put_object",
    "HEAD": "head_object",
    "DELETE": "delete_object",
}

_NOT_FOUND_CODES = {"404", "NoSuchKey", "NoSuchBucket", "NotFound"}
_PERMISSION_CODES = {
    "403",
    "AccessDenied",
    "AllAccessDisabled",
    "InvalidAccessKeyId",
    "SignatureDoesNotMatch",
}
_TRANSIENT_CODES = {
    "500",
    "503",
    "InternalError",
    "RequestTimeout",
    "ServiceUnavailable",
    "SlowDown",
    "Throttling",
}


def translate_error(
    error: Exception, operation: str, key: Optional[str] = None
) -> StoreError:
    """Map a botocore exception onto the store error hierarchy."""
    if isinstance(error, ClientError):
        code = str(error.response.get("Error", {}).get("Code", ""))
        message = f"S3 {operation} failed for '{key}': {error}"
        if code in _NOT_FOUND_CODES:
            return ObjectNotFoundError(message, key=key, code=code)
        if code in _PERMISSION_CODES:
            return StorePermissionError(message, key=key, code=code)
        if code in _TRANSIENT_CODES:
            return TransientStoreError(message, key=key, code=code)
        return StoreError(message, key=key, code=code)

    return TransientStoreError(f"S3 {operation} failed for '{key}': {error}", key=key)


def put_arguments(options: Mapping[str, Any]) -> Dict[str, Any]:
    """Convert adapter request options into put_object keyword arguments."""
    kwargs: Dict[str, Any] = {}

    for name, argument in _PUT_ARGUMENTS.items():
        if options.get(name) is not None:
            kwargs[argument] = options[name]

    metadata: Dict[str, str] = {}
    for header, value in (options.get(HEADERS) or {}).items():
        lowered = header.lower()
        if lowered in _HEADER_ARGUMENTS:
            kwargs[_HEADER_ARGUMENTS[lowered]] = value
        elif lowered.startswith("x-amz-meta-"):
            metadata[lowered[len("x-amz-meta-") :]] = str(value)
        else:
            logger.debug("Header not supported by S3 put, skipped", header=header)
    if metadata:
        kwargs["Metadata"] = metadata

    for name in (CALLBACK, CALLBACK_VAR):
        if options.get(name):
            logger.warning("Upload callbacks are not supported by S3", option=name)

    return kwargs


class S3ObjectStore:
    """Object store client over a boto3 S3 client."""

    def __init__(self, client):
        """Initialize the store.

        Args:
            client: boto3 S3 client (see S3ClientManager)
        """
        self.client = client

    def put(
        self, bucket: str, key: str, body: bytes, options: Mapping[str, Any]
    ) -> None:
        kwargs = put_arguments(options)
        logger.debug("Putting object", bucket=bucket, key=key, size=len(body))
        try:
            self.client.put_object(Bucket=bucket, Key=key, Body=body, **kwargs)
        except (ClientError, BotoCoreError) as e:
            raise translate_error(e, "put", key) from e

    def get(self, bucket: str, key: str) -> bytes:
        logger.debug("Getting object", bucket=bucket, key=key)
        try:
            response = self.client.get_object(Bucket=bucket, Key=key)
            return response["Body"].read()
        except (ClientError, BotoCoreError) as e:
            raise translate_error(e, "get", key) from e

    def delete(self, bucket: str, key: str) -> None:
        logger.debug("Deleting object", bucket=bucket, key=key)
        try:
            self.client.delete_object(Bucket=bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise translate_error(e, "delete", key) from e

    def delete_many(self, bucket: str, keys: Sequence[str]) -> None:
        """Delete a set of keys, batching requests at the S3 limit."""
        keys = list(keys)
        logger.info("Deleting objects", bucket=bucket, key_count=len(keys))

        for start in range(0, len(keys), DELETE_BATCH_SIZE):
            batch = keys[start : start + DELETE_BATCH_SIZE]
            try:
                response = self.client.delete_objects(
                    Bucket=bucket,
                    Delete={"Objects": [{"Key": key} for key in batch], "Quiet": True},
                )
            except (ClientError, BotoCoreError) as e:
                raise translate_error(e, "delete_objects", batch[0]) from e

            errors = response.get("Errors") or []
            if errors:
                first = errors[0]
                raise StoreError(
                    f"S3 delete_objects failed for {len(errors)} key(s), "
                    f"first '{first.get('Key')}': {first.get('Message')}",
                    key=first.get("Key"),
                    code=first.get("Code"),
                )

    def copy(
        self, src_bucket: str, src_key: str, dst_bucket: str, dst_key: str
    ) -> None:
        logger.debug(
            "Copying object",
            src_bucket=src_bucket,
            src_key=src_key,
            dst_bucket=dst_bucket,
            dst_key=dst_key,
        )
        try:
            self.client.copy_object(
                CopySource={"Bucket": src_bucket, "Key": src_key},
                Bucket=dst_bucket,
                Key=dst_key,
            )
        except (ClientError, BotoCoreError) as e:
            raise translate_error(e, "copy", src_key) from e

    def exists(self, bucket: str, key: str) -> bool:
        try:
            self.head_object(bucket, key)
        except ObjectNotFoundError:
            return False
        return True

    def get_acl(self, bucket: str, key: str) -> str:
        """Return ``public-read`` when anonymous users may read, else ``private``."""
        try:
            response = self.client.get_object_acl(Bucket=bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise translate_error(e, "get_acl", key) from e

        for grant in response.get("Grants", []):
            grantee = grant.get("Grantee", {})
            if grantee.get("URI") == ALL_USERS_URI and grant.get("Permission") in (
                "READ",
                "FULL_CONTROL",
            ):
                return ACL_PUBLIC_READ
        return ACL_PRIVATE

    def set_acl(self, bucket: str, key: str, acl: str) -> None:
        logger.debug("Setting object ACL", bucket=bucket, key=key, acl=acl)
        try:
            self.client.put_object_acl(Bucket=bucket, Key=key, ACL=acl)
        except (ClientError, BotoCoreError) as e:
            raise translate_error(e, "set_acl", key) from e

    def head_object(self, bucket: str, key: str) -> dict[str, Any]:
        """Return raw object headers: content-type, content-length, last-modified."""
        try:
            response = self.client.head_object(Bucket=bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise translate_error(e, "head", key) from e

        headers = response.get("ResponseMetadata", {}).get("HTTPHeaders", {})
        return {
            "content-type": response.get("ContentType"),
            "content-length": response.get("ContentLength", 0),
            "last-modified": headers.get("last-modified")
            or response.get("LastModified"),
        }

    def list_objects(
        self,
        bucket: str,
        prefix: str = "",
        delimiter: str = "/",
        max_keys: int = 1000,
        marker: str = "",
    ) -> ListPage:
        """Fetch one page of a delimiter listing."""
        kwargs: Dict[str, Any] = {
            "Bucket": bucket,
            "Prefix": prefix,
            "Delimiter": delimiter,
            "MaxKeys": max_keys,
        }
        if marker:
            kwargs["Marker"] = marker

        try:
            response = self.client.list_objects(**kwargs)
        except (ClientError, BotoCoreError) as e:
            raise translate_error(e, "list", prefix) from e

        objects = [
            ObjectSummary(
                key=obj["Key"],
                size=obj.get("Size", 0),
                last_modified=obj.get("LastModified"),
            )
            for obj in response.get("Contents", [])
        ]
        common_prefixes = [p["Prefix"] for p in response.get("CommonPrefixes", [])]

        logger.debug(
            "S3 page listed",
            bucket=bucket,
            prefix=prefix,
            object_count=len(objects),
            prefix_count=len(common_prefixes),
        )
        return ListPage(
            objects=objects,
            common_prefixes=common_prefixes,
            is_truncated=bool(response.get("IsTruncated")),
            next_marker=response.get("NextMarker"),
        )

    def create_marker_object(
        self, bucket: str, key: str, options: Mapping[str, Any]
    ) -> None:
        """Create the zero-byte object that stands for a directory."""
        marker_key = key.rstrip("/") + "/"
        options = {k: v for k, v in options.items() if k != CONTENT_LENGTH}
        self.put(bucket, marker_key, b"", options)

    def sign_url(
        self,
        bucket: str,
        key: str,
        timeout: int,
        method: str = "GET",
        options: Optional[Mapping[str, Any]] = None,
    ) -> str:
        client_method = _SIGNED_METHODS.get(method.upper())
        if client_method is None:
            raise ValidationError(f"Unsupported HTTP method for signing: {method}")

        params = {"Bucket": bucket, "Key": key}
        params.update(options or {})
        try:
            return self.client.generate_presigned_url(
                ClientMethod=client_method, Params=params, ExpiresIn=timeout
            )
        except (ClientError, BotoCoreError) as e:
            raise translate_error(e, "sign_url", key) from e
