"""Filesystem operations over an S3-compatible object store.

Every operation maps a logical path onto a store key through the configured
prefix, performs one or more store calls, and converts expected store
failures (``StoreError``) into the sentinel result of the operation. The
error kind of a swallowed failure is logged and recorded on the tracing span.
Programmer errors such as an invalid visibility value propagate.

``rename`` is copy-then-delete and is not atomic: when the delete fails after
a successful copy, both paths hold the content and False is returned.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar, Union

from bucketfs.adapter.base import Config, FileStoreAdapter
from bucketfs.core import get_logger, get_tracer
from bucketfs.core.exceptions import ErrorKind, StoreError
from bucketfs.objectstorage.clients.base import ObjectStoreClient
from bucketfs.objectstorage.listing import PrefixContentsLister
from bucketfs.objectstorage.metadata import MetadataTranslator
from bucketfs.objectstorage.options import (
    CONTENT_LENGTH,
    CONTENT_TYPE,
    OptionMapper,
    acl_to_visibility,
    content_size,
    guess_mimetype,
    visibility_to_acl,
)
from bucketfs.objectstorage.paths import PathPrefixer
from bucketfs.objectstorage.urls import SignedUrlGenerator
from bucketfs.schemas import (
    DirectoryResult,
    Entry,
    ObjectMetadata,
    ReadResult,
    Visibility,
    VisibilityResult,
    WriteResult,
)

logger = get_logger(__name__)
tracer = get_tracer(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Outcome of one adapter operation, tagged with the failure kind."""

    value: Optional[T] = None
    error_kind: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    def unwrap_or(self, sentinel: Any) -> Any:
        return self.value if self.ok else sentinel


class ObjectStorageAdapter(FileStoreAdapter):
    """Hierarchical filesystem view of one bucket."""

    def __init__(
        self,
        store: ObjectStoreClient,
        bucket: str,
        prefix: Optional[str] = None,
        options: Optional[Mapping[str, Any]] = None,
        url_generator: Optional[SignedUrlGenerator] = None,
    ):
        """Initialize the adapter.

        Args:
            store: Object store client
            bucket: Bucket name
            prefix: Root prefix applied to every path
            options: Default request options merged into every write
            url_generator: URL generator override (defaults to one over ``store``)
        """
        self.store = store
        self.bucket = bucket
        self.prefixer = PathPrefixer(prefix)
        self.option_mapper = OptionMapper(options)
        self.lister = PrefixContentsLister(store, bucket, self.prefixer)
        self.url_generator = url_generator or SignedUrlGenerator(
            store, bucket, self.prefixer
        )
        logger.info(
            "Object storage adapter initialized",
            bucket=bucket,
            prefix=self.prefixer.prefix,
        )

    def get_bucket(self) -> str:
        return self.bucket

    def get_client(self) -> ObjectStoreClient:
        return self.store

    def _attempt(
        self, operation: str, path: str, func: Callable[[], T]
    ) -> OperationResult[T]:
        """Run store calls, capturing expected failures as a tagged result."""
        with tracer.start_as_current_span(f"bucketfs.{operation}") as span:
            span.set_attribute("bucketfs.bucket", self.bucket)
            span.set_attribute("bucketfs.path", path)
            try:
                value = func()
            except StoreError as e:
                span.set_attribute("bucketfs.error_kind", e.kind.value)
                logger.warning(
                    "Store operation failed",
                    operation=operation,
                    path=path,
                    error_kind=e.kind.value,
                    error=str(e),
                )
                return OperationResult(error_kind=e.kind)
            return OperationResult(value=value)

    def write(
        self, path: str, contents: Union[bytes, str], config: Config = None
    ) -> Optional[WriteResult]:
        if isinstance(contents, str):
            contents = contents.encode("utf-8")

        key = self.prefixer.apply(path)
        options = self.option_mapper.from_config(config)
        if options.get(CONTENT_LENGTH) is None:
            options[CONTENT_LENGTH] = content_size(contents)
        if options.get(CONTENT_TYPE) is None:
            options[CONTENT_TYPE] = guess_mimetype(path, contents)

        def put() -> WriteResult:
            self.store.put(self.bucket, key, contents, options)
            return WriteResult(
                path=path,
                contents=contents,
                mimetype=options[CONTENT_TYPE],
                size=options[CONTENT_LENGTH],
            )

        return self._attempt("write", path, put).unwrap_or(None)

    def update(
        self, path: str, contents: Union[bytes, str], config: Config = None
    ) -> Optional[WriteResult]:
        return self.write(path, contents, config)

    def copy(self, path: str, newpath: str) -> bool:
        source = self.prefixer.apply(path)
        target = self.prefixer.apply(newpath)

        def copy_object() -> bool:
            self.store.copy(self.bucket, source, self.bucket, target)
            return True

        return self._attempt("copy", path, copy_object).unwrap_or(False)

    def rename(self, path: str, newpath: str) -> bool:
        if not self.copy(path, newpath):
            return False
        if not self.delete(path):
            logger.warning(
                "Rename copied the object but could not remove the source",
                path=path,
                newpath=newpath,
            )
            return False
        return True

    def delete(self, path: str) -> bool:
        key = self.prefixer.apply(path)

        def delete_object() -> bool:
            self.store.delete(self.bucket, key)
            return True

        return self._attempt("delete", path, delete_object).unwrap_or(False)

    def delete_dir(self, dirname: str) -> bool:
        def delete_keys() -> bool:
            keys = self.lister.keys_for_delete(dirname)
            if keys:
                self.store.delete_many(self.bucket, keys)
            else:
                logger.info("Directory is empty, nothing to delete", dirname=dirname)
            return True

        return self._attempt("delete_dir", dirname, delete_keys).unwrap_or(False)

    def create_dir(
        self, dirname: str, config: Config = None
    ) -> Optional[DirectoryResult]:
        key = self.prefixer.apply(dirname)
        options = self.option_mapper.from_config(config)

        def create_marker() -> DirectoryResult:
            self.store.create_marker_object(self.bucket, key, options)
            return DirectoryResult(path=dirname)

        return self._attempt("create_dir", dirname, create_marker).unwrap_or(None)

    def set_visibility(
        self, path: str, visibility: Union[Visibility, str]
    ) -> Optional[ObjectMetadata]:
        key = self.prefixer.apply(path)
        acl = visibility_to_acl(visibility)

        def set_acl() -> bool:
            self.store.set_acl(self.bucket, key, acl)
            return True

        if not self._attempt("set_visibility", path, set_acl).ok:
            return None
        return self.get_metadata(path)

    def get_visibility(self, path: str) -> Optional[VisibilityResult]:
        key = self.prefixer.apply(path)

        def get_acl() -> str:
            return self.store.get_acl(self.bucket, key)

        result = self._attempt("get_visibility", path, get_acl)
        if not result.ok:
            return None
        return VisibilityResult(path=path, visibility=acl_to_visibility(result.value))

    def has(self, path: str) -> bool:
        key = self.prefixer.apply(path)
        return self._attempt(
            "has", path, lambda: self.store.exists(self.bucket, key)
        ).unwrap_or(False)

    def read(self, path: str) -> Optional[ReadResult]:
        key = self.prefixer.apply(path)

        def get_object() -> ReadResult:
            return ReadResult(path=path, contents=self.store.get(self.bucket, key))

        return self._attempt("read", path, get_object).unwrap_or(None)

    def get_metadata(self, path: str) -> Optional[ObjectMetadata]:
        key = self.prefixer.apply(path)

        def head() -> ObjectMetadata:
            raw = self.store.head_object(self.bucket, key)
            return MetadataTranslator.from_raw_metadata(path, raw)

        return self._attempt("get_metadata", path, head).unwrap_or(None)

    def list_contents(
        self, directory: str = "", recursive: bool = False
    ) -> list[Entry]:
        """List a directory; store failures propagate as StoreError."""
        with tracer.start_as_current_span("bucketfs.list_contents") as span:
            span.set_attribute("bucketfs.path", directory)
            span.set_attribute("bucketfs.recursive", recursive)
            return self.lister.list(directory, recursive)

    def get_url(self, path: str) -> str:
        """Unsigned URL of a public object.

        Raises:
            UnsupportedOperationError: If the object is private
        """
        return self.url_generator.public_url(path)

    def get_temporary_url(
        self,
        path: str,
        expiration: Union[datetime, int, float],
        options: Optional[Mapping[str, Any]] = None,
    ) -> str:
        return self.url_generator.signed_url(path, expiration, options)
